"""SiteAudit: audit scoring and snapshot regression tracking."""

__version__ = "0.1.0"
