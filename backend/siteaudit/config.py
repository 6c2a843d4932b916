from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    PROJECT_NAME: str = "SiteAudit"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    API_V1_STR: str = "/api/v1"

    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:3005"

    LOG_LEVEL: str = "INFO"

    # Overall score weighting per category name.
    # Names missing here weigh 0 and are left out of the overall score.
    CATEGORY_WEIGHTS: dict[str, float] = {
        "on-page": 0.20,
        "technical": 0.15,
        "accessibility": 0.10,
        "structured-data": 0.08,
        "security": 0.06,
        "robots-sitemap": 0.06,
        "aeo": 0.08,
        "geo": 0.07,
        "performance": 0.10,
        "html-validation": 0.05,
        "safe-browsing": 0.05,
    }

    # Points deducted from a category per failing check; warnings cost half
    SEVERITY_PENALTIES: dict[str, int] = {
        "critical": 15,
        "major": 10,
        "minor": 5,
        "info": 0,
    }

    # Number of snapshots returned by score trend queries
    SCORE_TREND_LIMIT: int = 7

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        if isinstance(self.CORS_ORIGINS, str):
            return [o.strip() for o in self.CORS_ORIGINS.split(",")]
        return self.CORS_ORIGINS


settings = Settings()
