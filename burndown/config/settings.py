"""Application settings and configuration"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Sprint Burndown"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Notion API
    NOTION_KEY: Optional[str] = None
    NOTION_BASE_URL: str = "https://api.notion.com"
    NOTION_API_VERSION: str = "2022-06-28"
    NOTION_TIMEOUT_SECONDS: float = 30.0
    NOTION_PAGE_SIZE: int = 100  # Notion's maximum page size
    NOTION_MAX_PAGES: int = 50  # Cursor pages read per database query

    # Notion databases
    NOTION_DB_BACKLOG: Optional[str] = None
    NOTION_DB_SPRINT_SUMMARY: Optional[str] = None
    NOTION_DB_DAILY_SUMMARY: Optional[str] = None

    # Notion properties
    NOTION_PROPERTY_SPRINT: str = "Sprint"
    NOTION_PROPERTY_ESTIMATE: str = "Estimate"
    NOTION_PROPERTY_PATTERN_STATUS_EXCLUDE: str = "^Done"  # Regex matched against backlog Status names

    # Burndown
    INCLUDE_WEEKENDS: bool = True
    TIMEZONE: str = "UTC"  # Decides which calendar day "today" and weekends fall on

    # Chart output
    OUTPUT_DIR: str = "./out"
    CHART_TITLE: str = "Sprint Burndown"
    CHART_WIDTH_PX: int = 500
    CHART_HEIGHT_PX: int = 300
    CHART_DPI: int = 100

    USER_AGENT: str = "SprintBurndown/1.0"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env


settings = Settings()
