from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    notion_token: str | None = Field(default=None, alias="NOTION_TOKEN")
    notion_task_database_id: str | None = Field(default=None, alias="NOTION_TASK_DATABASE_ID")
    notion_api_url: str = Field(default="https://api.notion.com/v1", alias="NOTION_API_URL")
    notion_version: str = Field(default="2022-06-28", alias="NOTION_VERSION")
    notion_timeout_s: int = Field(default=30, alias="NOTION_TIMEOUT_S")
    notion_title_property: str = Field(default="Title", alias="NOTION_TITLE_PROPERTY")
    notion_date_property: str = Field(default="Date", alias="NOTION_DATE_PROPERTY")
    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")

    # Date normalizer
    date_language: str = Field(default="ja", alias="DATE_LANGUAGE")
    date_default_to_today: bool = Field(default=True, alias="DATE_DEFAULT_TO_TODAY")
    date_allow_offset: bool = Field(default=False, alias="DATE_ALLOW_OFFSET")
    date_keywords_file: str | None = Field(default=None, alias="DATE_KEYWORDS_FILE")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
