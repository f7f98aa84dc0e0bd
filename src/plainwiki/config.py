"""Application configuration."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("data")
    debug: bool = False
    app_title: str = "PlainWiki"
    front_page: str = "FrontPage"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PLAINWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("app_title")
    @classmethod
    def app_title_has_no_brackets(cls, value: str) -> str:
        # The view template is link-rewritten as a whole
        if "[" in value or "]" in value:
            raise ValueError("app_title must not contain '[' or ']'")
        return value


settings = Settings()
