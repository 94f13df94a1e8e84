from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SURVEYS_DIR = Path(__file__).resolve().parent / "surveys" / "data"


class Settings(BaseSettings):
    """Application runtime settings loaded from environment/.env."""

    database_url: str = Field(default="sqlite:///./survey.db", alias="DATABASE_URL")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=4000, alias="PORT")
    survey_key: str = Field(default="demo_survey", alias="SURVEY_KEY")
    surveys_dir: Path = Field(default=DEFAULT_SURVEYS_DIR, alias="SURVEYS_DIR")
    frontend_dir: Optional[Path] = Field(default=None, alias="FRONTEND_DIR")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    submit_timeout: float = Field(default=20.0, alias="SUBMIT_TIMEOUT")
    max_sessions: int = Field(default=1000, alias="MAX_SESSIONS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
