"""
Application configuration

Environment variables and application settings, managed with pydantic-settings
"""
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import json

# Repository root (the directory holding run.py)
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Narrata-API"
    app_env: str = "development"
    debug: bool = True

    # Database (Supabase Postgres in production: postgresql+asyncpg://...)
    database_url: str = f"sqlite+aiosqlite:///{BASE_DIR / 'data' / 'narrata.db'}"

    # CORS
    cors_origins: List[str] = ["*"]

    # Supabase Auth
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_jwt_audience: str = "authenticated"

    # LinkedIn OAuth
    linkedin_client_id: str = ""
    linkedin_client_secret: str = ""
    linkedin_scopes: str = "openid profile email"
    linkedin_timeout: float = 15.0

    # Feedback / beta signup relays
    google_apps_script_url: str = ""
    google_sheets_id: str = ""
    google_sheets_range: str = "Sheet1!A:H"
    google_sheets_api_key: str = ""
    feedback_channel: Literal["apps_script", "sheets"] = "apps_script"
    relay_timeout: float = 10.0
    fallback_store_path: str = str(BASE_DIR / "data" / "fallback_store.json")

    # People Data Labs
    pdl_api_key: str = ""
    pdl_timeout: float = 15.0
    pdl_max_retries: int = 2

    # File uploads
    max_upload_size: int = 5 * 1024 * 1024
    immediate_processing_threshold: int = 1024 * 1024
    upload_dir: str = str(BASE_DIR / "data" / "uploads")

    # LLM
    llm_model: str = "gpt-4o-mini"
    llm_api_key: str = ""
    llm_base_url: str = "https://api.openai.com/v1"
    llm_temperature: float = 0.1
    llm_timeout: int = 30
    llm_max_concurrency: int = 5

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("database_url", mode="before")
    @classmethod
    def fix_database_path(cls, v):
        if isinstance(v, str) and "./data/" in v:
            return v.replace("./data/", str(BASE_DIR / "data") + "/")
        return v

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    def integration_status(self) -> Dict[str, bool]:
        """Which optional external services have credentials"""
        if self.feedback_channel == "sheets":
            relay = bool(self.google_sheets_id and self.google_sheets_api_key)
        else:
            relay = bool(self.google_apps_script_url)
        return {
            "supabase_auth": bool(self.supabase_jwt_secret),
            "linkedin": bool(self.linkedin_client_id and self.linkedin_client_secret),
            "feedback_relay": relay,
            "people_data_labs": bool(self.pdl_api_key),
            "llm": bool(self.llm_api_key),
        }

    def local_dirs(self) -> List[Path]:
        """Directories the app writes to on local disk"""
        dirs = [Path(self.upload_dir), Path(self.fallback_store_path).parent]
        if self.database_url.startswith("sqlite") and ":memory:" not in self.database_url:
            dirs.append(Path(self.database_url.split("///", 1)[-1]).parent)
        return dirs


@lru_cache
def get_settings() -> Settings:
    """Settings singleton"""
    return Settings()


settings = get_settings()
