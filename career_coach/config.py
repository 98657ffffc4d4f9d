from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
import os

class Settings(BaseSettings):
    # Generative providers
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    groq_api_key: str = ""
    groq_model: str = "llama-3.3-70b-versatile"
    groq_base_url: str = "https://api.groq.com/openai/v1"

    # Industry insight freshness window
    insight_refresh_days: int = 7

    # Database - Railway provides DATABASE_URL, fallback to SQLite for local
    database_url: Optional[str] = None

    # Auth - tokens are issued by the identity provider, we only verify them
    auth_jwt_secret: str = ""
    auth_jwks_url: str = ""

    # App Settings
    app_name: str = "CareerCoach"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "text"  # "json" for log drains; Railway always gets JSON
    allowed_origins: str = "http://localhost:3000"
    generation_rate_limit: str = "30/hour"

    # API Settings
    backend_host: str = "0.0.0.0"
    backend_port: int = int(os.getenv("PORT", "8000"))

    class Config:
        env_file = ".env"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Railway provides postgres:// or postgresql://, SQLAlchemy async needs postgresql+asyncpg://
        db_url = self.database_url
        if not db_url:
            self.database_url = "sqlite+aiosqlite:///./career_coach.db"
        elif db_url.startswith("postgres://"):
            self.database_url = db_url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif db_url.startswith("postgresql://"):
            self.database_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)

@lru_cache()
def get_settings() -> Settings:
    return Settings()
