"""
Application configuration settings.
Loads from .env file first (overrides shell env for local dev), then pydantic reads from environment.
Production: set env vars in the platform (Docker, K8s, etc.); .env is optional.

All backend-related configs and constants are centralized here.
"""
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env path: resumeai/.env (absolute path, works regardless of cwd)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = (_BASE_DIR / ".env").resolve()

# override=True so local .env wins over stale shell env. No-op when the file is absent.
if _ENV_FILE.exists():
    load_dotenv(_ENV_FILE, override=True)


class Settings(BaseSettings):
    """Application settings. Source: env vars (after dotenv load)."""

    # App
    app_name: str = "AI Resume Backend"
    app_version: str = "1.0.0"
    port: int = 3000
    environment: str = "development"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./resumeai.db"

    # Auth
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # Upload
    max_upload_bytes: int = 10 * 1024 * 1024

    # CORS
    cors_origins: list[str] = [
        "http://127.0.0.1:55297",
        "http://localhost:8080",
    ]

    # HTTP / network
    http_request_timeout: int = 30

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


# --- Constants (non-env, business config) ---

# Monthly generation calls per subscription tier. Unknown tiers get the free limit.
TIER_LIMITS: dict[str, int] = {
    "free": 5,
    "premium": 100,
    "enterprise": 1000,
}
DEFAULT_TIER: str = "free"

# Upload: declared media type -> stored file type
ALLOWED_MEDIA_TYPES: dict[str, str] = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "text/plain": "txt",
}

RESUME_TITLE_MAX_CHARS: int = 200
UPLOAD_PREVIEW_CHARS: int = 500

# Pagination
DEFAULT_PAGE_SIZE: int = 10

# Provider prompt limits
PROMPT_MAX_RESUME_CHARS: int = 12000
PROMPT_MAX_JD_CHARS: int = 6000
