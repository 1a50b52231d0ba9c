import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class Config(BaseModel):
    app_name: str = "Leave Management API"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./leave_management.db")

    # Auth
    secret_key: str = os.getenv("SECRET_KEY", "dev-only-insecure-key-DO-NOT-USE-IN-PROD")
    token_algorithm: str = "HS256"
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))  # 24 hours
    request_id_header: str = "X-Request-ID"

    # Logging: JSON lines by default, LOG_FORMAT=text for a terminal
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_json: bool = os.getenv("LOG_FORMAT", "json").lower() != "text"

    # Leave policy
    cancellation_window_days: int = int(os.getenv("CANCELLATION_WINDOW_DAYS", "3"))

    # Rate limiting (login only)
    rate_limit_enabled: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    login_rate_limit: str = os.getenv("LOGIN_RATE_LIMIT", "10/minute")

    # Optional admin account created at startup when both are set
    bootstrap_admin_email: Optional[str] = Field(default=os.getenv("BOOTSTRAP_ADMIN_EMAIL"))
    bootstrap_admin_password: Optional[str] = Field(default=os.getenv("BOOTSTRAP_ADMIN_PASSWORD"))

    # CORS: comma-separated origins from CORS_ORIGINS
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:4200,http://127.0.0.1:4200,"
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )

settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.environment not in ("development", "testing"):
    if "dev-only" in settings.secret_key:
        raise RuntimeError(
            "FATAL: SECRET_KEY must be set for non-development environments. "
            "Set it as an environment variable."
        )
elif "dev-only" in settings.secret_key:
    _logger.warning("Using insecure default SECRET_KEY, only acceptable in development.")
