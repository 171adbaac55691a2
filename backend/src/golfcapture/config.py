"""
Application Configuration
Handles all environment variables and settings
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Golf Capture"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    SECRET_KEY: str = ""

    # Database (PostgreSQL in production, SQLite for local runs)
    DATABASE_URL: str = ""

    # JWT & Authentication
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12
    MAX_LOGIN_ATTEMPTS: int = 5
    LOCKOUT_MINUTES: int = 30

    # Capture
    DEFAULT_COURSE_SLUG: str = "crescent-pointe"
    REWARD_CODE_ATTEMPTS: int = 10

    # QR codes (image rendering is delegated to an external service)
    FRONTEND_URL: str = "http://localhost:3000"
    QR_IMAGE_SERVICE_URL: str = "https://api.qrserver.com/v1/create-qr-code/"

    # Email delivery (SendGrid v3 HTTP API)
    SENDGRID_API_KEY: str = ""
    SENDGRID_BASE_URL: str = "https://api.sendgrid.com"
    EMAIL_FROM_ADDRESS: str = "noreply@golfcapture.com"
    EMAIL_FROM_NAME: str = "Golf Capture"
    EMAIL_SEND_TIMEOUT_SECONDS: float = 15.0

    # Email worker
    EMAIL_WORKER_ENABLED: bool = False
    EMAIL_WORKER_INTERVAL_SECONDS: int = 60
    EMAIL_BATCH_SIZE: int = 50

    # Twilio (SMS prospect alerts - Optional)
    TWILIO_ACCOUNT_SID: str = ""
    TWILIO_AUTH_TOKEN: str = ""
    TWILIO_PHONE_NUMBER: str = ""

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def twilio_configured(self) -> bool:
        return bool(self.TWILIO_ACCOUNT_SID and self.TWILIO_AUTH_TOKEN and self.TWILIO_PHONE_NUMBER)

    class Config:
        env_file = BASE_DIR / "src" / ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Global settings instance
settings = Settings()
