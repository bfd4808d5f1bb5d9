# portfolio_contact/common/config.py

import os
from typing import List
from dotenv import load_dotenv
from pydantic import model_validator
from pydantic_settings import BaseSettings

# Load environment variables from the correct .env file
env_file = ".env.production" if os.getenv("APP_ENV") == "production" else ".env"
load_dotenv(env_file)

class Settings(BaseSettings):
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "info"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Origins allowed to call the API (comma-separated)
    FRONTEND_URL: str = "http://localhost:3000"

    # Mail account used both as SMTP login and as the owner's inbox
    OWNER_EMAIL: str
    OWNER_EMAIL_PASS: str = ""
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 465
    SMTP_USE_TLS: bool = True
    OWNER_SENDER_NAME: str = "Portfolio Contact"
    SITE_NAME: str = "Your Site Name"

    # Rate limiting
    CONTACT_RATE_LIMIT: str = "5/15 minutes"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # When enabled, an owner notification that went out is enough to answer 200
    # even if the confirmation to the client failed.
    CONTACT_ACCEPT_PARTIAL_DELIVERY: bool = False

    @property
    def ALLOWED_ORIGINS(self) -> List[str]:
        return [origin.strip() for origin in self.FRONTEND_URL.split(",") if origin.strip()]

    @model_validator(mode="after")
    def validate_production_secrets(self):
        """Ensure the mail password is set when running in production."""
        if self.APP_ENV == "production" and not self.OWNER_EMAIL_PASS:
            raise ValueError("Missing required secrets for production: OWNER_EMAIL_PASS")
        return self

settings = Settings()
