"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./eventdesk.db")
    DATABASE_ECHO: bool = False

    # Payment gateway (Razorpay); credentials come from the environment only
    RAZORPAY_KEY_ID: str | None = None
    RAZORPAY_KEY_SECRET: str | None = None
    RAZORPAY_API_BASE: str = "https://api.razorpay.com/v1"
    GATEWAY_TIMEOUT_SECONDS: float = 10.0

    # Email transport, resolved in this order: URL, explicit host, named service
    SMTP_URL: str | None = None
    SMTP_HOST: str | None = None
    SMTP_PORT: int | None = None
    SMTP_SECURE: bool = False
    SMTP_USER: str | None = None
    SMTP_PASSWORD: str | None = None
    EMAIL_SERVICE: str | None = None
    EMAIL_FROM: str | None = None
    SMTP_TIMEOUT_SECONDS: float = 20.0

    # WhatsApp (Twilio)
    TWILIO_ACCOUNT_SID: str | None = None
    TWILIO_AUTH_TOKEN: str | None = None
    TWILIO_WHATSAPP_FROM: str | None = None
    TWILIO_API_BASE: str = "https://api.twilio.com/2010-04-01"

    # Admin account seeded at startup
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None

    # Application
    FRONTEND_ORIGIN: str = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
    POST_PAYMENT_EMAIL_DELAY_SECONDS: float = 10.0
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    LOG_LEVEL: str = "INFO"

    # CORS
    EXTRA_ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:4000",
        "http://127.0.0.1:5500",
    ]

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def allow_origins(self) -> List[str]:
        origins = [self.FRONTEND_ORIGIN.rstrip("/")] if self.FRONTEND_ORIGIN else []
        for origin in self.EXTRA_ALLOW_ORIGINS:
            if origin not in origins:
                origins.append(origin)
        return origins

settings = Settings()
