"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./placement_attendance.db")
    USE_FIREBASE: bool = os.getenv("USE_FIREBASE", "false").lower() in ("1", "true", "yes")
    FIREBASE_CREDENTIALS_JSON: str | None = os.getenv("FIREBASE_CREDENTIALS_JSON")
    FIREBASE_CREDENTIALS_FILE: str | None = os.getenv("FIREBASE_CREDENTIALS_FILE")
    FIREBASE_CREDENTIALS_B64: str | None = os.getenv("FIREBASE_CREDENTIALS_B64")

    # Security
    ADMIN_TOKEN: str = os.getenv("ADMIN_TOKEN", "admin_token_123")

    # Application
    # Scan URLs stored as student QR codes are built from this value verbatim.
    BASE_URL: str = os.getenv("BASE_URL", "https://student-dashboard-sable.vercel.app")
    TIMEZONE: str = os.getenv("TIMEZONE", "Asia/Kolkata")

    # Mail
    MAIL_ENABLED: bool = os.getenv("MAIL_ENABLED", "false").lower() in ("1", "true", "yes")
    MAIL_SERVER: str = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT: int = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS: bool = os.getenv("MAIL_USE_TLS", "true").lower() in ("1", "true", "yes")
    MAIL_USERNAME: str | None = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD: str | None = os.getenv("MAIL_PASSWORD")
    MAIL_SENDER: str = os.getenv("MAIL_SENDER", "Placement Team <noreply@localhost>")
    MAIL_TIMEOUT: int = int(os.getenv("MAIL_TIMEOUT", "30"))

    # Reminder details
    EVENT_VENUE: str = os.getenv("EVENT_VENUE", "RTU Campus, Kota")
    EVENT_TIME: str = os.getenv("EVENT_TIME", "3:00 PM")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:8000",
    ]

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30

    class Config:
        env_file = ".env"

settings = Settings()
