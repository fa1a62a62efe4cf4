"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./members_wheel.db")

    # Security
    ADMIN_TOKEN: str = os.getenv("ADMIN_TOKEN", "local-admin-token")
    ADMIN_SESSION_TTL_SECONDS: int = int(os.getenv("ADMIN_SESSION_TTL_SECONDS", str(60 * 60 * 24 * 30)))  # 30 days

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Admin client
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8000")
    CLIENT_SESSION_FILE: str = os.getenv(
        "CLIENT_SESSION_FILE",
        os.path.join("~", ".members_wheel", "admin_session.json")
    )
    CLIENT_TIMEOUT_SECONDS: float = float(os.getenv("CLIENT_TIMEOUT_SECONDS", "10"))

    class Config:
        env_file = ".env"

settings = Settings()
