from pydantic_settings import BaseSettings
from typing import List
import os


class Settings(BaseSettings):
    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./langschool.db")

    # Security
    secret_key: str = os.getenv("SECRET_KEY", "your-secret-key-change-this-in-production")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    session_expire_hours: int = 24
    session_cookie_name: str = "session_token"
    reset_token_expire_minutes: int = 60

    # App
    app_name: str = "Language School API"
    public_app_url: str = os.getenv("PUBLIC_APP_URL", "http://localhost:3000")
    cors_origins: List[str] = ["*"]
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
