from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    database_url: str = "sqlite:///./fitfolio.db"

    # JWT Configuration
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Shared secret required to self-register an administrator
    admin_registration_key: str = "admin-secret-key-2024"

    # Image uploads
    upload_dir: str = "uploads"
    max_upload_size: int = 5 * 1024 * 1024

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
