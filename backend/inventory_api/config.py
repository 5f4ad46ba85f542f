import os
import tempfile
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./inventory.db"
    SQL_ECHO: bool = False
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:4200", "http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    # token signing
    SECRET_KEY: str = "change-this-secret-key-before-deploying"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_HOURS: int = 8
    BCRYPT_ROUNDS: int = 12

    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 200
    REPORT_TIMEZONE: str = "UTC"

    # per-product serialization of stock writes
    STOCK_LOCK_DIR: str = os.path.join(tempfile.gettempdir(), "inventory_api_locks")
    STOCK_LOCK_TIMEOUT_SECONDS: float = 10.0

    SEED_DB: bool = False
    RESET_DB: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
