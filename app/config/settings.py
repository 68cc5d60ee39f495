# app/config/settings.py
from pydantic_settings import BaseSettings
import os


class Settings(BaseSettings):
    # App Info
    app_name: str = "StockFlow API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./stockflow.db")
    create_tables_on_startup: bool = True

    # Security
    secret_key: str = os.getenv("SECRET_KEY", "change-in-production")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 10080

    # Server
    host: str = "0.0.0.0"
    port: int = int(os.getenv("PORT", 10000))

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'


settings = Settings()
