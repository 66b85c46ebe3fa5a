from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # Application settings
    ENVIRONMENT: str = "development"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Database settings
    DB_USER: str = "bookstore_user"
    DB_PASSWORD: str = "your_strong_password"
    DB_NAME: str = "bookstore"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DATABASE_URL_OVERRIDE: Optional[str] = None  # Full SQLAlchemy URL, wins over DB_*
    SQL_ECHO: bool = False  # Set to True for SQL query debugging

    # Connection pool settings
    DB_POOL_MAX_OPEN: int = 25
    DB_POOL_MAX_IDLE: int = 20
    DB_POOL_MAX_LIFETIME: int = 300  # seconds

    # Startup behaviour
    CREATE_TABLES: bool = True
    SEED_DATABASE: bool = False  # Destructive: wipes the books table on every start

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
