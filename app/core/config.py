from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Bitcoin Rankings API"
    VERSION: str = "1.0.0"
    PORT: int = 3000

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Database Configuration
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "bitcoin_db"

    DATABASE_URL: str = ""

    # Cache Configuration
    CACHE_BACKEND: str = "redis"  # "redis" or "memory"
    REDIS_HOST: str = "localhost"
    REDIS_PORT: str = "6379"
    REDIS_URL: str = ""
    CACHE_TTL: int = 60 * 60  # 1 hour
    PRIME_CACHE_ON_STARTUP: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = ""

    def __init__(self, **data):
        super().__init__(**data)
        if not self.DATABASE_URL:
            self.DATABASE_URL = (
                f'postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}'
                f'@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
            )
        if not self.REDIS_URL and self.CACHE_BACKEND == "redis":
            self.REDIS_URL = f'redis://{self.REDIS_HOST}:{self.REDIS_PORT}/0'

    class Config:
        env_file = ".env"

settings = Settings()
