from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/rental.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 5

    REDIS_URL: Optional[str] = None

    IDEMPOTENCY_TTL: int = 300  # 5 minutes
    PRICE_CACHE_TTL: int = 60   # 60 seconds

    VERIFY_TOTAL_PRICE: bool = True
    BOOKING_SUCCESS_MESSAGE: str = "Pemesanan berhasil!"

    CORS_ORIGINS: List[str] = ["*"]

    API_TITLE: str = "Car Rental Booking Service"
    API_DESCRIPTION: str = "Vehicle catalog, price quotes and booking submission"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
