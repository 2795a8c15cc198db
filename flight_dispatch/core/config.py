from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Application metadata
    PROJECT_NAME: str = "Flight Dispatch"
    PROJECT_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # API settings
    API_V1_STR: str = "/api"

    # Database settings (the URL scheme selects the storage backend)
    DATABASE_URL: str = "sqlite:///./transportation.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    SEED_DEFAULT_DATA: bool = True
    DEFAULT_ADMIN_EMAIL: str = "admin@transport.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    # Auth settings
    JWT_SECRET: str = "default-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # CORS settings
    BACKEND_CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Redis settings
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_PASSWORD: Optional[str] = None
    REDIS_SOCKET_TIMEOUT: int = 5  # seconds
    REDIS_CONNECT_TIMEOUT: int = 5  # seconds

    # Feature flags
    ENABLE_REDIS: bool = False
    ENABLE_SCHEDULER: bool = True

    # AviationStack API Settings
    AVIATIONSTACK_API_KEY: Optional[str] = None
    AVIATIONSTACK_BASE_URL: str = "http://api.aviationstack.com/v1/"
    AVIATIONSTACK_TIMEOUT: int = 15  # seconds

    # Flight status refresh
    FLIGHT_STATUS_REFRESH_MINUTES: int = 30
    FLIGHT_STATUS_INITIAL_DELAY_SECONDS: int = 10
    FLIGHT_STATUS_REQUEST_DELAY_SECONDS: float = 0.5
    FLIGHT_STATUS_LOOKBACK_DAYS: int = 7

    # Recurring jobs
    DEFAULT_RECURRENCE_COUNT: int = 12

    # Cache settings
    CACHE_TTL: int = 300  # seconds, live flight lookups
    REFRESH_LOCK_TTL: int = 1800  # seconds, renewed before each flight of a pass

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse the CORS origins string into a list."""
        return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def redis_config(self) -> dict:
        """Get Redis connection options as a dictionary."""
        return {
            "password": self.REDIS_PASSWORD,
            "socket_timeout": self.REDIS_SOCKET_TIMEOUT,
            "socket_connect_timeout": self.REDIS_CONNECT_TIMEOUT,
        }

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env files

settings = Settings()
