from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379/0"

    CALC_CACHE_TTL: int = 60   # 60 seconds

    HISTORY_MAX_ITEMS: int = 50
    DEFAULT_CLIENT_ID: str = "anonymous"

    API_TITLE: str = "Car Cost Calculator"
    API_DESCRIPTION: str = "Annual cost of owning a car in Sweden: fuel, depreciation, financing and fixed costs"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
