import json

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str

    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT_SECONDS: int = 10
    SLOW_QUERY_THRESHOLD_MS: int = 1000

    BACKEND_CORS_ORIGINS: str = '["http://localhost:5173","http://localhost:3000"]'

    API_V1_PREFIX: str = "/api"
    PROJECT_NAME: str = "CAPS360 Progress API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # slowapi limit string applied to every route
    RATE_LIMIT_DEFAULT: str = "100/15minutes"
    RATE_LIMIT_ENABLED: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def cors_origins(self) -> list[str]:
        try:
            parsed: list[str] = json.loads(self.BACKEND_CORS_ORIGINS)
            return parsed
        except json.JSONDecodeError:
            return ["http://localhost:5173", "http://localhost:3000"]


settings = Settings()
