import os
import sys

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Pokedex BFF"
    API_PREFIX: str = "/api"
    PORT: int = 4000
    LOG_LEVEL: str = "INFO"

    # Browser origin of the SPA; also the target of the OAuth redirect.
    FRONTEND_URL: str = "http://localhost:5173"

    SESSION_SECRET: str = "session_secret_key"
    JWT_SECRET: str = "dev_secret"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    POKEAPI_BASE: str = "https://pokeapi.co/api/v2"
    HTTP_TIMEOUT: float = 10.0

    # Full URL wins; otherwise it is assembled from the DB_* parts.
    DATABASE_URL: str | None = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "pokedex"
    DB_USER: str = "pokedex"
    DB_PASSWORD: str = "pokedex"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0
    DB_POOL_TIMEOUT: float = 10.0

    GOOGLE_CLIENT_ID: str | None = None
    GOOGLE_CLIENT_SECRET: str | None = None
    GOOGLE_CALLBACK_URL: str = "http://localhost:4000/auth/google/callback"

    class Config:
        # Avoid picking up local .env during pytest runs.
        env_file = None if ("pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST")) else ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


settings = Settings()
