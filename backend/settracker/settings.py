from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    API_VERSION: str = "dev"
    LOG_LEVEL: str = "INFO"
    ALLOW_ORIGINS: str = "*"

    # Backing store: either a full URL or the Postgres parts below
    DATABASE_URL: str | None = None
    DB_HOST: str | None = None
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "settracker"

    # Sync client
    API_BASE_URL: str = "http://localhost:8000"
    LOCAL_STORE_PATH: str = ".settracker/local-store.json"
    SYNC_RETRY_SECONDS: float = 30.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str | None:
        """None when no backing store has been configured."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if not self.DB_HOST:
            return None
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOW_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    return Settings()
