from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str
    DB_ECHO: bool = False
    DB_AUTO_MIGRATE: bool = True  # create missing tables on startup
    DB_POOL_SIZE: int = Field(default=10, gt=0)
    DB_MAX_OVERFLOW: int = Field(default=20, ge=0)
    DB_POOL_RECYCLE: int = 3600  # seconds

    # Application
    APP_NAME: str = "Songs Library"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None  # also write logs to LOG_DIR/songs.log

    # Server
    # Default to 0.0.0.0 for development, use env var HOST in production
    HOST: str = "0.0.0.0"  # nosec: B104
    PORT: int = 8080

    # Frontend (CORS origin)
    FRONTEND_HOST: str = "localhost"
    FRONTEND_PORT: int = 80

    # Pagination
    PAGINATION_DEFAULT_PER_PAGE: int = Field(default=10, gt=0)
    PAGINATION_MAX_PER_PAGE: int = Field(default=100, gt=0)
    PAGINATION_COUNT_TOTAL: bool = True  # False reports total=-1 on song lists
    LYRICS_VERSES_PER_PAGE: int = Field(default=4, gt=0)

    @property
    def allowed_origins_list(self) -> List[str]:
        if self.FRONTEND_PORT == 80:
            return [f"http://{self.FRONTEND_HOST}"]
        return [f"http://{self.FRONTEND_HOST}:{self.FRONTEND_PORT}"]

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )


settings = Settings()  # type: ignore
