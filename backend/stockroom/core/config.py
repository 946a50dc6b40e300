from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Stockroom"
    DATABASE_URL: str = "sqlite:///./stockroom.db"
    SEED_ON_FIRST_RUN: bool = True  # bootstrap products/categories on an empty storage
    RECENT_MOVEMENT_HOURS: int = 24
    DEFAULT_MOVEMENT_AUTHOR: str = "System"
    EXPORT_FILENAME_PREFIX: str = "inventory_export"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
