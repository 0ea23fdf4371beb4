from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Service ---
    PROJECT_NAME: str = "Group_Dining"
    LOG_LEVEL: str = "INFO"

    # --- Storage ---
    DATABASE_URL: str = "sqlite:///./group_dining.db"
    DB_CONNECT_RETRIES: int = 10
    DB_CONNECT_WAIT_SECONDS: int = 3
    SEED_SAMPLE_MENU: bool = False

    # --- Dining behaviour ---
    TIMEZONE: str = "UTC"
    DEFAULT_SESSION_NAME: str = "New Dinner Session"
    ID_STRATEGY: str = "timestamp"  # timestamp | uuid

    # --- Configuration ---
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # other services share the same .env
    )

settings = Settings()
