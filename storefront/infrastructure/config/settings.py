from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    # Caps both pooled connections and concurrently dispatched database calls
    POOL_SIZE: int = 10
    SQL_ECHO: bool = False
