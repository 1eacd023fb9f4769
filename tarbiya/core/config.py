from pydantic_settings import BaseSettings, SettingsConfigDict
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TARBIYA_", env_file=".env", extra="ignore")
    DATABASE_URL: str = "sqlite:///./tarbiya.db"
    SQL_ECHO: bool = False

    SECRET_KEY: str = "change-me"
    ACCESS_TOKEN_MIN: int = 60 * 24
    REFRESH_TOKEN_DAYS: int = 30
    BCRYPT_ROUNDS: int = 12

    # Non-premium accounts may own this many children
    FREE_CHILD_LIMIT: int = 1
    INVITE_CODE_LENGTH: int = 6
    INVITE_CODE_ATTEMPTS: int = 10

    LOG_LEVEL: str = "INFO"
settings = Settings()
