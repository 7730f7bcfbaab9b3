import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "EduPortal"
    SECRET_KEY: str = "a_very_secret_key"
    DATABASE_URL: str = "sqlite:///eduportal.db"
    DB_ECHO: bool = False

    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    AUTH_COOKIE_NAME: str = "access_token"

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # How many students /api/top-students returns per department
    TOP_STUDENTS_LIMIT: int = 10


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
