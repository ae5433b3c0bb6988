# orderdesk/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    AUTH_SECRET_KEY: str
    AUTH_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    AUTH_LOGIN: str = "admin"          # логин первого администратора
    AUTH_PASSWORD: str = "admin"       # пароль первого администратора
    AUTH_HASH_ROUNDS: int = 535000     # раунды sha256_crypt

    DATABASE_URL: str = "sqlite+aiosqlite:///./orderdesk.db"
    DATABASE_ECHO: bool = False

    LOG_DIR: str = "orderdesk/log"
    LOG_PRINT: str = "1"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
