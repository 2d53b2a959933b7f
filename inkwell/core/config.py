# inkwell/core/config.py
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):

    # 環境設定
    ENV: str = "local"

    # データベース設定
    DATABASE_URL_OVERRIDE: Optional[str] = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "inkwell"
    POSTGRES_SERVER: str = "127.0.0.1"
    POSTGRES_PORT: int = 5432
    AUTO_MIGRATE: bool = True

    # 認証基盤(IdP)のトークン設定
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None
    ACCESS_COOKIE_NAME: str = "access_token"

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]

    # ログ設定
    LOG_SERVICE: str = "Inkwell API"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=[".env.development", ".env", ".env.local"],
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

settings = Settings()
