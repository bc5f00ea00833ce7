# calc_api/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Literal, Optional

# psycopg2 is the declared driver; SQLAlchemy 2.1 maps a bare 'postgresql://' to psycopg 3
DRIVER_SCHEME = "postgresql+psycopg2://"
BARE_SCHEMES = ("postgres://", "postgresql://")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

class Settings(BaseSettings):
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_DATABASE: str = "calculations"
    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"

    DATABASE_URL: Optional[str] = None

    HOST: str = "0.0.0.0"  # nosec B104
    PORT: int = 5000
    LOG_LEVEL: LogLevel = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    def get_database_url(self):
        if self.DATABASE_URL:
            for scheme in BARE_SCHEMES:
                if self.DATABASE_URL.startswith(scheme):
                    return DRIVER_SCHEME + self.DATABASE_URL[len(scheme):]
            return self.DATABASE_URL
        return f"{DRIVER_SCHEME}{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_DATABASE}"

settings = Settings()
