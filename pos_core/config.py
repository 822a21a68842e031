from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    db_driver: str = "postgresql+psycopg"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "pos"
    db_user: str = "admin"
    db_password: str = "admin123"
    # full URL wins over the individual db_* fields
    database_url: str | None = None
    echo_sql: bool = False
    access_key: str | None = None
    log_level: str = "INFO"
    reset_database_on_startup: bool = True

    class Config:
        env_file = ".env"
        env_prefix = "POS_"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        if value is None:
            return "INFO"
        return str(value).strip().upper()

    def sqlalchemy_url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
