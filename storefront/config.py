from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./storefront.db"
    secret_key: str = "dev-secret-key-change-in-production"
    algorithm: str = "HS256"

    site_name: str = "Lions Vogue"
    allowed_hosts: list[str] = ["localhost", "127.0.0.1", "testserver"]
    log_level: str = "INFO"

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    mail_from: str = ""

    # Owner side channel; notifications are skipped when unset
    owner_notify_url: str = ""
    owner_notify_token: str = ""

    blob_dir: str = "./media"
    blob_base_url: str = "http://localhost:8000/media"

    order_rate_limit: str = "10/minute"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
