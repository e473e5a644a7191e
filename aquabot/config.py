from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    vk_access_token: Optional[str] = None
    vk_group_id: Optional[str] = None
    vk_api_version: str = "5.131"
    vk_api_url: str = "https://api.vk.com/method"
    long_poll_wait_seconds: int = 25
    long_poll_retry_seconds: float = 3.0

    ticketing_api_url: str = "https://apigateway.nordciti.ru/v1/aqua"
    ticketing_site_id: str = "1"
    ticketing_timeout_seconds: float = 10.0

    database_url: str = "sqlite:///./aquabot.db"
    log_level: str = "INFO"
    online_window_minutes: int = 5
    bot_worker_enabled: bool = True
    admin_token: Optional[str] = None
    debug: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
