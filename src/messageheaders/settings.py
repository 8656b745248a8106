from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "INFO"
    line_length_limit: int = 0

    model_config = SettingsConfigDict(env_prefix="MESSAGEHEADERS_")


settings = Settings()
logger.level(settings.log_level)
