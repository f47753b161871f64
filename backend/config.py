from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Alignment(str, Enum):
    POSITIONAL = "positional"  # frame i against frame i
    DTW = "dtw"  # dynamic time warping over joint angles


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="THROWFORM_", env_file=".env", extra="ignore")

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    # Analysis
    ALIGNMENT: Alignment = Alignment.POSITIONAL
    HISTORY_LIMIT: int = Field(100, ge=1)


settings = Settings()
