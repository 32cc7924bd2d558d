"""Application configuration settings."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel


# Ensure environment variables from a .env file are loaded before accessing them.
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    HUB_HOST: str = os.getenv("HUB_HOST", "0.0.0.0")
    HUB_PORT: int = int(os.getenv("HUB_PORT", "9000"))
    INCLUDE_SENDER: bool = _env_flag("INCLUDE_SENDER", "true")
    IDLE_TIMEOUT: float = float(os.getenv("IDLE_TIMEOUT", "0"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
