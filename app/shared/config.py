# app/shared/config.py
from pydantic import BaseModel
from dotenv import load_dotenv
import os

load_dotenv()

class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")

    # server
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8080"))
    TIMEOUT: float = float(os.getenv("TIMEOUT", "10"))  # seconds, keep-alive

    # logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str | None = os.getenv("LOG_FILE") or None

    METRICS_ENABLED: bool = os.getenv("METRICS_ENABLED", "true").lower() == "true"

settings = Settings()

def get_settings() -> Settings:
    return settings
