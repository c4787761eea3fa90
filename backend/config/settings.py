# backend/config/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def _int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else default


class Settings:
    """Environment driven configuration (values from .env are loaded first)."""

    def __init__(self):
        self.app_name = os.getenv("APP_NAME", "Automotive Marketplace API")
        self.app_version = os.getenv("APP_VERSION", "1.0.0")
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./marketplace.db").strip()
        self.debug = _bool("DEBUG")
        self.log_level = os.getenv("LOG_LEVEL", "DEBUG" if self.debug else "INFO").upper()
        self.cors_origins = [
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        ]
        self.dashboard_poll_seconds = _int("DASHBOARD_POLL_SECONDS", 30)
        self.order_delivery_days = _int("ORDER_DELIVERY_DAYS", 5)
        self.logistics_delivery_days = _int("LOGISTICS_DELIVERY_DAYS", 3)


settings = Settings()
