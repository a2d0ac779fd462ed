from datetime import time
from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "telbill-billing"
    app_env: str = "dev"
    peak_start: time = time(8, 0, 0)
    peak_end: time = time(16, 0, 0)
    peak_rate: Decimal = Decimal("1.00")
    off_peak_rate: Decimal = Decimal("0.50")
    discount_threshold_minutes: int = 5
    discount_per_minute: Decimal = Decimal("0.20")
    timestamp_format: str = "%d-%m-%Y %H:%M:%S"
    default_engine: Literal["interval", "reference"] = "interval"
    log_to_console: bool = True
    log_to_file: bool = False
    log_dir: str = "logs"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="TELBILL_", env_file=".env", extra="ignore")


settings = Settings()
