from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ALLOWED_RATE_PROVIDERS = {"dolarvzla", "static"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., DEBUG, DATA_DIR,
    RATE_PROVIDER, BARCODE_INTER_KEY_MS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "POS Pricing Service"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "pricing.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided
    rate_slot_key: str = "exchange_rate"

    # Exchange rate provider
    # Allowed: 'dolarvzla' (public HTTP API), 'static' (fixed rate, offline use)
    rate_provider: str = "dolarvzla"
    rate_provider_url: AnyHttpUrl = "https://api.dolarvzla.com/public/exchange-rate"
    static_rate: float = Field(0.0, ge=0)
    http_timeout_seconds: float = 5.0
    http_retries: int = Field(2, ge=0)

    # Manual rate entry from the widget
    enable_rate_override: bool = True

    # Point of sale
    cash_discount_fraction: float = Field(0.30, ge=0, lt=1)

    # Barcode scanner heuristics
    barcode_inter_key_ms: float = Field(250.0, gt=0)
    barcode_min_length: int = Field(3, ge=0)
    barcode_terminator: str = "Enter"

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        if self.rate_provider not in ALLOWED_RATE_PROVIDERS:
            raise ValueError(
                f"Unsupported rate_provider '{self.rate_provider}'. Allowed: {ALLOWED_RATE_PROVIDERS}"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
