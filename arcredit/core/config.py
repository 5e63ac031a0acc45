from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


ALLOWED_FIAT_ORACLES = {"static", "coingecko"}
ALLOWED_BYTES_ORACLES = {"static", "gateway"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    FIAT_CACHE_TTL_MS, TURBO_FEE_PERCENTAGE, SUBSIDIZED_WINC_PERCENTAGE).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "AR Credit Pricing Service"
    debug: bool = False
    version: str = "0.1.0"

    # Upstream oracles
    # Allowed: 'static' (built-in fixed placeholders) or the live upstream kind
    fiat_oracle_kind: str = "coingecko"
    bytes_oracle_kind: str = "gateway"
    coingecko_api_url: str = "https://api.coingecko.com/api/v3"
    arweave_gateway_url: str = "https://arweave.net"
    http_timeout_seconds: float = 5.0
    http_retries: int = 2

    # Read-through caches
    fiat_cache_ttl_ms: int = 60_000
    bytes_cache_ttl_ms: int = 60_000
    bytes_cache_capacity: int = 100

    # Pricing
    turbo_fee_percentage: float = 23.4
    subsidized_winc_percentage: float = 0.0

    def init_post_load(self) -> None:
        """Validate derived and enumerated fields."""
        if self.fiat_oracle_kind not in ALLOWED_FIAT_ORACLES:
            raise ValueError(
                f"Unsupported fiat_oracle_kind '{self.fiat_oracle_kind}'. Allowed: {ALLOWED_FIAT_ORACLES}"
            )
        if self.bytes_oracle_kind not in ALLOWED_BYTES_ORACLES:
            raise ValueError(
                f"Unsupported bytes_oracle_kind '{self.bytes_oracle_kind}'. Allowed: {ALLOWED_BYTES_ORACLES}"
            )
        for name in ("turbo_fee_percentage", "subsidized_winc_percentage"):
            value = getattr(self, name)
            if not 0 <= value < 100:
                raise ValueError(f"{name} must be within [0, 100), got {value}")
        if self.fiat_cache_ttl_ms < 0 or self.bytes_cache_ttl_ms < 0:
            raise ValueError("cache ttl must not be negative")
        if self.bytes_cache_capacity <= 0:
            raise ValueError("bytes_cache_capacity must be positive")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
