from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    database_url: str = "sqlite:///./nollyspot.db"
    create_tables: bool = True

    # Blockchain (checked when a chain client is first used)
    provider_url: str | None = None
    merchant_private_key: str | None = None
    merchant_address: str | None = None
    chain_receipt_timeout: float = 120.0

    # Tokens
    nollyspot_token_address: str | None = None
    nollywoodspot_token_address: str | None = None
    token_decimals: int = 18

    # Refunds
    platform_fee_percent: float = 2.5
    refund_address: str | None = None

    # HTTP
    host: str = "0.0.0.0"
    port: int = 4000
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
