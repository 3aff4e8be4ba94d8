"""Configuration management for StellarSplit."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Currency display
    currency_code: str = "XLM"
    units_per_currency: int = 10_000_000  # stroops per XLM
    display_decimals: int = 2

    # Default ledger snapshot for the CLI
    ledger_path: Path = Path.home() / ".stellar_split" / "ledger.json"


def load_settings() -> Settings:
    """Load application settings from environment variables."""
    try:
        return Settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load settings. Check the values in your .env file.\n"
            f"Error: {e}"
        ) from e
