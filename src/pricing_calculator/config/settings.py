"""
Centralized settings and path configuration for the pricing calculator.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_sample_data_dir() -> Path:
    """Directory holding the bundled sample CSV data."""
    return Path(__file__).resolve().parent.parent / 'data' / 'sample'


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Directory with products/venues/members/modifier CSV files
    data_dir: Path

    log_level: str = 'INFO'
    currency_symbol: str = '£'

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings, letting PRICING_* environment variables override defaults."""
        data_dir = os.environ.get('PRICING_DATA_DIR')

        return cls(
            data_dir=Path(data_dir) if data_dir else get_sample_data_dir(),
            log_level=os.environ.get('PRICING_LOG_LEVEL', 'INFO').upper(),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
