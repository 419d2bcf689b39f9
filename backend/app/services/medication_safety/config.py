"""
Configuration for the medication safety engine.
Centralizes catalog source, validation and logging settings.
"""

import json
import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel, Field

load_dotenv(find_dotenv())


class MedicationSafetyConfig(BaseModel):
    """Main configuration for the medication safety engine."""

    # Catalog source
    catalog_path: Optional[str] = Field(
        default=None,
        description="JSON file that replaces the built-in rule catalog (None = built-in)"
    )

    validate_catalog_on_load: bool = Field(
        default=True,
        description="Check threshold ordering, duplicate keys and dose ranges when a catalog is loaded"
    )

    # Contraindication matching
    blank_conditions_match: bool = Field(
        default=True,
        description="If True, an empty patient condition goes through the substring policy "
                    "and matches every contraindication; set False to skip blank entries"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level used by app.core.logging"
    )

    verbose_logging: bool = Field(
        default=False,
        description="Log every evaluation call at DEBUG level"
    )


def _config_from_env() -> MedicationSafetyConfig:
    overrides = {}
    if os.getenv("MEDSAFETY_CATALOG_PATH"):
        overrides["catalog_path"] = os.getenv("MEDSAFETY_CATALOG_PATH")
    if os.getenv("MEDSAFETY_LOG_LEVEL"):
        overrides["log_level"] = os.getenv("MEDSAFETY_LOG_LEVEL").upper()
    return MedicationSafetyConfig(**overrides)


# Global configuration instance
_config: MedicationSafetyConfig = _config_from_env()


def get_config() -> MedicationSafetyConfig:
    """Get the global configuration instance."""
    return _config


def update_config(**kwargs) -> MedicationSafetyConfig:
    """Update configuration parameters."""
    global _config
    current_dict = _config.model_dump()

    for key, value in kwargs.items():
        if key not in current_dict:
            raise ValueError(f"Unknown configuration key: {key}")
        current_dict[key] = value

    _config = MedicationSafetyConfig(**current_dict)
    return _config


def reset_config() -> MedicationSafetyConfig:
    """Restore defaults plus environment overrides."""
    global _config
    _config = _config_from_env()
    return _config


def load_config_from_file(filepath: str) -> MedicationSafetyConfig:
    """Load configuration from a JSON file."""
    global _config

    with open(filepath, 'r') as f:
        config_dict = json.load(f)

    _config = MedicationSafetyConfig(**config_dict)
    return _config


def save_config_to_file(filepath: str):
    """Save current configuration to a JSON file."""
    with open(filepath, 'w') as f:
        json.dump(_config.model_dump(), f, indent=2)
