"""Configuration adapters."""

from dogpark_live.adapters.config.app_config import AppConfig
from dogpark_live.adapters.config.seed_data_loader import SeedData, SeedDataLoader

__all__ = ["AppConfig", "SeedData", "SeedDataLoader"]
