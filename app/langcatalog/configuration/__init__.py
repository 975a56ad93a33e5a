"""Configuration module - public API.

Centralized configuration for the catalog library using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    CatalogSettings: Catalog loading settings class (for testing)
"""

from langcatalog.configuration.catalog import CatalogSettings
from langcatalog.configuration.settings import Settings, settings

__all__ = ["Settings", "CatalogSettings", "settings"]
