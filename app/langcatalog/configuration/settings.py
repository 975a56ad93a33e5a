"""Catalog configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from langcatalog.configuration.catalog import CatalogSettings


class Settings(BaseSettings):
    """Catalog library configuration settings - main aggregator.

    Environment Variables:
        PREFIX: Environment prefix, empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from langcatalog.configuration import settings

        default_language = settings.catalog.default_language

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    catalog: CatalogSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        if "catalog" not in kwargs:
            kwargs["catalog"] = CatalogSettings()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
