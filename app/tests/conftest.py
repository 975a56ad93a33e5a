import pytest

from langcatalog.configuration import CatalogSettings, Settings
from langcatalog.logging import configure_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Configure structlog once; under pytest this silences every logger."""
    configure_logging()


@pytest.fixture
def catalog_settings():
    """CatalogSettings built from explicit values, ignoring the environment."""
    return CatalogSettings(
        CATALOG_TRANSLATIONS_DIR=None,
        CATALOG_DEFAULT_LANGUAGE="en",
        CATALOG_PARSER="json",
        CATALOG_IGNORE_ERRORS=False,
        CATALOG_WITH_LINKS=False,
    )


@pytest.fixture
def test_settings(catalog_settings):
    """Settings instance wired with catalog_settings."""
    return Settings(catalog=catalog_settings)
