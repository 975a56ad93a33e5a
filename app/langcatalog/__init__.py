"""langcatalog - in-memory catalog of translated strings.

Example:
    from langcatalog import CatalogBuilder

    catalog = CatalogBuilder("en").add_from_dir("locales").build()
    catalog.translate("fr", "greet", "hi")
"""

from langcatalog.i18n import (
    AsyncCatalogBuilder,
    Catalog,
    CatalogBuilder,
    CatalogError,
    LanguageData,
    LanguageLink,
    LanguageMetadata,
    LanguageNotFoundError,
    create_catalog,
    create_catalog_async,
)

__version__ = "1.0.0"

__all__ = [
    "AsyncCatalogBuilder",
    "Catalog",
    "CatalogBuilder",
    "CatalogError",
    "LanguageData",
    "LanguageLink",
    "LanguageMetadata",
    "LanguageNotFoundError",
    "create_catalog",
    "create_catalog_async",
]
