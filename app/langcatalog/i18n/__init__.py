"""i18n catalog - translated strings by language, category and key.

Builds an immutable Catalog from per-language payloads (strings, bytes,
streams, files, directory trees), wires language links, removes entries
identical to the default language, and resolves lookups with a one-hop
link, default-language fallback and a "category.key" placeholder.

Main components:
- models: LanguageData, LanguageLink, LanguageMetadata, TranslationKey
- parsers: Parser contract with JSON, YAML and TOML implementations
- builder: CatalogBuilder (blocking)
- async_builder: AsyncCatalogBuilder (asyncio, shareable between tasks)
- catalog: Catalog and its resolution engine
- factory: create_catalog / create_catalog_async from settings
"""

from langcatalog.i18n.async_builder import AsyncCatalogBuilder
from langcatalog.i18n.builder import CatalogBuilder
from langcatalog.i18n.catalog import Catalog, TranslationIterator
from langcatalog.i18n.exceptions import (
    BuilderConsumedError,
    CatalogError,
    InvalidFileNameError,
    LanguageDecodeError,
    LanguageNotFoundError,
    ParseError,
    WorkerError,
)
from langcatalog.i18n.factory import create_catalog, create_catalog_async
from langcatalog.i18n.links import LINK_SENTINEL
from langcatalog.i18n.models import (
    METADATA_CATEGORY,
    Categories,
    Category,
    FrozenCategories,
    Language,
    LanguageData,
    LanguageLink,
    LanguageMetadata,
    TranslationKey,
)
from langcatalog.i18n.parsers import (
    DEFAULT_PARSER,
    JSONParser,
    Parser,
    TOMLParser,
    YAMLParser,
    get_parser,
)

__all__ = [
    "AsyncCatalogBuilder",
    "CatalogBuilder",
    "Catalog",
    "TranslationIterator",
    "CatalogError",
    "ParseError",
    "LanguageDecodeError",
    "LanguageNotFoundError",
    "InvalidFileNameError",
    "WorkerError",
    "BuilderConsumedError",
    "create_catalog",
    "create_catalog_async",
    "LINK_SENTINEL",
    "METADATA_CATEGORY",
    "Categories",
    "Category",
    "FrozenCategories",
    "Language",
    "LanguageData",
    "LanguageLink",
    "LanguageMetadata",
    "TranslationKey",
    "Parser",
    "JSONParser",
    "YAMLParser",
    "TOMLParser",
    "DEFAULT_PARSER",
    "get_parser",
]
