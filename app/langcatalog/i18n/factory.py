"""Factory functions for creating catalogs.

Provides convenience functions for building a Catalog from a translations
directory, with defaults taken from settings.catalog.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from langcatalog.configuration import settings
from langcatalog.i18n.async_builder import AsyncCatalogBuilder
from langcatalog.i18n.builder import CatalogBuilder
from langcatalog.i18n.catalog import Catalog
from langcatalog.i18n.parsers import Parser, get_parser
from langcatalog.logging import get_module_logger

logger = get_module_logger()


def _resolve_options(
    translations_dir: Optional[Union[str, Path]],
    default_language: Optional[str],
    parser: Optional[Union[str, Parser]],
    ignore_errors: Optional[bool],
    with_links: Optional[bool],
) -> Tuple[Path, str, Parser, bool, bool]:
    config = settings.catalog

    if translations_dir is None:
        if not config.translations_dir:
            raise ValueError(
                "No translations directory given and CATALOG_TRANSLATIONS_DIR is not set"
            )
        translations_dir = config.translations_dir

    translations_dir = Path(translations_dir)
    if not translations_dir.is_dir():
        raise ValueError(f"Translations directory not found: {translations_dir}")

    return (
        translations_dir,
        default_language if default_language is not None else config.default_language,
        get_parser(parser if parser is not None else config.parser),
        ignore_errors if ignore_errors is not None else config.ignore_errors,
        with_links if with_links is not None else config.with_links,
    )


def create_catalog(
    translations_dir: Optional[Union[str, Path]] = None,
    default_language: Optional[str] = None,
    parser: Optional[Union[str, Parser]] = None,
    ignore_errors: Optional[bool] = None,
    with_links: Optional[bool] = None,
) -> Catalog:
    """Build a Catalog from a translations directory.

    Arguments left as None are taken from settings.catalog.

    Args:
        translations_dir: Directory with language files (CATALOG_TRANSLATIONS_DIR)
        default_language: Fallback language (CATALOG_DEFAULT_LANGUAGE, default: "en")
        parser: Parser instance or format name (CATALOG_PARSER, default: "json")
        ignore_errors: Skip files that fail to load (CATALOG_IGNORE_ERRORS)
        with_links: Load by extension, '*.link' files as links (CATALOG_WITH_LINKS)

    Returns:
        Catalog: Built catalog

    Raises:
        ValueError: If the translations directory is missing or the parser unknown
        CatalogError: If a file fails to load or the default language is absent
        OSError: If a file cannot be read

    Usage:
        # Use settings
        catalog = create_catalog()

        # Custom directory and default language
        catalog = create_catalog(translations_dir=Path("/srv/locales"), default_language="pt")
    """
    directory, default, chosen_parser, skip_errors, by_extension = _resolve_options(
        translations_dir, default_language, parser, ignore_errors, with_links
    )

    builder = CatalogBuilder(default, parser=chosen_parser)
    if by_extension:
        builder.add_from_dir_with_links(directory, ignore_errors=skip_errors)
    else:
        builder.add_from_dir(directory, ignore_errors=skip_errors)
    catalog = builder.build()

    logger.info(
        "catalog_created",
        translations_dir=str(directory),
        default_language=default,
        parser=chosen_parser.name,
        language_count=len(catalog),
    )
    return catalog


async def create_catalog_async(
    translations_dir: Optional[Union[str, Path]] = None,
    default_language: Optional[str] = None,
    parser: Optional[Union[str, Parser]] = None,
    ignore_errors: Optional[bool] = None,
    with_links: Optional[bool] = None,
) -> Catalog:
    """Build a Catalog from a translations directory without blocking the event loop.

    Same arguments and errors as create_catalog, plus WorkerError if a
    worker thread fails.
    """
    directory, default, chosen_parser, skip_errors, by_extension = _resolve_options(
        translations_dir, default_language, parser, ignore_errors, with_links
    )

    builder = AsyncCatalogBuilder(default, parser=chosen_parser)
    if by_extension:
        await builder.add_from_dir_with_links(directory, ignore_errors=skip_errors)
    else:
        await builder.add_from_dir(directory, ignore_errors=skip_errors)
    catalog = await builder.build()

    logger.info(
        "catalog_created",
        translations_dir=str(directory),
        default_language=default,
        parser=chosen_parser.name,
        language_count=len(catalog),
    )
    return catalog
