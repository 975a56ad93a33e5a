"""Translation catalog settings."""

from typing import Optional

from pydantic import Field, field_validator

from langcatalog.configuration.base import LibrarySettings


class CatalogSettings(LibrarySettings):
    """Configuration for building translation catalogs.

    Environment Variables:
        CATALOG_TRANSLATIONS_DIR: Directory holding language files (default: unset)
        CATALOG_DEFAULT_LANGUAGE: Language used as fallback (default: "en")
        CATALOG_PARSER: Payload format - 'json', 'yaml' or 'toml' (default: "json")
        CATALOG_IGNORE_ERRORS: Skip unreadable files while loading a directory
            instead of aborting (default: False)
        CATALOG_WITH_LINKS: Load a directory by extension, '*.json' files as
            languages and '*.link' files as links (default: False)

    Example:
        ```python
        from langcatalog.configuration import settings

        if settings.catalog.translations_dir:
            catalog = create_catalog()
        ```
    """

    translations_dir: Optional[str] = Field(
        default=None,
        alias="CATALOG_TRANSLATIONS_DIR",
        description="Directory holding language files",
    )
    default_language: str = Field(
        default="en",
        alias="CATALOG_DEFAULT_LANGUAGE",
        description="Language used as fallback for missing translations",
    )
    parser: str = Field(
        default="json",
        alias="CATALOG_PARSER",
        description="Payload format: 'json', 'yaml' or 'toml'",
    )
    ignore_errors: bool = Field(
        default=False,
        alias="CATALOG_IGNORE_ERRORS",
        description="Skip files that fail to load instead of aborting",
    )
    with_links: bool = Field(
        default=False,
        alias="CATALOG_WITH_LINKS",
        description="Load '*.link' files as links and '*.json' files as languages",
    )

    @field_validator("parser")
    @classmethod
    def validate_parser(cls, value: str) -> str:
        """Normalize and validate the parser name."""
        normalized = value.strip().lower()
        if normalized not in ("json", "yaml", "yml", "toml"):
            raise ValueError(
                f"CATALOG_PARSER must be 'json', 'yaml' or 'toml', got {value!r}"
            )
        return normalized
