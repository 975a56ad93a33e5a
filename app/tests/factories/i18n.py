"""Test data factories for catalog testing.

Provides deterministic test data builders for:
- Language data (categories)
- CatalogBuilder with the reference languages
- Catalog built by hand, bypassing the builder
- Language files on disk
"""

import json
from pathlib import Path
from typing import Dict, Mapping, Optional

from langcatalog.i18n import (
    Catalog,
    CatalogBuilder,
    Categories,
    Language,
)


def make_english(extra: Optional[Categories] = None) -> Categories:
    """Create default-language data.

    Args:
        extra: Categories merged over the reference data.

    Returns:
        Nested dict {category: {key: translation}}.
    """
    data = {
        "greet": {"hi": "Hello", "bye": "Goodbye", "named": "Hello {name}"},
        "errors": {"not_found": "Not found"},
    }
    data.update(extra or {})
    return data


def make_french() -> Categories:
    """Create a French language overlapping the default on purpose."""
    return {
        "greet": {"hi": "Bonjour", "bye": "Au revoir", "named": "Bonjour {name}"},
        # Identical to the default, removed by deduplication
        "errors": {"not_found": "Not found"},
    }


def make_builder(default_language: str = "en") -> CatalogBuilder:
    """Create a CatalogBuilder holding en, fr and a fr-ca -> fr link."""
    return (
        CatalogBuilder(default_language)
        .add_language("en", make_english())
        .add_language("fr", make_french())
        .add_link("fr-ca", "fr")
    )


def make_catalog(
    languages: Optional[Mapping[str, Language]] = None,
    default: Optional[Categories] = None,
) -> Catalog:
    """Create a Catalog directly, without the builder's validation.

    Args:
        languages: Language name -> LanguageData/LanguageLink.
        default: Default language data (default: make_english()).

    Returns:
        Catalog instance.
    """
    return Catalog(languages or {}, make_english() if default is None else default)


def write_language_files(directory: Path, files: Dict[str, str]) -> Path:
    """Write raw language files under a directory.

    Args:
        directory: Target directory, created if needed.
        files: Relative path -> file content.

    Returns:
        The directory.
    """
    for relative, content in files.items():
        path = directory / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return directory


def to_json(categories: Categories) -> str:
    """Serialize language data the way language files store it."""
    return json.dumps(categories, ensure_ascii=False)
