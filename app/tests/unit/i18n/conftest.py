"""Feature-level fixtures for catalog tests.

Provides language directories on disk and builders for the reference
languages.
"""

import pytest

from langcatalog.i18n import CatalogBuilder
from tests.factories.i18n import (
    make_builder,
    make_english,
    make_french,
    to_json,
    write_language_files,
)


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create a temporary directory with sample language files.

    Returns a directory structure like:
    - en.json
    - fr.json
    - pt-br.json        (_link:pt)
    - regional/pt.json
    """
    portuguese = {"greet": {"hi": "Olá", "bye": "Goodbye"}}
    return write_language_files(
        tmp_path / "locales",
        {
            "en.json": to_json(make_english()),
            "fr.json": to_json(make_french()),
            "pt-br.json": "_link:pt",
            "regional/pt.json": to_json(portuguese),
        },
    )


@pytest.fixture
def link_translations_dir(tmp_path):
    """Create a temporary directory for loading by extension.

    Returns a directory structure like:
    - en.json
    - fr.json
    - fr-ca.link        (_link:fr)
    - de.link           (not a link)
    - notes.txt         (ignored)
    """
    return write_language_files(
        tmp_path / "by_extension",
        {
            "en.json": to_json(make_english()),
            "fr.json": to_json(make_french()),
            "fr-ca.link": "_link:fr",
            "de.link": "nothing here",
            "notes.txt": "not a language",
        },
    )


@pytest.fixture
def builder():
    """CatalogBuilder holding en, fr and a fr-ca -> fr link."""
    return make_builder()


@pytest.fixture
def catalog(builder):
    """Catalog built from the reference languages."""
    return builder.build()


@pytest.fixture
def scenario_catalog():
    """Catalog of the en / fr / en-ca reference scenario."""
    return (
        CatalogBuilder("en")
        .add_language("en", {"greet": {"hi": "Hello"}})
        .add_language("fr", {"greet": {"hi": "Bonjour", "bye": "Au revoir"}})
        .add_link("en-ca", "en")
        .build()
    )


@pytest.fixture
def sample_translation_data():
    """Sample language data for testing."""
    return {"en": make_english(), "fr": make_french()}
