"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_builder,
    make_catalog,
    make_english,
    make_french,
    to_json,
    write_language_files,
)

__all__ = [
    "make_builder",
    "make_catalog",
    "make_english",
    "make_french",
    "to_json",
    "write_language_files",
]
