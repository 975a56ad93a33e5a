"""Custom exceptions for the translation catalog.

Every failure of the build phase is raised as a subclass of CatalogError,
except I/O failures which propagate as the builtin OSError family. Lookups
on a built catalog never raise.
"""

from pathlib import Path
from typing import Union


class CatalogError(Exception):
    """Base exception for all catalog-related errors.

    Example:
        try:
            catalog = builder.add_from_dir("locales").build()
        except CatalogError as e:
            logger.error("catalog_build_failed", error=str(e))
    """

    pass


class ParseError(CatalogError, ValueError):
    """Raised when a language payload cannot be deserialized.

    The backend exception (json, yaml or toml) is chained as ``__cause__``.

    Example:
        >>> builder.add_from_str("fr", "{not json")
        Traceback (most recent call last):
        ...
        ParseError: Invalid json payload: Expecting property name ...
    """

    pass


class LanguageDecodeError(CatalogError, ValueError):
    """Raised when a byte payload around the link sentinel is not valid UTF-8."""

    pass


class LanguageNotFoundError(CatalogError, KeyError):
    """Raised when a named language does not exist.

    Used when the default language is missing at build time.

    Attributes:
        language: Name of the missing language.
    """

    def __init__(self, language: str):
        self.language = language
        super().__init__(language)

    def __str__(self) -> str:
        return f"Language {self.language} not found"


class InvalidFileNameError(CatalogError, ValueError):
    """Raised when a language name cannot be derived from a file name.

    Attributes:
        path: The offending path.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = path
        super().__init__(f"Invalid file name: {path}")


class WorkerError(CatalogError):
    """Raised when a worker thread fails while parsing or reading a payload.

    Only the asyncio builder offloads work, so only it raises this error.
    Parse failures inside the worker are still raised as ParseError.
    """

    pass


class BuilderConsumedError(CatalogError, RuntimeError):
    """Raised when a builder is used after build() consumed it."""

    pass
