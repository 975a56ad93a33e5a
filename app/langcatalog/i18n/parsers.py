"""Language payload parsers.

Defines the contract for turning raw payloads into language data and
provides JSON (default), YAML and TOML implementations.
"""

import json
import tomllib
from abc import ABC, abstractmethod
from typing import IO, Any, Tuple, Union

import yaml

from langcatalog.i18n.exceptions import ParseError
from langcatalog.i18n.models import Categories
from langcatalog.logging import get_module_logger

logger = get_module_logger()


class Parser(ABC):
    """Abstract base for language parsers.

    Implementations turn a text, byte or stream payload into a two-level
    mapping {category: {key: translation}}. Any malformed payload raises
    ParseError, whatever the backend.

    Attributes:
        name: Short format name used in logs and error messages.
        extensions: File extensions treated as full languages when loading
            a directory by extension.
    """

    name: str = ""
    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def parse_str(self, text: str) -> Categories:
        """Parse a text payload.

        Args:
            text: The complete payload.

        Returns:
            Language data.

        Raises:
            ParseError: If the payload is malformed.
        """
        pass

    @abstractmethod
    def parse_bytes(self, data: bytes) -> Categories:
        """Parse a byte payload.

        Args:
            data: The complete payload.

        Returns:
            Language data.

        Raises:
            ParseError: If the payload is malformed.
        """
        pass

    def parse_stream(self, stream: IO) -> Categories:
        """Parse a readable text or binary stream until its end.

        Args:
            stream: Readable stream positioned at the start of the payload.

        Returns:
            Language data.

        Raises:
            ParseError: If the payload is malformed.
        """
        content = stream.read()
        if isinstance(content, str):
            return self.parse_str(content)
        return self.parse_bytes(content)

    def _invalid(self, error: Exception) -> ParseError:
        logger.debug("payload_parse_failed", parser=self.name, error=str(error))
        return ParseError(f"Invalid {self.name} payload: {error}")

    def _validate(self, data: Any) -> Categories:
        """Check that a deserialized document is category -> key -> string."""
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ParseError(
                f"Invalid {self.name} payload: expected a mapping of categories, "
                f"got {type(data).__name__}"
            )

        categories: Categories = {}
        for category_name, category in data.items():
            if not isinstance(category, dict):
                raise ParseError(
                    f"Invalid {self.name} payload: category {category_name!r} "
                    f"must be a mapping, got {type(category).__name__}"
                )
            for key, value in category.items():
                if not isinstance(value, str):
                    raise ParseError(
                        f"Invalid {self.name} payload: {category_name}.{key} "
                        f"must be a string, got {type(value).__name__}"
                    )
            categories[str(category_name)] = {
                str(key): value for key, value in category.items()
            }
        return categories


class JSONParser(Parser):
    """Parser for JSON language payloads."""

    name = "json"
    extensions = (".json",)

    def parse_str(self, text: str) -> Categories:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise self._invalid(e) from e
        return self._validate(data)

    def parse_bytes(self, data: bytes) -> Categories:
        # json.loads detects UTF-8/16/32 on bytes input
        try:
            document = json.loads(bytes(data))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise self._invalid(e) from e
        return self._validate(document)


class YAMLParser(Parser):
    """Parser for YAML language payloads.

    Expected format:
    category:
      key1: message1
      key2: message2

    An empty document is an empty language.
    """

    name = "yaml"
    extensions = (".yml", ".yaml")

    def parse_str(self, text: str) -> Categories:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise self._invalid(e) from e
        return self._validate(data)

    def parse_bytes(self, data: bytes) -> Categories:
        try:
            document = yaml.safe_load(bytes(data))
        except yaml.YAMLError as e:
            raise self._invalid(e) from e
        return self._validate(document)


class TOMLParser(Parser):
    """Parser for TOML language payloads, one table per category."""

    name = "toml"
    extensions = (".toml",)

    def parse_str(self, text: str) -> Categories:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise self._invalid(e) from e
        return self._validate(data)

    def parse_bytes(self, data: bytes) -> Categories:
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as e:
            raise self._invalid(e) from e
        return self.parse_str(text)


DEFAULT_PARSER: Parser = JSONParser()

_PARSERS = {
    "json": JSONParser,
    "yaml": YAMLParser,
    "yml": YAMLParser,
    "toml": TOMLParser,
}


def get_parser(name: Union[str, Parser]) -> Parser:
    """Return a parser instance for a format name.

    Args:
        name: 'json', 'yaml', 'yml' or 'toml' (case-insensitive), or a
            Parser instance which is returned unchanged.

    Returns:
        Parser instance.

    Raises:
        ValueError: If the format is not supported.
    """
    if isinstance(name, Parser):
        return name
    try:
        return _PARSERS[name.strip().lower()]()
    except KeyError as e:
        raise ValueError(f"Unsupported parser: {name}") from e
