"""Blocking catalog builder.

Accumulates language data and link declarations from strings, byte buffers,
streams, files and directory trees, then finalizes them into a Catalog.
Every operation runs on the caller's thread.
"""

from pathlib import Path
from types import MappingProxyType
from typing import IO, Dict, Mapping, Optional, Union

from langcatalog.i18n.catalog import Catalog
from langcatalog.i18n.exceptions import (
    BuilderConsumedError,
    CatalogError,
    LanguageNotFoundError,
)
from langcatalog.i18n.files import language_name_from_path, list_files, search_files
from langcatalog.i18n.links import (
    SENTINEL_LENGTH,
    decode_link_target,
    is_link_prefix,
    read_link_file,
    split_link_bytes,
    split_link_str,
)
from langcatalog.i18n.models import (
    Categories,
    Language,
    LanguageData,
    LanguageLink,
    LanguageMetadata,
    deduplicate,
    split_metadata,
)
from langcatalog.i18n.parsers import DEFAULT_PARSER, Parser
from langcatalog.logging import get_module_logger

logger = get_module_logger()

BytesLike = Union[bytes, bytearray, memoryview]
Source = Union[str, BytesLike, IO]

LINK_EXTENSION = ".link"


def copy_categories(categories: Mapping[str, Mapping[str, str]]) -> Categories:
    """Copy language data two levels deep so the builder owns it."""
    return {name: dict(category) for name, category in categories.items()}


def finalize(
    default_language: str,
    languages: Dict[str, Categories],
    links: Dict[str, str],
    metadata: Optional[Mapping[str, LanguageMetadata]] = None,
) -> Catalog:
    """Turn accumulated builder state into a Catalog.

    1. Remove the default language from ``languages``; it becomes the
       catalog's out-of-band default.
    2. Deduplicate every remaining language against the default.
    3. Materialize each link whose name holds no literal data and whose
       target does; drop the others. The default language no longer counts
       as literal data here, so a link may take over its name.
    4. Keep the metadata of the default and of every kept language.

    Args:
        default_language: Name of the default language.
        languages: Literal language data, consumed by this call.
        links: Pending links (alias -> target).
        metadata: Metadata declared by payloads, by language name.

    Returns:
        The finalized Catalog.

    Raises:
        LanguageNotFoundError: If the default language has no literal data.
    """
    if default_language not in languages:
        raise LanguageNotFoundError(default_language)

    default = languages.pop(default_language)
    built: Dict[str, Language] = {}

    for name, categories in languages.items():
        built[name] = LanguageData(deduplicate(default, categories))

    dropped = 0
    for name, target in links.items():
        # Literal data wins over a same-named link
        shadowed = name in languages
        if not shadowed and target in languages:
            built[name] = LanguageLink(target)
        else:
            dropped += 1
            logger.debug(
                "link_dropped", language=name, target=target, shadowed=shadowed
            )

    logger.info(
        "catalog_built",
        default_language=default_language,
        language_count=len(languages),
        link_count=len(built) - len(languages),
        dropped_link_count=dropped,
    )
    kept_metadata = {
        name: entry
        for name, entry in (metadata or {}).items()
        if name in built or name == default_language
    }
    return Catalog(built, default, kept_metadata)


class CatalogBuilder:
    """Builder for Catalog.

    Mutating methods return the builder so calls can be chained:

        catalog = (
            CatalogBuilder("en")
            .add_from_dir("locales")
            .add_link("en-ca", "en-gb")
            .build()
        )

    Attributes:
        parser: Parser used for every data payload.
    """

    def __init__(self, default_language: str = "", parser: Optional[Parser] = None):
        """Initialize the builder.

        Args:
            default_language: Name of the language used as fallback.
            parser: Payload parser (default: JSON).
        """
        self.parser = parser or DEFAULT_PARSER
        self._default_language = default_language
        self._languages: Dict[str, Categories] = {}
        self._links: Dict[str, str] = {}
        self._metadata: Dict[str, LanguageMetadata] = {}
        self._consumed = False

    def _ensure_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError("Builder was already consumed by build()")

    @property
    def default_language(self) -> str:
        return self._default_language

    @property
    def languages(self) -> Mapping[str, Categories]:
        """Read-only view of the literal languages added so far."""
        return MappingProxyType(self._languages)

    @property
    def links(self) -> Mapping[str, str]:
        """Read-only view of the pending links added so far."""
        return MappingProxyType(self._links)

    @property
    def metadata(self) -> Mapping[str, LanguageMetadata]:
        """Read-only view of the metadata declared so far, by language name."""
        return MappingProxyType(self._metadata)

    def set_default_language(self, language: str) -> "CatalogBuilder":
        self._ensure_open()
        self._default_language = language
        return self

    def add_language(
        self, language: str, categories: Mapping[str, Mapping[str, str]]
    ) -> "CatalogBuilder":
        """Insert or overwrite literal data for a language.

        A ``_metadata`` category is taken out of the data and recorded as the
        language's metadata; the given name is kept.
        """
        self._ensure_open()
        data = copy_categories(categories)
        metadata = split_metadata(data)
        self._languages[language] = data
        if metadata is not None:
            self._metadata[language] = metadata
        else:
            self._metadata.pop(language, None)
        logger.debug("language_added", language=language, category_count=len(data))
        return self

    def add_link(self, language: str, target: str) -> "CatalogBuilder":
        """Record a pending link; the target is only checked by build()."""
        self._ensure_open()
        self._links[language] = target
        logger.debug("link_added", language=language, target=target)
        return self

    def add_from_str(self, language: str, text: str) -> "CatalogBuilder":
        """Add a language or a link from a text payload.

        Raises:
            ParseError: If the payload is not a link and cannot be parsed.
        """
        self._ensure_open()
        target = split_link_str(text)
        if target is not None:
            return self.add_link(language, target)
        return self._add_payload(language, self.parser.parse_str(text))

    def add_from_bytes(self, language: str, data: BytesLike) -> "CatalogBuilder":
        """Add a language or a link from a byte payload.

        Raises:
            LanguageDecodeError: If a link target is not valid UTF-8.
            ParseError: If the payload is not a link and cannot be parsed.
        """
        self._ensure_open()
        target = split_link_bytes(data)
        if target is not None:
            return self.add_link(language, target)
        return self._add_payload(language, self.parser.parse_bytes(bytes(data)))

    def add_from_stream(self, language: str, stream: IO) -> "CatalogBuilder":
        """Add a language or a link from a readable text or binary stream.

        Seekable streams are peeked for the link sentinel and rewound before
        parsing; other streams are read fully first.

        Raises:
            OSError: If reading the stream fails.
            LanguageDecodeError: If a link target is not valid UTF-8.
            ParseError: If the payload is not a link and cannot be parsed.
        """
        self._ensure_open()
        if not _is_seekable(stream):
            return self.add_from(language, stream.read())

        start = stream.tell()
        prefix = stream.read(SENTINEL_LENGTH)
        if isinstance(prefix, str):
            is_link = split_link_str(prefix) is not None
        else:
            is_link = is_link_prefix(prefix)

        if is_link:
            rest = stream.read()
            target = rest if isinstance(rest, str) else decode_link_target(rest)
            return self.add_link(language, target)

        stream.seek(start)
        return self._add_payload(language, self.parser.parse_stream(stream))

    def _add_payload(self, language: str, categories: Categories) -> "CatalogBuilder":
        """Add parsed payload data, applying its ``_metadata``.

        The metadata ``code``, when set, names the language instead of
        ``language``. A metadata ``link`` turns the payload into a link.
        """
        metadata = split_metadata(categories)
        if metadata is None:
            return self.add_language(language, categories)

        name = metadata.code or language
        if metadata.link is not None:
            self.add_link(name, metadata.link)
        else:
            self.add_language(name, categories)
        self._metadata[name] = metadata
        return self

    def add_from(self, language: str, source: Source) -> "CatalogBuilder":
        """Add a language or a link from text, bytes or a readable stream.

        Raises:
            TypeError: If the source is none of these.
        """
        if isinstance(source, str):
            return self.add_from_str(language, source)
        if isinstance(source, (bytes, bytearray, memoryview)):
            return self.add_from_bytes(language, source)
        if hasattr(source, "read"):
            return self.add_from_stream(language, source)
        raise TypeError(f"Unsupported language source: {type(source).__name__}")

    def add_from_file(self, path: Union[str, Path]) -> "CatalogBuilder":
        """Add a language or a link from a file named after the language.

        A ``code`` in the file's ``_metadata`` takes precedence over the name.

        Raises:
            InvalidFileNameError: If no language name can be derived.
            OSError: If the file cannot be read.
        """
        self._ensure_open()
        language = language_name_from_path(path)
        with open(path, "rb") as f:
            self.add_from_stream(language, f)
        logger.debug("file_loaded", language=language, path=str(path))
        return self

    def add_from_dir(
        self, path: Union[str, Path], ignore_errors: bool = False
    ) -> "CatalogBuilder":
        """Add every file below a directory, recursively.

        By default the first failing file aborts the walk and its error
        propagates; files added before it stay in the builder. With
        ``ignore_errors`` failing files and sub-directories are logged and
        skipped. An unreadable root directory always raises.

        Args:
            path: Root directory.
            ignore_errors: Skip failures instead of aborting.

        Raises:
            OSError: If a directory or file cannot be read.
            CatalogError: If a file cannot be loaded.
        """
        self._ensure_open()
        on_error = _log_skipped_directory if ignore_errors else None
        loaded = 0

        for file_path in search_files(path, on_error):
            if not ignore_errors:
                self.add_from_file(file_path)
                loaded += 1
                continue
            try:
                self.add_from_file(file_path)
                loaded += 1
            except (CatalogError, OSError) as e:
                logger.warning("file_skipped", path=str(file_path), error=str(e))

        logger.info("directory_loaded", path=str(path), file_count=loaded)
        return self

    def add_from_dir_with_links(
        self, path: Union[str, Path], ignore_errors: bool = False
    ) -> "CatalogBuilder":
        """Add the files directly inside a directory, by extension.

        Files with one of the parser's extensions (``*.json`` for the
        default parser) are parsed without sentinel detection; their
        ``_metadata`` still applies. ``*.link`` files are read up to 16
        bytes and become links when they start with ``_link:``. Other files
        are ignored.

        Args:
            path: Directory to load (not recursive).
            ignore_errors: Skip failing files instead of aborting.

        Raises:
            OSError: If the directory or a file cannot be read.
            CatalogError: If a language file cannot be loaded.
        """
        self._ensure_open()
        for file_path in list_files(path):
            try:
                self._add_by_extension(file_path)
            except (CatalogError, OSError) as e:
                if not ignore_errors:
                    raise
                logger.warning("file_skipped", path=str(file_path), error=str(e))
        return self

    def _add_by_extension(self, file_path: Path) -> None:
        extension = file_path.suffix.lower()
        if extension in self.parser.extensions:
            language = language_name_from_path(file_path)
            with open(file_path, "rb") as f:
                self._add_payload(language, self.parser.parse_stream(f))
        elif extension == LINK_EXTENSION:
            language = language_name_from_path(file_path)
            target = read_link_file(file_path)
            if target is not None:
                self.add_link(language, target)

    def remove_language(self, language: str) -> "CatalogBuilder":
        self._ensure_open()
        self._languages.pop(language, None)
        self._forget_metadata(language)
        return self

    def remove_link(self, language: str) -> "CatalogBuilder":
        self._ensure_open()
        self._links.pop(language, None)
        self._forget_metadata(language)
        return self

    def clear_languages(self) -> "CatalogBuilder":
        self._ensure_open()
        self._languages.clear()
        for name in list(self._metadata):
            self._forget_metadata(name)
        return self

    def clear_links(self) -> "CatalogBuilder":
        self._ensure_open()
        self._links.clear()
        for name in list(self._metadata):
            self._forget_metadata(name)
        return self

    def _forget_metadata(self, language: str) -> None:
        if language not in self._languages and language not in self._links:
            self._metadata.pop(language, None)

    def build(self) -> Catalog:
        """Finalize the accumulated state into a Catalog.

        Consumes the builder: any later call raises BuilderConsumedError.
        If the default language is missing the builder is left untouched.

        Raises:
            LanguageNotFoundError: If the default language was never added.
        """
        self._ensure_open()
        if self._default_language not in self._languages:
            raise LanguageNotFoundError(self._default_language)

        languages, links, metadata = self._languages, self._links, self._metadata
        self._languages, self._links, self._metadata = {}, {}, {}
        self._consumed = True
        return finalize(self._default_language, languages, links, metadata)


def _is_seekable(stream: IO) -> bool:
    seekable = getattr(stream, "seekable", None)
    return bool(seekable and seekable())


def _log_skipped_directory(directory: Path, error: OSError) -> None:
    logger.warning("directory_skipped", path=str(directory), error=str(error))
