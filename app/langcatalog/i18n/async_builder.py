"""Asyncio catalog builder.

The asyncio counterpart of CatalogBuilder. One builder can be shared by many
tasks: the languages, the links, the metadata and the default language
name are each guarded by their own lock, so concurrent ``add_*`` calls need no
coordination. Parsing and file reads run in worker threads with
``asyncio.to_thread`` so they do not block the event loop.

``build()`` consumes the accumulated state and must not run while any
``add_*`` call is still in flight; callers are responsible for awaiting
their adds first.
"""

import asyncio
import inspect
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar, Union

from langcatalog.i18n.builder import (
    LINK_EXTENSION,
    BytesLike,
    Source,
    copy_categories,
    finalize,
)
from langcatalog.i18n.catalog import Catalog
from langcatalog.i18n.exceptions import (
    BuilderConsumedError,
    CatalogError,
    LanguageNotFoundError,
    WorkerError,
)
from langcatalog.i18n.files import language_name_from_path, list_files, search_files
from langcatalog.i18n.links import read_link_file, split_link_bytes, split_link_str
from langcatalog.i18n.models import Categories, LanguageMetadata, split_metadata
from langcatalog.i18n.parsers import DEFAULT_PARSER, Parser
from langcatalog.logging import get_module_logger

logger = get_module_logger()

T = TypeVar("T")


async def run_in_worker(func: Callable[..., T], *args: Any) -> T:
    """Run blocking work in a worker thread.

    Catalog errors and I/O errors raised by ``func`` propagate unchanged;
    any other failure of the worker is raised as WorkerError.

    Raises:
        WorkerError: If the worker fails for any other reason.
    """
    try:
        return await asyncio.to_thread(func, *args)
    except (CatalogError, OSError):
        raise
    except Exception as e:
        logger.error(
            "worker_failed",
            function=getattr(func, "__qualname__", repr(func)),
            error=str(e),
        )
        raise WorkerError(f"Worker failed: {e}") from e


def _read_file(path: Union[str, Path]) -> bytes:
    with open(path, "rb") as f:
        return f.read()


class AsyncCatalogBuilder:
    """Catalog builder safe to share between concurrent asyncio tasks.

    Example:
        builder = AsyncCatalogBuilder("en")
        await asyncio.gather(
            builder.add_from_file("locales/en.json"),
            builder.add_from_file("locales/fr.json"),
        )
        catalog = await builder.build()

    Attributes:
        parser: Parser used for every data payload.
    """

    def __init__(self, default_language: str = "", parser: Optional[Parser] = None):
        self.parser = parser or DEFAULT_PARSER
        self._languages: Dict[str, Categories] = {}
        self._links: Dict[str, str] = {}
        self._metadata: Dict[str, LanguageMetadata] = {}
        self._default_language = default_language
        self._languages_lock = asyncio.Lock()
        self._links_lock = asyncio.Lock()
        self._metadata_lock = asyncio.Lock()
        self._default_language_lock = asyncio.Lock()
        self._consumed = False

    def _ensure_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError("Builder was already consumed by build()")

    async def add_language(
        self, language: str, categories: Mapping[str, Mapping[str, str]]
    ) -> None:
        """Insert or overwrite literal data for a language.

        A ``_metadata`` category is recorded as the language's metadata.
        """
        self._ensure_open()
        data = copy_categories(categories)
        metadata = split_metadata(data)
        async with self._languages_lock:
            self._languages[language] = data
        async with self._metadata_lock:
            if metadata is not None:
                self._metadata[language] = metadata
            else:
                self._metadata.pop(language, None)
        logger.debug("language_added", language=language, category_count=len(data))

    async def add_link(self, language: str, target: str) -> None:
        """Record a pending link; the target is only checked by build()."""
        self._ensure_open()
        async with self._links_lock:
            self._links[language] = target
        logger.debug("link_added", language=language, target=target)

    async def set_default_language(self, language: str) -> None:
        self._ensure_open()
        async with self._default_language_lock:
            self._default_language = language

    async def get_default_language(self) -> str:
        async with self._default_language_lock:
            return self._default_language

    async def add_from_str(self, language: str, text: str) -> None:
        """Add a language or a link from a text payload.

        Raises:
            ParseError: If the payload is not a link and cannot be parsed.
            WorkerError: If the parsing worker fails.
        """
        self._ensure_open()
        target = split_link_str(text)
        if target is not None:
            await self.add_link(language, target)
            return
        categories = await run_in_worker(self.parser.parse_str, text)
        await self._add_payload(language, categories)

    async def add_from_bytes(self, language: str, data: BytesLike) -> None:
        """Add a language or a link from a byte payload.

        Raises:
            LanguageDecodeError: If a link target is not valid UTF-8.
            ParseError: If the payload is not a link and cannot be parsed.
            WorkerError: If the parsing worker fails.
        """
        self._ensure_open()
        target = split_link_bytes(data)
        if target is not None:
            await self.add_link(language, target)
            return
        categories = await run_in_worker(self.parser.parse_bytes, bytes(data))
        await self._add_payload(language, categories)

    async def _add_payload(self, language: str, categories: Categories) -> None:
        """Add parsed payload data, applying its ``_metadata`` like the sync builder."""
        metadata = split_metadata(categories)
        if metadata is None:
            await self.add_language(language, categories)
            return

        name = metadata.code or language
        if metadata.link is not None:
            await self.add_link(name, metadata.link)
        else:
            await self.add_language(name, categories)
        async with self._metadata_lock:
            self._metadata[name] = metadata

    async def add_from_stream(self, language: str, stream: Any) -> None:
        """Add a language or a link from a stream, read fully before parsing.

        Accepts asyncio streams (``await stream.read()``) as well as regular
        file objects, which are read in a worker thread.

        Raises:
            OSError: If reading the stream fails.
            LanguageDecodeError: If a link target is not valid UTF-8.
            ParseError: If the payload is not a link and cannot be parsed.
            WorkerError: If a worker fails.
        """
        self._ensure_open()
        if inspect.iscoroutinefunction(stream.read):
            content = await stream.read()
        else:
            content = await run_in_worker(stream.read)
        await self.add_from(language, content)

    async def add_from(self, language: str, source: Union[Source, Any]) -> None:
        """Add a language or a link from text, bytes or a readable stream.

        Raises:
            TypeError: If the source is none of these.
        """
        if isinstance(source, str):
            await self.add_from_str(language, source)
        elif isinstance(source, (bytes, bytearray, memoryview)):
            await self.add_from_bytes(language, source)
        elif hasattr(source, "read"):
            await self.add_from_stream(language, source)
        else:
            raise TypeError(f"Unsupported language source: {type(source).__name__}")

    async def add_from_file(self, path: Union[str, Path]) -> None:
        """Add a language or a link from a file named after the language.

        Raises:
            InvalidFileNameError: If no language name can be derived.
            OSError: If the file cannot be read.
        """
        self._ensure_open()
        language = language_name_from_path(path)
        data = await run_in_worker(_read_file, path)
        await self.add_from_bytes(language, data)
        logger.debug("file_loaded", language=language, path=str(path))

    async def add_from_dir(
        self, path: Union[str, Path], ignore_errors: bool = False
    ) -> None:
        """Add every file below a directory, recursively and sequentially.

        Same failure modes as CatalogBuilder.add_from_dir.
        """
        self._ensure_open()

        def on_error(directory: Path, error: OSError) -> None:
            logger.warning("directory_skipped", path=str(directory), error=str(error))

        files = await run_in_worker(
            lambda: list(search_files(path, on_error if ignore_errors else None))
        )
        loaded = 0

        for file_path in files:
            try:
                await self.add_from_file(file_path)
                loaded += 1
            except (CatalogError, OSError) as e:
                if not ignore_errors:
                    raise
                logger.warning("file_skipped", path=str(file_path), error=str(e))

        logger.info("directory_loaded", path=str(path), file_count=loaded)

    async def add_from_dir_with_links(
        self, path: Union[str, Path], ignore_errors: bool = False
    ) -> None:
        """Add the files directly inside a directory, by extension.

        Same rules as CatalogBuilder.add_from_dir_with_links.
        """
        self._ensure_open()
        files = await run_in_worker(lambda: list(list_files(path)))

        for file_path in files:
            try:
                await self._add_by_extension(file_path)
            except (CatalogError, OSError) as e:
                if not ignore_errors:
                    raise
                logger.warning("file_skipped", path=str(file_path), error=str(e))

    async def _add_by_extension(self, file_path: Path) -> None:
        extension = file_path.suffix.lower()
        if extension in self.parser.extensions:
            language = language_name_from_path(file_path)
            data = await run_in_worker(_read_file, file_path)
            categories = await run_in_worker(self.parser.parse_bytes, data)
            await self._add_payload(language, categories)
        elif extension == LINK_EXTENSION:
            language = language_name_from_path(file_path)
            target = await run_in_worker(read_link_file, file_path)
            if target is not None:
                await self.add_link(language, target)

    async def remove_language(self, language: str) -> None:
        self._ensure_open()
        async with self._languages_lock:
            self._languages.pop(language, None)
        await self._forget_metadata(language)

    async def remove_link(self, language: str) -> None:
        self._ensure_open()
        async with self._links_lock:
            self._links.pop(language, None)
        await self._forget_metadata(language)

    async def clear_languages(self) -> None:
        self._ensure_open()
        async with self._languages_lock:
            self._languages.clear()
        await self._forget_metadata()

    async def clear_links(self) -> None:
        self._ensure_open()
        async with self._links_lock:
            self._links.clear()
        await self._forget_metadata()

    async def _forget_metadata(self, language: Optional[str] = None) -> None:
        """Drop metadata of names that are neither a language nor a link."""
        async with self._languages_lock, self._links_lock, self._metadata_lock:
            names = [language] if language is not None else list(self._metadata)
            for name in names:
                if name not in self._languages and name not in self._links:
                    self._metadata.pop(name, None)

    async def get_languages(self) -> Dict[str, Categories]:
        """Copy of the literal languages added so far."""
        async with self._languages_lock:
            return {name: copy_categories(data) for name, data in self._languages.items()}

    async def get_links(self) -> Dict[str, str]:
        """Copy of the pending links added so far."""
        async with self._links_lock:
            return dict(self._links)

    async def get_metadata(self) -> Dict[str, LanguageMetadata]:
        """Copy of the metadata declared so far, by language name."""
        async with self._metadata_lock:
            return dict(self._metadata)

    async def build(self) -> Catalog:
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
