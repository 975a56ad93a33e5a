"""Tests for langcatalog.i18n.async_builder module."""

import asyncio
import io

import pytest

from langcatalog.i18n import (
    AsyncCatalogBuilder,
    BuilderConsumedError,
    JSONParser,
    LanguageData,
    LanguageLink,
    LanguageMetadata,
    LanguageNotFoundError,
    ParseError,
    WorkerError,
)
from langcatalog.i18n.async_builder import run_in_worker
from tests.factories.i18n import make_english, make_french, to_json


class ExplodingParser(JSONParser):
    """Parser failing with an unexpected error."""

    def parse_str(self, text):
        raise RuntimeError("parser crashed")

    def parse_bytes(self, data):
        raise RuntimeError("parser crashed")


def make_stream_reader(data: bytes) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    return reader


class TestRunInWorker:
    """Tests for run_in_worker()."""

    @pytest.mark.asyncio
    async def test_returns_result(self):
        assert await run_in_worker(sum, [1, 2, 3]) == 6

    @pytest.mark.asyncio
    async def test_catalog_errors_propagate(self):
        with pytest.raises(ParseError):
            await run_in_worker(JSONParser().parse_str, "{broken")

    @pytest.mark.asyncio
    async def test_os_errors_propagate(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await run_in_worker(open, tmp_path / "missing.json")

    @pytest.mark.asyncio
    async def test_other_errors_become_worker_errors(self):
        def crash():
            raise RuntimeError("boom")

        with pytest.raises(WorkerError) as exc_info:
            await run_in_worker(crash)
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestAsyncAccumulation:
    """Tests for adding languages and links concurrently."""

    @pytest.mark.asyncio
    async def test_concurrent_adds(self):
        """Adds from many tasks all land in the builder."""
        builder = AsyncCatalogBuilder("en")
        await asyncio.gather(
            builder.add_language("en", make_english()),
            builder.add_language("fr", make_french()),
            builder.add_link("fr-ca", "fr"),
            builder.add_from_str("de", '{"greet": {"hi": "Hallo"}}'),
            builder.add_from_bytes("pt-br", b"_link:pt"),
            *(builder.add_language(f"x{i}", {"c": {"k": str(i)}}) for i in range(20)),
        )

        languages = await builder.get_languages()
        links = await builder.get_links()
        assert {"en", "fr", "de"} <= set(languages)
        assert len(languages) == 23
        assert links == {"fr-ca": "fr", "pt-br": "pt"}

    @pytest.mark.asyncio
    async def test_default_language(self):
        builder = AsyncCatalogBuilder()
        await builder.set_default_language("fr")
        assert await builder.get_default_language() == "fr"

    @pytest.mark.asyncio
    async def test_views_are_copies(self):
        builder = AsyncCatalogBuilder("en")
        await builder.add_language("en", {"greet": {"hi": "Hello"}})
        languages = await builder.get_languages()
        languages["en"]["greet"]["hi"] = "Changed"
        assert (await builder.get_languages())["en"]["greet"]["hi"] == "Hello"

    @pytest.mark.asyncio
    async def test_remove_and_clear(self):
        builder = AsyncCatalogBuilder("en")
        await builder.add_language("en", {})
        await builder.add_language("fr", {})
        await builder.add_link("fr-ca", "fr")

        await builder.remove_language("fr")
        await builder.remove_link("fr-ca")
        assert set(await builder.get_languages()) == {"en"}
        assert await builder.get_links() == {}

        await builder.clear_languages()
        await builder.clear_links()
        assert await builder.get_languages() == {}


class TestAsyncAddFrom:
    """Tests for the sentinel-aware add_from* operations."""

    @pytest.mark.asyncio
    async def test_add_from_dispatch(self):
        builder = AsyncCatalogBuilder("en")
        await builder.add_from("en", '{"greet": {"hi": "Hello"}}')
        await builder.add_from("fr", bytearray(b'{"greet": {"hi": "Bonjour"}}'))
        await builder.add_from("fr-ca", io.BytesIO(b"_link:fr"))
        await builder.add_from("en-ca", io.StringIO("_link:en"))

        assert set(await builder.get_languages()) == {"en", "fr"}
        assert await builder.get_links() == {"fr-ca": "fr", "en-ca": "en"}

    @pytest.mark.asyncio
    async def test_asyncio_stream(self):
        """Streams with a coroutine read() are awaited directly."""
        builder = AsyncCatalogBuilder("en")
        await builder.add_from_stream("en", make_stream_reader(b'{"greet": {"hi": "Hello"}}'))
        await builder.add_from_stream("en-ca", make_stream_reader(b"_link:en"))

        assert (await builder.get_languages())["en"] == {"greet": {"hi": "Hello"}}
        assert await builder.get_links() == {"en-ca": "en"}

    @pytest.mark.asyncio
    async def test_add_from_rejects_other_types(self):
        with pytest.raises(TypeError):
            await AsyncCatalogBuilder("en").add_from("en", 3.5)

    @pytest.mark.asyncio
    async def test_parse_error_passes_through(self):
        builder = AsyncCatalogBuilder("en")
        with pytest.raises(ParseError):
            await builder.add_from_str("fr", "{broken")
        assert await builder.get_languages() == {}

    @pytest.mark.asyncio
    async def test_worker_failure(self):
        """An unexpected parser failure surfaces as WorkerError."""
        builder = AsyncCatalogBuilder("en", parser=ExplodingParser())
        with pytest.raises(WorkerError):
            await builder.add_from_bytes("fr", b'{"greet": {"hi": "Bonjour"}}')

    @pytest.mark.asyncio
    async def test_worker_failure_skips_parser_for_links(self):
        builder = AsyncCatalogBuilder("en", parser=ExplodingParser())
        await builder.add_from_str("fr-ca", "_link:fr")
        assert await builder.get_links() == {"fr-ca": "fr"}


class TestAsyncFiles:
    """Tests for file and directory loading."""

    @pytest.mark.asyncio
    async def test_add_from_file(self, tmp_path):
        path = tmp_path / "fr.json"
        path.write_text(to_json(make_french()), encoding="utf-8")
        builder = AsyncCatalogBuilder("en")
        await builder.add_from_file(path)
        assert (await builder.get_languages())["fr"] == make_french()

    @pytest.mark.asyncio
    async def test_add_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await AsyncCatalogBuilder("en").add_from_file(tmp_path / "missing.json")

    @pytest.mark.asyncio
    async def test_concurrent_files(self, temp_translations_dir):
        builder = AsyncCatalogBuilder("en")
        await asyncio.gather(
            builder.add_from_file(temp_translations_dir / "en.json"),
            builder.add_from_file(temp_translations_dir / "fr.json"),
            builder.add_from_file(temp_translations_dir / "pt-br.json"),
        )
        assert set(await builder.get_languages()) == {"en", "fr"}
        assert await builder.get_links() == {"pt-br": "pt"}

    @pytest.mark.asyncio
    async def test_add_from_dir(self, temp_translations_dir):
        builder = AsyncCatalogBuilder("en")
        await builder.add_from_dir(temp_translations_dir)
        assert set(await builder.get_languages()) == {"en", "fr", "pt"}
        assert await builder.get_links() == {"pt-br": "pt"}

    @pytest.mark.asyncio
    async def test_add_from_dir_fail_fast(self, temp_translations_dir):
        (temp_translations_dir / "zz.json").write_text("{broken")
        with pytest.raises(ParseError):
            await AsyncCatalogBuilder("en").add_from_dir(temp_translations_dir)

    @pytest.mark.asyncio
    async def test_add_from_dir_ignore_errors(self, temp_translations_dir):
        (temp_translations_dir / "aa.json").write_text("{broken")
        builder = AsyncCatalogBuilder("en")
        await builder.add_from_dir(temp_translations_dir, ignore_errors=True)
        assert set(await builder.get_languages()) == {"en", "fr", "pt"}

    @pytest.mark.asyncio
    async def test_add_from_dir_missing_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await AsyncCatalogBuilder("en").add_from_dir(
                tmp_path / "missing", ignore_errors=True
            )

    @pytest.mark.asyncio
    async def test_add_from_dir_with_links(self, link_translations_dir):
        builder = AsyncCatalogBuilder("en")
        await builder.add_from_dir_with_links(link_translations_dir)
        assert set(await builder.get_languages()) == {"en", "fr"}
        assert await builder.get_links() == {"fr-ca": "fr"}


class TestAsyncBuild:
    """Tests for build()."""

    @pytest.mark.asyncio
    async def test_build(self):
        builder = AsyncCatalogBuilder("en")
        await asyncio.gather(
            builder.add_language("en", {"greet": {"hi": "Hello"}}),
            builder.add_language("fr", {"greet": {"hi": "Bonjour", "bye": "Au revoir"}}),
            builder.add_link("fr-ca", "fr"),
            builder.add_link("pt-br", "pt"),
        )
        catalog = await builder.build()

        assert isinstance(catalog.languages["fr"], LanguageData)
        assert catalog.languages["fr-ca"] == LanguageLink("fr")
        assert "pt-br" not in catalog
        assert catalog.translate("fr-ca", "greet", "bye") == "Au revoir"

    @pytest.mark.asyncio
    async def test_missing_default_language(self):
        builder = AsyncCatalogBuilder("en")
        await builder.add_language("fr", {})
        with pytest.raises(LanguageNotFoundError):
            await builder.build()
        assert set(await builder.get_languages()) == {"fr"}

    @pytest.mark.asyncio
    async def test_builder_consumed(self):
        builder = AsyncCatalogBuilder("en")
        await builder.add_language("en", {})
        await builder.build()
        with pytest.raises(BuilderConsumedError):
            await builder.add_link("a", "b")
        with pytest.raises(BuilderConsumedError):
            await builder.build()


class TestAsyncMetadata:
    """Tests for the reserved _metadata category."""

    @pytest.mark.asyncio
    async def test_add_language_records_metadata(self):
        builder = AsyncCatalogBuilder("en")
        await builder.add_language(
            "fr", {"_metadata": {"name": "Français"}, "greet": {"hi": "Bonjour"}}
        )
        assert await builder.get_languages() == {"fr": {"greet": {"hi": "Bonjour"}}}
        assert await builder.get_metadata() == {"fr": LanguageMetadata(name="Français")}

    @pytest.mark.asyncio
    async def test_code_overrides_given_name(self):
        builder = AsyncCatalogBuilder("en")
        await builder.add_from_str("pt", '{"_metadata": {"code": "pt-BR"}}')
        assert set(await builder.get_languages()) == {"pt-BR"}

    @pytest.mark.asyncio
    async def test_link_field_declares_link(self, tmp_path):
        path = tmp_path / "canada.json"
        path.write_text(to_json({"_metadata": {"code": "fr-CA", "link": "fr"}}))
        builder = AsyncCatalogBuilder("en")
        await builder.add_from_file(path)
        assert await builder.get_links() == {"fr-CA": "fr"}
        assert await builder.get_languages() == {}

    @pytest.mark.asyncio
    async def test_remove_forgets_metadata(self):
        builder = AsyncCatalogBuilder("en")
        await builder.add_from_bytes("fr", b'{"_metadata": {"name": "Fran\\u00e7ais"}}')
        await builder.remove_language("fr")
        assert await builder.get_metadata() == {}

    @pytest.mark.asyncio
    async def test_build_keeps_metadata(self):
        builder = AsyncCatalogBuilder("en")
        await asyncio.gather(
            builder.add_from_str("en", '{"_metadata": {"name": "English"}}'),
            builder.add_from_str("fr", '{"_metadata": {"name": "Français"}}'),
        )
        catalog = await builder.build()
        assert catalog.display_name("en") == "English"
        assert catalog.display_name("fr") == "Français"
