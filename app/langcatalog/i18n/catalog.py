"""Translation catalog and resolution engine.

A Catalog holds every language, each either literal data or a link to
another language, plus the default language's data kept out of band. It is
built once by a builder and is read-only afterwards, down to each category.
Lookups never raise: every query yields a value or falls back
deterministically.
"""

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from langcatalog.i18n.models import (
    FrozenCategories,
    Language,
    LanguageData,
    LanguageLink,
    LanguageMetadata,
    TranslationKey,
    freeze_categories,
    lookup,
)


class Catalog:
    """Immutable set of languages plus the default language.

    Resolution order for ``translate(language, category, key)``:
    1. The language's own data, following at most one link hop
    2. The default language's value at (category, key)
    3. The placeholder ``"{category}.{key}"``

    Attributes:
        languages: Read-only mapping of language name -> Language.
        default: Read-only mapping of the default language's categories.
    """

    def __init__(
        self,
        languages: Optional[Mapping[str, Language]] = None,
        default: Optional[Mapping[str, Mapping[str, str]]] = None,
        metadata: Optional[Mapping[str, LanguageMetadata]] = None,
    ):
        self._languages: Dict[str, Language] = {}
        for name, entry in (languages or {}).items():
            if isinstance(entry, LanguageData):
                entry = LanguageData(freeze_categories(entry.categories))
            self._languages[name] = entry
        self._default: FrozenCategories = freeze_categories(default or {})
        self._metadata: Dict[str, LanguageMetadata] = dict(metadata or {})

    @property
    def languages(self) -> Mapping[str, Language]:
        return MappingProxyType(self._languages)

    @property
    def default(self) -> FrozenCategories:
        return self._default

    def language_names(self) -> list:
        """Names of every language in the catalog, links included.

        The default language is not listed unless a language was also
        registered under its name.
        """
        return list(self._languages)

    def metadata(self, language: str) -> Optional[LanguageMetadata]:
        """Get the metadata a language's payload declared, if any.

        Covers the default language and every language or link kept in the
        catalog. Links do not inherit their target's metadata.
        """
        return self._metadata.get(language)

    def language_code(self, language: str) -> Optional[str]:
        entry = self._metadata.get(language)
        return entry.code if entry else None

    def display_name(self, language: str) -> Optional[str]:
        """Language name in the language itself, e.g. "Français"."""
        entry = self._metadata.get(language)
        return entry.name if entry else None

    def __contains__(self, language: object) -> bool:
        return language in self._languages

    def __len__(self) -> int:
        return len(self._languages)

    def __repr__(self) -> str:
        return f"Catalog(languages={sorted(self._languages)!r})"

    def resolve_language(self, language: str) -> Optional[FrozenCategories]:
        """Get a language's data, following at most one link.

        A link whose target is itself a link resolves to nothing; chains
        are never followed.

        Args:
            language: Language name.

        Returns:
            The language's categories, or None if absent or unresolvable.
        """
        entry = self._languages.get(language)
        if isinstance(entry, LanguageLink):
            entry = self._languages.get(entry.target)
            if isinstance(entry, LanguageLink):
                return None
        if isinstance(entry, LanguageData):
            return entry.categories
        return None

    def translate_default_option(self, category: str, key: str) -> Optional[str]:
        """Get the default language's translation, or None if missing."""
        return lookup(self._default, category, key)

    def translate_default(self, category: str, key: str) -> str:
        """Get the default language's translation.

        Returns:
            The translation, or ``"{category}.{key}"`` if the default
            language lacks it.
        """
        translation = self.translate_default_option(category, key)
        if translation is None:
            return str(TranslationKey(category, key))
        return translation

    def translate_option(self, language: str, category: str, key: str) -> Optional[str]:
        """Get a translation from one language only, without any fallback."""
        categories = self.resolve_language(language)
        if categories is None:
            return None
        return lookup(categories, category, key)

    def translate(self, language: str, category: str, key: str) -> str:
        """Get a translation, falling back to the default language.

        A language that exists but lacks the key still falls back to the
        default language's value; the placeholder is the last resort.

        Args:
            language: Language name (data or link).
            category: Category name.
            key: Key inside the category.

        Returns:
            Translated string.
        """
        translation = self.translate_option(language, category, key)
        if translation is None:
            return self.translate_default(category, key)
        return translation

    def translate_with(self, language: str, category: str, key: str, **args: object) -> str:
        """Get a translation and replace ``{name}`` placeholders.

        Placeholders without a matching argument are left untouched.

        Example:
            >>> catalog.translate_with("fr", "greet", "named", name="Ana")
            'Bonjour Ana'
        """
        translation = self.translate(language, category, key)
        for name, value in args.items():
            translation = translation.replace(f"{{{name}}}", str(value))
        return translation

    def translate_all(self, category: str, key: str) -> "TranslationIterator":
        """Get the translation of (category, key) in every language.

        Links are resolved one hop and skipped if that fails; languages
        missing the key are skipped. The default language itself is not
        included.

        Returns:
            Restartable iterable of (language_name, translation) pairs.
        """
        return TranslationIterator(self, category, key)


class TranslationIterator:
    """Lazy, restartable sequence of (language_name, translation) pairs.

    Each call to ``iter()`` starts a fresh pass over the catalog's
    languages, in the catalog's mapping order.
    """

    def __init__(self, catalog: Catalog, category: str, key: str):
        self.catalog = catalog
        self.category = category
        self.key = key

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        for language in self.catalog.languages:
            categories = self.catalog.resolve_language(language)
            if categories is None:
                continue
            translation = lookup(categories, self.category, self.key)
            if translation is not None:
                yield language, translation

    def __repr__(self) -> str:
        return f"TranslationIterator(category={self.category!r}, key={self.key!r})"
