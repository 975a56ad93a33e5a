"""Translation models for the catalog.

Defines the data structures shared by the builders and the catalog: the
category/key mappings and the two language variants.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union

# A single category: key -> translated string.
Category = Dict[str, str]

# The literal contents of a language: category name -> Category.
Categories = Dict[str, Category]

# Read-only language contents held by a built catalog.
FrozenCategories = Mapping[str, Mapping[str, str]]

# Reserved category holding a language's metadata instead of translations.
METADATA_CATEGORY = "_metadata"


@dataclass(frozen=True)
class TranslationKey:
    """Address of a translation inside a language.

    Frozen to ensure immutability and hashability for caching.

    Attributes:
        category: Category name (e.g., "greet").
        key: Key inside the category (e.g., "hi").
    """

    category: str
    key: str

    def __str__(self) -> str:
        """Return full dot-separated key path.

        Returns:
            Full key (e.g., "greet.hi").
        """
        return f"{self.category}.{self.key}"

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Create TranslationKey from dot-separated string.

        Splits on the first dot only, so keys may contain dots themselves.

        Args:
            key_string: Dot-separated key (e.g., "greet.hi").

        Returns:
            TranslationKey instance.

        Raises:
            ValueError: If key_string does not contain a dot.
        """
        parts = key_string.split(".", 1)
        if len(parts) != 2:
            raise ValueError(
                f"Translation key must be in format 'category.key': {key_string}"
            )
        return cls(category=parts[0], key=parts[1])


@dataclass(frozen=True)
class LanguageData:
    """A language that owns its translations.

    Attributes:
        categories: Nested dict structure {category: {key: translation}}.
    """

    categories: FrozenCategories = field(default_factory=dict)

    def get_translation(self, category: str, key: str) -> Optional[str]:
        """Retrieve a translation by category and key.

        Args:
            category: Category name.
            key: Key inside the category.

        Returns:
            Translated string, or None if not found.
        """
        return lookup(self.categories, category, key)


@dataclass(frozen=True)
class LanguageLink:
    """A language that aliases another language by name.

    Attributes:
        target: Name of the language whose data this one resolves to.
    """

    target: str


Language = Union[LanguageData, LanguageLink]


@dataclass(frozen=True)
class LanguageMetadata:
    """Descriptive fields from a payload's ``_metadata`` category.

    Attributes:
        code: Language code; names the language instead of the file stem.
        name: Language name in the language itself (e.g., "Français").
        link: When set, the payload declares a link to this language.
    """

    code: Optional[str] = None
    name: Optional[str] = None
    link: Optional[str] = None

    @classmethod
    def from_category(cls, category: Mapping[str, str]) -> "LanguageMetadata":
        """Read the known fields; other keys are ignored."""
        return cls(
            code=category.get("code"),
            name=category.get("name"),
            link=category.get("link"),
        )

    @property
    def is_link(self) -> bool:
        return self.link is not None

    def code_and_name(self) -> Optional[Tuple[str, str]]:
        """Return (code, name) when both are set."""
        if self.code is None or self.name is None:
            return None
        return self.code, self.name


def split_metadata(categories: Categories) -> Optional[LanguageMetadata]:
    """Remove the ``_metadata`` category from language data, in place.

    Returns:
        The parsed metadata, or None if the payload has none.
    """
    category = categories.pop(METADATA_CATEGORY, None)
    if category is None:
        return None
    return LanguageMetadata.from_category(category)


def freeze_categories(categories: Mapping[str, Mapping[str, str]]) -> FrozenCategories:
    """Copy language data into read-only mappings, both levels."""
    return MappingProxyType(
        {name: MappingProxyType(dict(category)) for name, category in categories.items()}
    )


def lookup(categories: FrozenCategories, category: str, key: str) -> Optional[str]:
    """Resolve category and key to a translation inside raw language data."""
    return categories.get(category, {}).get(key)


def deduplicate(base: Categories, categories: Categories) -> Categories:
    """Remove translations equal to the base language, in place.

    Every (category, key) whose value equals the base's value at the same
    address is deleted; categories left empty are deleted too.

    Args:
        base: The default language data.
        categories: Language data to filter.

    Returns:
        The filtered ``categories`` (same object).
    """
    for category_name in list(categories):
        category = categories[category_name]
        base_category = base.get(category_name)
        if base_category:
            for key in [k for k, v in category.items() if base_category.get(k) == v]:
                del category[key]
        if not category:
            del categories[category_name]
    return categories
