"""Catalog entries: the value stored under one translation key.

A document value becomes exactly one of three shapes:

- a bare string → ``PlainEntry``
- an object whose string fields are all plural categories
  (``none`` / ``one`` / ``many``) → ``PluralEntry``
- any other object with at least one string field → ``GenderedEntry``

Non-string fields inside an object are ignored.  A value that yields
no usable variant is rejected with ``InvalidEntryError``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Literal, Union

PluralCategory = Literal["none", "one", "many"]

PLURAL_CATEGORIES: frozenset[str] = frozenset({"none", "one", "many"})


class InvalidEntryError(ValueError):
    """Raised when a document value cannot be turned into an entry."""


def _frozen(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class PlainEntry:
    """A single string with no variants."""

    text: str


@dataclass(frozen=True, slots=True)
class GenderedEntry:
    """Variants keyed by an open set of gender tags (case-sensitive)."""

    variants: Mapping[str, str]

    def __post_init__(self) -> None:
        if not self.variants:
            raise InvalidEntryError("Gendered entry must have at least one variant")
        object.__setattr__(self, "variants", _frozen(self.variants))


@dataclass(frozen=True, slots=True)
class PluralEntry:
    """Variants keyed by plural category; not every category is required."""

    variants: Mapping[str, str]

    def __post_init__(self) -> None:
        if not self.variants:
            raise InvalidEntryError("Plural entry must have at least one variant")
        unknown = set(self.variants) - PLURAL_CATEGORIES
        if unknown:
            raise InvalidEntryError(f"Unknown plural categories: {sorted(unknown)}")
        object.__setattr__(self, "variants", _frozen(self.variants))


Entry = Union[PlainEntry, GenderedEntry, PluralEntry]


def plural_category(count: int) -> PluralCategory:
    """Bucket *count*: 0 → ``none``, 1 → ``one``, anything else → ``many``.

    Negative counts are valid input and land in ``many``.
    """
    if count == 0:
        return "none"
    if count == 1:
        return "one"
    return "many"


def entry_from_value(value: Any) -> Entry:
    """Build an entry from one parsed document value.

    Raises:
        InvalidEntryError: If *value* is neither a string nor an object
            with at least one string field.
    """
    if isinstance(value, str):
        return PlainEntry(value)

    if not isinstance(value, Mapping):
        raise InvalidEntryError(
            f"Expected a string or an object, got {type(value).__name__}"
        )

    variants = {k: v for k, v in value.items() if isinstance(v, str)}
    if not variants:
        raise InvalidEntryError("Object must have at least one string field")

    # Plural categories are checked first; anything else is a gender map.
    if set(variants) <= PLURAL_CATEGORIES:
        return PluralEntry(variants)
    return GenderedEntry(variants)
