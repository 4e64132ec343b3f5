"""Internationalization engine.

Loads per-language JSON catalogs and resolves message keys into
localized strings with plural, gender and ``{{placeholder}}`` support.

Fallback behaviour:
- Unknown key in the current language → same key in the fallback language.
- Missing everywhere → ``"Error missing text"`` (and ``missing=True`` on
  ``TranslationHandle.lookup``).

Usage::

    from intlkit.i18n import Registry

    registry = Registry.from_directory("messages", lang="en", fallback="en")
    tr = registry.translation("shop")
    tr.t("greeting")                    # → "Hello"
    tr.t_with_plurial("apples", 0)      # → "No apples"
    tr.t_with_plurial("apples", 5)      # → "5 apples"
"""

from __future__ import annotations

from intlkit.i18n.catalog import Catalog, CatalogBuildError
from intlkit.i18n.entries import (
    Entry,
    GenderedEntry,
    InvalidEntryError,
    PlainEntry,
    PluralEntry,
    entry_from_value,
    plural_category,
)
from intlkit.i18n.loader import (
    LoadResult,
    LoadWarning,
    WarningKind,
    build_bundle,
    catalogs_from_bundle,
    load_messages,
    read_bundle,
    write_bundle,
)
from intlkit.i18n.registry import LanguageState, Registry, TranslationHandle
from intlkit.i18n.resolver import (
    MISSING_TEXT,
    CatalogAbsent,
    KeyAbsent,
    LookupFailure,
    MissingVariant,
    Mode,
    Resolution,
    ShapeMismatch,
    resolve,
    substitute,
)

__all__ = [
    "MISSING_TEXT",
    "Catalog",
    "CatalogAbsent",
    "CatalogBuildError",
    "Entry",
    "GenderedEntry",
    "InvalidEntryError",
    "KeyAbsent",
    "LanguageState",
    "LoadResult",
    "LoadWarning",
    "LookupFailure",
    "MissingVariant",
    "Mode",
    "PlainEntry",
    "PluralEntry",
    "Registry",
    "Resolution",
    "ShapeMismatch",
    "TranslationHandle",
    "WarningKind",
    "build_bundle",
    "catalogs_from_bundle",
    "entry_from_value",
    "load_messages",
    "plural_category",
    "read_bundle",
    "resolve",
    "substitute",
    "write_bundle",
]
