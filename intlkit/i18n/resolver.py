"""Translation resolution: variant selection, fallback and interpolation.

``resolve()`` is the single point that interprets entry shapes.  It is a
pure function of its inputs: it never logs and never raises for a
lookup failure.  Every failure kind collapses into
``Resolution(MISSING_TEXT, missing=True)``; the ``missing`` flag is a
diagnostic for the caller and never appears in the rendered text.

Fallback is wholesale per key: if the primary catalog cannot produce the
requested variant, the whole lookup is retried against the fallback
catalog rather than borrowing a single variant from it.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

from intlkit.i18n.catalog import Catalog
from intlkit.i18n.entries import Entry, GenderedEntry, PlainEntry, PluralEntry, plural_category

MISSING_TEXT = "Error missing text"

# {{name}} with no inner whitespace, no nesting.
PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")

Arguments = Union[Sequence[object], Mapping[str, object]]


class Mode(str, Enum):
    """Which entry shape a lookup expects."""

    PLAIN = "plain"
    PLURAL = "plural"
    GENDERED = "gendered"


# ---------------------------------------------------------------------------
# Lookup failures (values, not exceptions)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LookupFailure:
    """Base for the reasons a single-catalog lookup can fail."""

    key: str


@dataclass(frozen=True, slots=True)
class CatalogAbsent(LookupFailure):
    """No catalog is loaded for the requested (language, file)."""


@dataclass(frozen=True, slots=True)
class KeyAbsent(LookupFailure):
    """The catalog has no entry under the key."""


@dataclass(frozen=True, slots=True)
class ShapeMismatch(LookupFailure):
    """The entry exists but its shape does not match the requested mode."""

    expected: Mode
    actual: str


@dataclass(frozen=True, slots=True)
class MissingVariant(LookupFailure):
    """The entry shape matches but the plural category / gender is absent."""

    variant: str


@dataclass(frozen=True, slots=True)
class Resolution:
    """Rendered text plus the diagnostic ``missing`` flag."""

    text: str
    missing: bool = False

    def __str__(self) -> str:
        return self.text


# ---------------------------------------------------------------------------
# Variant selection
# ---------------------------------------------------------------------------


def select_variant(
    entry: Entry,
    key: str,
    mode: Mode,
    *,
    count: int | None = None,
    gender: str | None = None,
) -> str | LookupFailure:
    """Pick the display string of *entry* for *mode*.

    Returns:
        The selected template, or a ``LookupFailure`` describing why
        nothing could be selected.
    """
    _require_mode_args(mode, count, gender)

    if mode is Mode.PLAIN:
        if isinstance(entry, PlainEntry):
            return entry.text
        return ShapeMismatch(key, expected=mode, actual=_shape_name(entry))

    if mode is Mode.PLURAL:
        if not isinstance(entry, PluralEntry):
            return ShapeMismatch(key, expected=mode, actual=_shape_name(entry))
        category = plural_category(count)  # type: ignore[arg-type]
        text = entry.variants.get(category)
        return text if text is not None else MissingVariant(key, variant=category)

    if not isinstance(entry, GenderedEntry):
        return ShapeMismatch(key, expected=mode, actual=_shape_name(entry))
    text = entry.variants.get(gender)  # type: ignore[arg-type]
    return text if text is not None else MissingVariant(key, variant=gender)  # type: ignore[arg-type]


def _require_mode_args(mode: Mode, count: int | None, gender: str | None) -> None:
    """Reject calls that omit the selector their mode needs.

    This is a caller bug, not a lookup failure, so it raises.
    """
    if not isinstance(mode, Mode):
        raise ValueError(f"Unknown mode: {mode!r}")
    if mode is Mode.PLURAL and count is None:
        raise TypeError("Plural lookup requires a count")
    if mode is Mode.GENDERED and gender is None:
        raise TypeError("Gendered lookup requires a gender")


def _shape_name(entry: Entry) -> str:
    if isinstance(entry, PlainEntry):
        return "plain"
    if isinstance(entry, PluralEntry):
        return "plural"
    return "gendered"


# ---------------------------------------------------------------------------
# Placeholder substitution
# ---------------------------------------------------------------------------


def substitute(template: str, args: Arguments | None) -> str:
    """Replace ``{{name}}`` placeholders in *template*.

    A mapping binds by placeholder name.  A sequence binds positionally:
    each distinct name takes the next argument in order of its first
    appearance, and later occurrences of the same name reuse that value.
    Extra arguments are ignored; placeholders without an argument are
    left verbatim.  ``None`` skips substitution entirely.
    """
    if args is None:
        return template
    if isinstance(args, str):
        args = (args,)

    if isinstance(args, Mapping):
        bound = {name: str(value) for name, value in args.items()}
    else:
        values = list(args)
        bound = {}
        for match in PLACEHOLDER_RE.finditer(template):
            name = match.group(1)
            if name in bound:
                continue
            if len(bound) >= len(values):
                break
            bound[name] = str(values[len(bound)])

    if not bound:
        return template
    return PLACEHOLDER_RE.sub(lambda m: bound.get(m.group(1), m.group(0)), template)


# ---------------------------------------------------------------------------
# Fallback composition
# ---------------------------------------------------------------------------


def lookup(
    catalog: Catalog | None,
    key: str,
    mode: Mode,
    *,
    count: int | None = None,
    gender: str | None = None,
) -> str | LookupFailure:
    """Run key lookup plus variant selection against one catalog."""
    _require_mode_args(mode, count, gender)
    if catalog is None:
        return CatalogAbsent(key)
    entry = catalog.get(key)
    if entry is None:
        return KeyAbsent(key)
    return select_variant(entry, key, mode, count=count, gender=gender)


def resolve(
    primary: Catalog | None,
    fallback: Catalog | None,
    key: str,
    mode: Mode = Mode.PLAIN,
    *,
    count: int | None = None,
    gender: str | None = None,
    args: Arguments | None = None,
) -> Resolution:
    """Resolve *key* against *primary*, then *fallback*.

    The fallback catalog is only consulted when the primary lookup fails
    and it is a different catalog object.  A fallback hit is not
    reported as missing.
    """
    selected = lookup(primary, key, mode, count=count, gender=gender)
    if isinstance(selected, LookupFailure) and fallback is not None and fallback is not primary:
        selected = lookup(fallback, key, mode, count=count, gender=gender)

    if isinstance(selected, LookupFailure):
        return Resolution(MISSING_TEXT, missing=True)
    return Resolution(substitute(selected, args), missing=False)


def explain(
    primary: Catalog | None,
    fallback: Catalog | None,
    key: str,
    mode: Mode = Mode.PLAIN,
    *,
    count: int | None = None,
    gender: str | None = None,
) -> list[LookupFailure]:
    """Return the failures that make *key* unresolvable, primary first.

    An empty list means the key resolves.  Intended for diagnostics and
    completeness reports; ``resolve()`` does not use it.
    """
    first = lookup(primary, key, mode, count=count, gender=gender)
    if not isinstance(first, LookupFailure):
        return []
    failures = [first]

    if fallback is not None and fallback is not primary:
        second = lookup(fallback, key, mode, count=count, gender=gender)
        if not isinstance(second, LookupFailure):
            return []
        failures.append(second)
    return failures
