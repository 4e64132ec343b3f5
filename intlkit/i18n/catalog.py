"""Immutable per-(language, file) translation catalog."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from intlkit.i18n.entries import Entry, InvalidEntryError, entry_from_value

logger = logging.getLogger(__name__)


class CatalogBuildError(ValueError):
    """A document, or one key of it, that cannot be turned into catalog entries.

    Raised for a non-object document root; reported (not raised) for a
    single invalid key.
    """

    def __init__(self, lang: str, file: str, reason: str, key: str | None = None) -> None:
        self.lang = lang
        self.file = file
        self.key = key
        self.reason = reason
        where = f"{lang}/{file}" + (f" key '{key}'" if key is not None else "")
        super().__init__(f"{where}: {reason}")


@dataclass(frozen=True, eq=False)
class Catalog:
    """Key → entry mapping for one language and one logical file.

    Built once by ``from_document`` and never mutated afterwards.

    Attributes:
        lang: Language code (the messages sub-directory name).
        file: Logical file name (the JSON file stem).
        entries: Read-only view of the key → entry mapping.
    """

    lang: str
    file: str
    entries: Mapping[str, Entry]

    @classmethod
    def from_document(
        cls,
        lang: str,
        file: str,
        document: Any,
        *,
        on_invalid: Callable[[CatalogBuildError], None] | None = None,
    ) -> Catalog:
        """Build a catalog from a parsed JSON document.

        Keys whose value is not a valid entry are left out of the catalog
        and reported to *on_invalid* (logged when it is not given); the
        remaining keys are kept.

        Raises:
            CatalogBuildError: If *document* is not an object.
        """
        if not isinstance(document, Mapping):
            raise CatalogBuildError(
                lang, file, f"document root must be an object, got {type(document).__name__}"
            )

        entries: dict[str, Entry] = {}
        for key, value in document.items():
            try:
                entries[key] = entry_from_value(value)
            except InvalidEntryError as exc:
                error = CatalogBuildError(lang, file, str(exc), key=key)
                if on_invalid is not None:
                    on_invalid(error)
                else:
                    logger.warning(
                        "Skipping invalid entry: %s",
                        error,
                        extra={"event": "invalid_entry", "lang": lang, "file": file, "key": key},
                    )

        return cls(lang=lang, file=file, entries=MappingProxyType(entries))

    def get(self, key: str) -> Entry | None:
        return self.entries.get(key)

    def keys(self) -> list[str]:
        return sorted(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
