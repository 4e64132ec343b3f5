"""Catalog registry, language state and per-file translation handles.

Usage::

    from intlkit.i18n import Registry

    registry = Registry.from_directory("messages", lang="en", fallback="en")
    registry.set_lang("fr")

    tr = registry.translation("menu")
    tr.t("title")                               # → "Menu principal"
    tr.t_with_plurial("apples", 5)              # → "5 pommes"
    tr.t_with_gender("welcome", "female")       # → "Bienvenue"
    tr.t_with_arg("hello", ["Ada"])             # → "Bonjour Ada"
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from intlkit.core.config import Settings, get_settings
from intlkit.core.logging import setup_logging
from intlkit.i18n.catalog import Catalog
from intlkit.i18n.loader import WarningSink, catalogs_from_bundle, load_messages
from intlkit.i18n.resolver import Arguments, LookupFailure, Mode, Resolution, explain, resolve

logger = logging.getLogger(__name__)

MissingCallback = Callable[["TranslationHandle", str, Mode, list[LookupFailure]], None]

DEFAULT_LANG = "en"


@dataclass(frozen=True, slots=True)
class LanguageSnapshot:
    """Current and fallback language codes read together."""

    current: str
    fallback: str


class LanguageState:
    """Current/fallback language pair guarded by a lock.

    Setters overwrite unconditionally; whether a catalog exists for a
    code is only checked when a lookup happens.
    """

    def __init__(self, current: str = DEFAULT_LANG, fallback: str = DEFAULT_LANG) -> None:
        self._current = current
        self._fallback = fallback
        self._lock = threading.Lock()

    @property
    def current(self) -> str:
        with self._lock:
            return self._current

    @current.setter
    def current(self, code: str) -> None:
        with self._lock:
            self._current = code

    @property
    def fallback(self) -> str:
        with self._lock:
            return self._fallback

    @fallback.setter
    def fallback(self, code: str) -> None:
        with self._lock:
            self._fallback = code

    def snapshot(self) -> LanguageSnapshot:
        """Read both codes atomically."""
        with self._lock:
            return LanguageSnapshot(self._current, self._fallback)


class TranslationHandle:
    """Lookup operations bound to one file's primary and fallback catalogs.

    Handles are cheap and short-lived: ask the registry for a new one
    after a language switch.

    Args:
        file: Logical file name the handle was requested for.
        primary: Catalog for the current language, if loaded.
        fallback: Catalog for the fallback language, if loaded.
        on_missing: Called with ``(handle, key, mode, failures)`` whenever a
            lookup renders the missing-text placeholder.
    """

    def __init__(
        self,
        file: str,
        primary: Catalog | None,
        fallback: Catalog | None,
        on_missing: MissingCallback | None = None,
    ) -> None:
        self.file = file
        self.primary = primary
        self.fallback = fallback
        self._on_missing = on_missing

    def lookup(
        self,
        key: str,
        mode: Mode = Mode.PLAIN,
        *,
        count: int | None = None,
        gender: str | None = None,
        args: Arguments | None = None,
    ) -> Resolution:
        """Resolve *key* and return the text together with the missing flag."""
        result = resolve(
            self.primary, self.fallback, key, mode, count=count, gender=gender, args=args
        )
        if result.missing and self._on_missing is not None:
            failures = explain(self.primary, self.fallback, key, mode, count=count, gender=gender)
            self._on_missing(self, key, mode, failures)
        return result

    def t(self, key: str) -> str:
        """Return the plain string stored under *key*."""
        return self.lookup(key).text

    def t_with_arg(self, key: str, args: Arguments) -> str:
        """Return the plain string under *key* with placeholders filled from *args*."""
        return self.lookup(key, args=args).text

    def t_with_plurial(self, key: str, count: int, *extra: object) -> str:
        """Return the plural variant for *count*.

        ``count`` fills the first placeholder; *extra* values fill the
        following ones.
        """
        return self.lookup(key, Mode.PLURAL, count=count, args=(count, *extra)).text

    def t_with_gender(self, key: str, gender: str) -> str:
        """Return the variant of *key* for *gender* (exact, case-sensitive)."""
        return self.lookup(key, Mode.GENDERED, gender=gender).text

    def t_with_gender_and_arg(self, key: str, gender: str, args: Arguments) -> str:
        """Return the gender variant of *key* with placeholders filled from *args*."""
        return self.lookup(key, Mode.GENDERED, gender=gender, args=args).text

    def __repr__(self) -> str:
        primary = self.primary.lang if self.primary is not None else None
        fallback = self.fallback.lang if self.fallback is not None else None
        return f"TranslationHandle(file={self.file!r}, primary={primary!r}, fallback={fallback!r})"


class Registry:
    """Owns every loaded catalog plus the current/fallback language state.

    Catalogs are keyed by ``(lang, file)``.  Switching language never
    rebuilds catalogs; it only changes what the next ``translation()``
    call selects.
    """

    def __init__(
        self,
        catalogs: Iterable[Catalog] = (),
        *,
        lang: str = DEFAULT_LANG,
        fallback: str = DEFAULT_LANG,
    ) -> None:
        self._catalogs: dict[tuple[str, str], Catalog] = {}
        self._state = LanguageState(lang, fallback)
        for catalog in catalogs:
            self.add_catalog(catalog)

    # --- Construction ----------------------------------------------------
    @classmethod
    def from_directory(
        cls,
        root: str | Path,
        *,
        lang: str = DEFAULT_LANG,
        fallback: str = DEFAULT_LANG,
        on_warning: WarningSink | None = None,
        check_locale_codes: bool = True,
    ) -> Registry:
        """Load every ``<root>/<lang>/<file>.json`` and build a registry."""
        result = load_messages(root, on_warning=on_warning, check_locale_codes=check_locale_codes)
        return cls(result.catalogs, lang=lang, fallback=fallback)

    @classmethod
    def from_bundle(
        cls,
        bundle: Mapping[str, Mapping[str, Any]],
        *,
        lang: str = DEFAULT_LANG,
        fallback: str = DEFAULT_LANG,
        on_warning: WarningSink | None = None,
    ) -> Registry:
        """Build a registry from a ``{lang: {file: document}}`` mapping."""
        return cls(catalogs_from_bundle(bundle, on_warning=on_warning), lang=lang, fallback=fallback)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Registry:
        """Build a registry from ``INTL_*`` settings.

        Also configures the ``intlkit`` logger at ``settings.LOG_LEVEL``.
        """
        settings = settings or get_settings()
        setup_logging(settings.LOG_LEVEL)
        return cls.from_directory(
            settings.MESSAGES_DIR,
            lang=settings.DEFAULT_LANG,
            fallback=settings.FALLBACK_LANG,
            check_locale_codes=settings.CHECK_LOCALE_CODES,
        )

    # --- Catalogs --------------------------------------------------------
    def add_catalog(self, catalog: Catalog) -> None:
        """Register *catalog*, replacing any catalog for the same (lang, file)."""
        self._catalogs[(catalog.lang, catalog.file)] = catalog

    def catalog(self, lang: str, file: str) -> Catalog | None:
        return self._catalogs.get((lang, file))

    def languages(self) -> list[str]:
        """Return sorted language codes that have at least one catalog."""
        return sorted({lang for lang, _ in self._catalogs})

    def files(self, lang: str | None = None) -> list[str]:
        """Return sorted file names, optionally limited to one language."""
        return sorted({f for code, f in self._catalogs if lang is None or code == lang})

    # --- Language state --------------------------------------------------
    def set_lang(self, code: str) -> None:
        self._state.current = code

    def set_fallback_lang(self, code: str) -> None:
        self._state.fallback = code

    def get_lang(self) -> str:
        return self._state.current

    def get_fallback_lang(self) -> str:
        return self._state.fallback

    # --- Lookups ---------------------------------------------------------
    def translation(self, file: str) -> TranslationHandle:
        """Return a handle for *file* in the current and fallback languages.

        Either catalog may be missing; lookups then degrade to the other
        side or to the missing-text placeholder.
        """
        langs = self._state.snapshot()
        return TranslationHandle(
            file,
            self._catalogs.get((langs.current, file)),
            self._catalogs.get((langs.fallback, file)),
            on_missing=_log_missing,
        )


def _log_missing(
    handle: TranslationHandle, key: str, mode: Mode, failures: list[LookupFailure]
) -> None:
    logger.debug(
        "Missing translation %s/%s: %s",
        handle.file,
        key,
        ", ".join(type(f).__name__ for f in failures),
        extra={
            "event": "missing_text",
            "file": handle.file,
            "key": key,
            "mode": mode.value,
            "lang": handle.primary.lang if handle.primary is not None else None,
        },
    )
