"""Load translation catalogs from a ``messages`` directory tree.

Expected layout::

    messages/
        en/
            menu.json
            errors.json
        fr/
            menu.json

Each sub-directory is a language, each ``*.json`` file one logical
file named by its stem.  Problems are reported as ``LoadWarning``
values (logged by default) and never abort loading: a broken file or key is
skipped and everything else stays usable.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from intlkit.i18n.catalog import Catalog, CatalogBuildError
from intlkit.i18n.locales import is_standard_locale

logger = logging.getLogger(__name__)

_DOCUMENT = TypeAdapter(dict[str, Any])


class WarningKind(str, Enum):
    MESSAGES_DIR_MISSING = "messages_dir_missing"
    MISSING_FILE = "missing_file"
    PARSE_FAILED = "parse_failed"
    NONSTANDARD_LOCALE = "nonstandard_locale"


@dataclass(frozen=True, slots=True)
class LoadWarning:
    """A non-fatal problem found while loading.

    Attributes:
        kind: What went wrong.
        message: Human-readable description.
        lang: Language folder involved, if any.
        file: Logical file involved, if any.
        key: Translation key involved, if any.
    """

    kind: WarningKind
    message: str
    lang: str | None = None
    file: str | None = None
    key: str | None = None


WarningSink = Callable[[LoadWarning], None]


@dataclass(slots=True)
class LoadResult:
    catalogs: list[Catalog] = field(default_factory=list)
    warnings: list[LoadWarning] = field(default_factory=list)


def log_warning(warning: LoadWarning) -> None:
    """Default sink: emit *warning* on the module logger."""
    logger.warning(
        warning.message,
        extra={
            "event": warning.kind.value,
            "lang": warning.lang,
            "file": warning.file,
            "key": warning.key,
        },
    )


class _Reporter:
    """Collects warnings and forwards each one to the sink."""

    def __init__(self, sink: WarningSink | None) -> None:
        self._sink = sink or log_warning
        self.warnings: list[LoadWarning] = []

    def __call__(
        self,
        kind: WarningKind,
        message: str,
        *,
        lang: str | None = None,
        file: str | None = None,
        key: str | None = None,
    ) -> None:
        warning = LoadWarning(kind, message, lang=lang, file=file, key=key)
        self.warnings.append(warning)
        self._sink(warning)


# ---------------------------------------------------------------------------
# Directory scanning
# ---------------------------------------------------------------------------


def _scan(root: Path) -> dict[str, dict[str, Path]]:
    """Return ``{lang: {file_stem: path}}`` for every JSON file under *root*."""
    tree: dict[str, dict[str, Path]] = {}
    for lang_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        tree[lang_dir.name] = {
            path.stem: path
            for path in sorted(lang_dir.iterdir())
            if path.is_file() and path.suffix == ".json"
        }
    return tree


def _check_completeness(tree: Mapping[str, Mapping[str, Any]], report: _Reporter) -> None:
    """Warn once per (lang, file) that exists for some languages but not this one."""
    all_files: set[str] = set().union(*(files.keys() for files in tree.values()))
    for lang, files in tree.items():
        for file in sorted(all_files - set(files)):
            report(
                WarningKind.MISSING_FILE,
                f"Folder '{lang}' is missing file '{file}'",
                lang=lang,
                file=file,
            )


def _check_locale_codes(langs: list[str], report: _Reporter) -> None:
    for lang in langs:
        if not is_standard_locale(lang):
            report(
                WarningKind.NONSTANDARD_LOCALE,
                f"Locale '{lang}' may not exist as an international standard",
                lang=lang,
            )


def _read_document(path: Path) -> dict[str, Any]:
    """Parse *path* as a JSON object.

    Raises:
        OSError: If the file cannot be read.
        ValidationError: If it is not valid JSON or not an object.
    """
    return _DOCUMENT.validate_json(path.read_bytes())


def _read_tree(root: Path, report: _Reporter) -> dict[str, dict[str, dict[str, Any]]] | None:
    if not root.is_dir():
        report(WarningKind.MESSAGES_DIR_MISSING, f"There is no messages folder at '{root}'")
        return None

    tree = _scan(root)
    _check_completeness(tree, report)

    documents: dict[str, dict[str, dict[str, Any]]] = {}
    for lang, files in tree.items():
        documents[lang] = {}
        for file, path in files.items():
            try:
                documents[lang][file] = _read_document(path)
            except (OSError, ValidationError) as exc:
                report(
                    WarningKind.PARSE_FAILED,
                    f"Failed to parse '{path}': {exc}",
                    lang=lang,
                    file=file,
                )
    return documents


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_messages(
    root: str | Path,
    *,
    on_warning: WarningSink | None = None,
    check_locale_codes: bool = True,
) -> LoadResult:
    """Load every catalog under *root*.

    Args:
        root: The messages directory.
        on_warning: Receives each ``LoadWarning``; defaults to logging it.
        check_locale_codes: Warn about folders that are not ISO 639-1 codes.

    Returns:
        ``LoadResult`` with the catalogs that built successfully and all
        warnings emitted on the way.
    """
    root = Path(root)
    report = _Reporter(on_warning)

    documents = _read_tree(root, report)
    if documents is None:
        return LoadResult(warnings=report.warnings)

    if check_locale_codes:
        _check_locale_codes(list(documents), report)

    catalogs = _build_catalogs(documents, report)
    logger.info(
        "Loaded %d catalogs for %d languages",
        len(catalogs),
        len(documents),
        extra={"event": "catalogs_loaded", "path": str(root)},
    )
    return LoadResult(catalogs=catalogs, warnings=report.warnings)


def catalogs_from_bundle(
    bundle: Mapping[str, Mapping[str, Any]],
    *,
    on_warning: WarningSink | None = None,
) -> list[Catalog]:
    """Build catalogs from a ``{lang: {file: document}}`` mapping."""
    return _build_catalogs(bundle, _Reporter(on_warning))


def _invalid_key_reporter(report: _Reporter) -> Callable[[CatalogBuildError], None]:
    """Turn a skipped key into a ``parse_failed`` warning; the file stays loaded."""

    def _on_invalid(error: CatalogBuildError) -> None:
        report(WarningKind.PARSE_FAILED, str(error), lang=error.lang, file=error.file, key=error.key)

    return _on_invalid


def _build_catalogs(
    documents: Mapping[str, Mapping[str, Any]], report: _Reporter
) -> list[Catalog]:
    catalogs: list[Catalog] = []
    on_invalid = _invalid_key_reporter(report)
    for lang, files in documents.items():
        for file, document in files.items():
            try:
                catalogs.append(Catalog.from_document(lang, file, document, on_invalid=on_invalid))
            except CatalogBuildError as exc:
                report(WarningKind.PARSE_FAILED, str(exc), lang=lang, file=file)
    return catalogs


def build_bundle(
    root: str | Path,
    *,
    on_warning: WarningSink | None = None,
) -> dict[str, dict[str, dict[str, Any]]]:
    """Collect every parseable document under *root* into one mapping.

    Missing or unreadable input produces warnings and an empty (or
    partial) bundle rather than an error.
    """
    return _read_tree(Path(root), _Reporter(on_warning)) or {}


def write_bundle(
    root: str | Path,
    out_path: str | Path,
    *,
    on_warning: WarningSink | None = None,
) -> Path:
    """Write ``build_bundle(root)`` to *out_path* as pretty-printed JSON.

    The file is always written, as ``{}`` when there is nothing to bundle.
    """
    out_path = Path(out_path)
    bundle = build_bundle(root, on_warning=on_warning)
    out_path.write_text(json.dumps(bundle, ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info(
        "Wrote translation bundle",
        extra={"event": "bundle_written", "path": str(out_path)},
    )
    return out_path


def read_bundle(path: str | Path) -> dict[str, dict[str, Any]]:
    """Read a bundle written by ``write_bundle``.

    Raises:
        OSError: If the file cannot be read.
        ValidationError: If it is not a JSON object of objects.
    """
    return TypeAdapter(dict[str, dict[str, Any]]).validate_json(Path(path).read_bytes())
