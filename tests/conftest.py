"""Shared test fixtures: in-memory documents and on-disk message trees."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from intlkit.i18n import Catalog, Registry

EN_SHOP: dict[str, Any] = {
    "greeting": "Hello",
    "hello_name": "Hello {{name}}",
    "apples": {"none": "No apples", "one": "One apple", "many": "{{count}} apples"},
    "pears": {"one": "One pear", "many": "{{count}} pears"},
    "welcome": {"male": "Welcome sir", "female": "Welcome madam"},
    "welcome_named": {"male": "Welcome Mr {{name}}", "female": "Welcome Ms {{name}}"},
    "only_en": "English only",
}

FR_SHOP: dict[str, Any] = {
    "greeting": "Bonjour",
    "hello_name": "Bonjour {{name}}",
    "apples": {"none": "Pas de pommes", "one": "Une pomme", "many": "{{count}} pommes"},
    "pears": {"none": "Pas de poires", "one": "Une poire", "many": "{{count}} poires"},
    "welcome": {"male": "Bienvenue monsieur", "female": "Bienvenue madame"},
}


def write_tree(root: Path, tree: dict[str, dict[str, Any]]) -> Path:
    """Write ``{lang: {file: document_or_raw_text}}`` under *root*."""
    for lang, files in tree.items():
        lang_dir = root / lang
        lang_dir.mkdir(parents=True, exist_ok=True)
        for file, content in files.items():
            text = content if isinstance(content, str) else json.dumps(content)
            (lang_dir / f"{file}.json").write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def en_shop() -> Catalog:
    return Catalog.from_document("en", "shop", EN_SHOP)


@pytest.fixture
def fr_shop() -> Catalog:
    return Catalog.from_document("fr", "shop", FR_SHOP)


@pytest.fixture
def registry(en_shop: Catalog, fr_shop: Catalog) -> Registry:
    """Registry with en + fr ``shop`` catalogs, current=en, fallback=en."""
    return Registry([en_shop, fr_shop], lang="en", fallback="en")


@pytest.fixture
def messages_dir(tmp_path: Path) -> Path:
    """A valid messages tree with en/fr ``shop`` files."""
    return write_tree(tmp_path / "messages", {"en": {"shop": EN_SHOP}, "fr": {"shop": FR_SHOP}})


@pytest.fixture
def restore_intlkit_logger() -> Iterator[None]:
    """Undo setup_logging() so later tests still see records via caplog."""
    logger = logging.getLogger("intlkit")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
