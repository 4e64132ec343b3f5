"""Tests for Catalog.from_document and the read-only catalog view."""

from __future__ import annotations

import logging

import pytest

from intlkit.i18n.catalog import Catalog, CatalogBuildError
from intlkit.i18n.entries import GenderedEntry, PlainEntry, PluralEntry
from tests.conftest import EN_SHOP


class TestFromDocument:
    """Building catalogs from parsed documents."""

    def test_builds_all_keys(self) -> None:
        """Every document key becomes a catalog key."""
        catalog = Catalog.from_document("en", "shop", EN_SHOP)
        assert catalog.lang == "en"
        assert catalog.file == "shop"
        assert len(catalog) == len(EN_SHOP)
        assert set(catalog) == set(EN_SHOP)

    def test_entry_shapes(self) -> None:
        """Strings, plural maps and gender maps keep their shapes."""
        catalog = Catalog.from_document("en", "shop", EN_SHOP)
        assert isinstance(catalog.get("greeting"), PlainEntry)
        assert isinstance(catalog.get("apples"), PluralEntry)
        assert isinstance(catalog.get("welcome"), GenderedEntry)

    def test_missing_key_returns_none(self) -> None:
        """get() of an unknown key is None."""
        catalog = Catalog.from_document("en", "shop", EN_SHOP)
        assert catalog.get("nope") is None
        assert "nope" not in catalog

    def test_keys_sorted(self) -> None:
        """keys() is alphabetical."""
        catalog = Catalog.from_document("en", "x", {"b": "2", "a": "1"})
        assert catalog.keys() == ["a", "b"]

    def test_empty_document(self) -> None:
        """An empty object is an empty catalog."""
        catalog = Catalog.from_document("en", "empty", {})
        assert len(catalog) == 0

    def test_non_object_root_rejected(self) -> None:
        """A list at the root cannot be a catalog."""
        with pytest.raises(CatalogBuildError, match="document root must be an object"):
            Catalog.from_document("en", "shop", ["a", "b"])


class TestInvalidKeys:
    """Unusable values drop their own key, not the catalog."""

    def test_invalid_key_skipped(self) -> None:
        """Valid keys survive next to null / number / empty-object values."""
        catalog = Catalog.from_document(
            "fr", "menu", {"ok": "fine", "version": None, "size": 3, "bad": {}}
        )
        assert catalog.keys() == ["ok"]
        assert catalog.get("ok") == PlainEntry("fine")

    def test_invalid_key_reported_with_context(self) -> None:
        """on_invalid receives one error per skipped key with lang/file/key."""
        errors: list[CatalogBuildError] = []
        Catalog.from_document("fr", "menu", {"ok": "fine", "bad": {}}, on_invalid=errors.append)
        assert len(errors) == 1
        err = errors[0]
        assert (err.lang, err.file, err.key) == ("fr", "menu", "bad")
        assert "fr/menu key 'bad'" in str(err)

    def test_invalid_key_logged_without_callback(self, caplog: pytest.LogCaptureFixture) -> None:
        """Without on_invalid the skipped key is logged as a warning."""
        with caplog.at_level(logging.WARNING, logger="intlkit.i18n.catalog"):
            Catalog.from_document("en", "shop", {"greeting": "Hello", "version": None})
        records = [r for r in caplog.records if getattr(r, "event", None) == "invalid_entry"]
        assert len(records) == 1
        assert records[0].key == "version"


class TestImmutability:
    """Catalogs cannot be changed after construction."""

    def test_entries_read_only(self) -> None:
        """The entries mapping rejects assignment."""
        catalog = Catalog.from_document("en", "shop", EN_SHOP)
        with pytest.raises(TypeError):
            catalog.entries["new"] = PlainEntry("x")  # type: ignore[index]

    def test_attributes_frozen(self) -> None:
        """lang / file / entries cannot be reassigned."""
        catalog = Catalog.from_document("en", "shop", EN_SHOP)
        with pytest.raises(AttributeError):
            catalog.lang = "fr"  # type: ignore[misc]

    def test_source_document_not_shared(self) -> None:
        """Mutating the source document does not affect the catalog."""
        document = {"greeting": "Hello"}
        catalog = Catalog.from_document("en", "shop", document)
        document["greeting"] = "Changed"
        assert catalog.get("greeting") == PlainEntry("Hello")
