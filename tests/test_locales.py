"""Tests for the ISO 639-1 locale check."""

from __future__ import annotations

import pytest

from intlkit.i18n.locales import ISO_639_1, is_standard_locale


class TestIsStandardLocale:
    """Test is_standard_locale()."""

    @pytest.mark.parametrize("code", ["en", "fr", "EN", "pt-BR", "zh_Hant", "sr-Latn-RS"])
    def test_accepted(self, code: str) -> None:
        """Known languages, with or without region/script subtags."""
        assert is_standard_locale(code)

    @pytest.mark.parametrize("code", ["", "xx", "eng", "klingon", "en-", "en--US", "e1"])
    def test_rejected(self, code: str) -> None:
        """Unknown, three-letter or malformed codes."""
        assert not is_standard_locale(code)

    def test_table_has_two_letter_codes(self) -> None:
        """The table only holds lower-case two-letter codes."""
        assert all(len(c) == 2 and c.islower() for c in ISO_639_1)
        assert {"en", "fr", "de", "ja"} <= ISO_639_1
