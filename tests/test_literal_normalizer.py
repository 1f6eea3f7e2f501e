"""
Tests for LiteralNormalizer: stripping C# number markers and reading plain numbers.
"""

from decimal import Decimal

import pytest

from Atmos import LiteralNormalizer as LN


class TestNormalize:
    """Marker stripping on whole expressions"""

    @pytest.mark.parametrize("raw, expected", [
        ("1.5f + 2", "1.5 + 2"),
        ("6.02e23f*2", "6.02e23*2"),
        ("1e-3f", "1e-3"),
        ("10d / 0.5m", "10 / 0.5"),
        ("(293.15f)", "(293.15)"),
        (".5f", ".5"),
    ])
    def test_strips_marker_after_literal(self, raw, expected) -> None:
        """The marker after a full numeric literal is removed"""
        assert LN.normalize(raw) == expected

    def test_identifiers_untouched(self) -> None:
        """Names that contain digits or marker letters are left alone"""
        text = "x2f + alpha1f + 3fx + Rf + df"
        assert LN.normalize(text) == text

    def test_idempotent(self) -> None:
        """A second run changes nothing"""
        for raw in ["1.5f + 2f", "T0C + 20.0f", "1e5f*R", "2ff", "x2f"]:
            once = LN.normalize(raw)
            assert LN.normalize(once) == once

    def test_plain_expression_unchanged(self) -> None:
        """No markers, no change"""
        assert LN.normalize("1 + 2 * (3 - 4)") == "1 + 2 * (3 - 4)"


class TestParseNumber:
    """Recognising definitions that are already a number"""

    def test_plain_and_suffixed(self) -> None:
        """Plain, suffixed and signed literals parse"""
        assert LN.parse_number("42") == Decimal("42")
        assert LN.parse_number(" 1.5f ") == Decimal("1.5")
        assert LN.parse_number("-2") == Decimal("-2")
        assert LN.parse_number("6.02e23f") == Decimal("6.02e23")

    @pytest.mark.parametrize("text", ["R * 2", "inf", "nan", "1_000", "", "1.5.2", "0x1F", "2 + 3"])
    def test_not_a_number(self, text) -> None:
        """Anything that is not a bare literal gives None"""
        assert LN.parse_number(text) is None
        assert not LN.is_plain_number(text)


class TestRender:
    """Text used for substitution"""

    def test_positive(self) -> None:
        assert LN.render(Decimal("5")) == "5"

    def test_negative_is_bracketed(self) -> None:
        """Negative values get brackets so powers keep their meaning"""
        assert LN.render(Decimal("-5")) == "(-5)"
