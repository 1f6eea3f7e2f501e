"""
Tests for SymbolExpander: whole-word substitution, nested definitions and the
cycle/depth guards.
"""

from decimal import Decimal

import pytest

from Atmos import MathEngine
from Atmos import error as E
from Atmos.SymbolExpander import SymbolExpander
from Atmos.SymbolTable import SymbolTable


def expand(expression, constants=None, variables=None, **options):
    table = SymbolTable(constants=constants, variables=variables)
    return SymbolExpander(table, **options).expand(expression)


class TestSubstitution:
    """Names become numeric literals"""

    def test_plain_constant(self) -> None:
        assert expand("C + 2", constants={"C": "5"}) == "5 + 2"

    def test_all_occurrences(self) -> None:
        assert expand("C * C - C", constants={"C": "3"}) == "3 * 3 - 3"

    def test_suffix_in_definition_and_expression(self) -> None:
        assert expand("2f + C", constants={"C": "1.5f"}) == "2 + 1.5"

    def test_nested_definition(self) -> None:
        """A definition that is an expression is reduced to a number first"""
        assert expand("A + 1", variables={"A": "B * 2", "B": "3"}) == "6 + 1"

    def test_negative_value_bracketed(self) -> None:
        expanded = expand("C^2", constants={"C": "-5"})
        assert expanded == "(-5)^2"
        assert MathEngine.evaluate(expanded) == 25

    def test_function_names_survive(self) -> None:
        assert expand("sqrt(C) + pi", constants={"C": "16"}) == "sqrt(16) + pi"

    def test_bindings_are_tolerated(self) -> None:
        table = SymbolTable()
        expander = SymbolExpander(table)
        assert expander.expand("Q + 1", bindings={"Q": Decimal("1")}) == "Q + 1"

    def test_scientific_literal_not_mistaken_for_name(self) -> None:
        """The 'e' in 1e5 is not the symbol e"""
        assert expand("1e5 + e", constants={"e": "2"}) == "1e5 + 2"

    def test_order_does_not_change_result(self) -> None:
        definitions = {"A": "B + C", "B": "2", "C": "D * 3", "D": "4"}
        reversed_definitions = dict(reversed(list(definitions.items())))
        first = MathEngine.evaluate(expand("A * D", constants=definitions))
        second = MathEngine.evaluate(expand("A * D", variables=reversed_definitions))
        assert first == second == Decimal("56")


class TestWordBoundary:
    """Short names never match inside longer ones"""

    def test_r_not_inside_room(self) -> None:
        with pytest.raises(E.UnknownSymbol) as info:
            expand("ROOM + 1", constants={"R": "9"})
        assert info.value.name == "ROOM"

    def test_both_defined(self) -> None:
        assert expand("R + ROOM + R2", constants={"R": "1", "ROOM": "2", "R2": "3"}) == "1 + 2 + 3"

    def test_name_after_digit_is_multiplied(self) -> None:
        """'2R' reads 2 * R, so the value is bracketed instead of glued on"""
        expanded = expand("2R + 1", constants={"R": "9"})
        assert expanded == "2(9) + 1"
        assert MathEngine.evaluate(expanded) == 19

    def test_exponent_after_digit_is_no_name(self) -> None:
        assert expand("2E3 * E", constants={"E": "2"}) == "2E3 * 2"


class TestFailures:
    """Unknown names, cycles and definitions that are no number"""

    def test_unknown_name(self) -> None:
        with pytest.raises(E.UnknownSymbol) as info:
            expand("X + 1")
        assert info.value.name == "X"
        assert info.value.code == "8001"

    def test_unknown_name_after_digit(self) -> None:
        with pytest.raises(E.UnknownSymbol) as info:
            expand("2X + 1")
        assert info.value.name == "X"

    def test_unknown_inside_definition_keeps_trail(self) -> None:
        with pytest.raises(E.UnknownSymbol) as info:
            expand("A", variables={"A": "B + 1", "B": "X * 2"})
        assert info.value.name == "X"
        assert info.value.trail == ["A", "B"]
        assert info.value.origin() == "A"

    def test_self_reference(self) -> None:
        with pytest.raises(E.CyclicOrUnbounded) as info:
            expand("A + 1", variables={"A": "A + 1"})
        assert info.value.name == "A"
        assert info.value.trail == ["A"]

    def test_indirect_cycle(self) -> None:
        with pytest.raises(E.CyclicOrUnbounded) as info:
            expand("A", variables={"A": "B + 1", "B": "A + 1"})
        assert info.value.name == "A"
        assert info.value.trail == ["A", "B"]

    def test_depth_limit(self) -> None:
        """A long but finite chain fails closed once it is deeper than max_depth"""
        chain = {f"V{i}": f"V{i + 1} + 1" for i in range(9)}
        chain["V9"] = "1"
        assert MathEngine.evaluate(expand("V0", constants=chain)) == 10
        with pytest.raises(E.CyclicOrUnbounded) as info:
            expand("V0", constants=chain, max_depth=3)
        assert info.value.name == "V3"

    def test_pass_limit(self) -> None:
        with pytest.raises(E.CyclicOrUnbounded):
            expand("1 + 1", max_passes=0)

    def test_malformed_definition(self) -> None:
        with pytest.raises(E.MalformedLiteral) as info:
            expand("A * 2", constants={"A": "1 +"})
        assert info.value.name == "A"
        assert info.value.text == "1 +"
        assert info.value.code == "8003"


class TestResolveSymbol:
    """Single-symbol resolution and caching"""

    def test_value_and_cache(self) -> None:
        calls = []

        def counting_evaluate(expr, bindings, degrees=False):
            calls.append(expr)
            return MathEngine.evaluate(expr, bindings, degrees)

        table = SymbolTable(constants={"A": "B * 2", "B": "3"})
        expander = SymbolExpander(table, evaluate=counting_evaluate)
        assert expander.resolve_symbol("A") == 6
        assert expander.resolve_symbol("A") == 6
        assert calls == ["3 * 2"]
