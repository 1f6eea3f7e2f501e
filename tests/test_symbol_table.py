"""
Tests for SymbolTable: two-table lookup, variable edits, bulk constant swap.
"""

import pytest

from Atmos.SymbolTable import SymbolTable, to_clipboard_text


class TestLookup:
    """Lookup across constants and user variables"""

    def test_finds_constant_and_variable(self) -> None:
        table = SymbolTable(constants={"R": "8.314"}, variables={"V": "2"})
        assert table.lookup("R") == "8.314"
        assert table.lookup("V") == "2"
        assert table.lookup("X") is None
        assert "R" in table and "V" in table and "X" not in table

    def test_variable_overrides_constant(self) -> None:
        """A user variable with the same name wins; deleting it uncovers the constant"""
        table = SymbolTable(constants={"R": "8"})
        table.upsert_variable("R", "9")
        assert table.lookup("R") == "9"
        table.remove_variable("R")
        assert table.lookup("R") == "8"

    def test_lookup_is_case_sensitive(self) -> None:
        table = SymbolTable(constants={"R": "8"})
        assert table.lookup("r") is None

    def test_names_sorted_and_unique(self) -> None:
        table = SymbolTable(constants={"b": "1", "a": "2"}, variables={"a": "3", "c": "4"})
        assert table.names() == ["a", "b", "c"]


class TestVariables:
    """Adding, replacing and deleting user variables"""

    def test_upsert_overwrites(self) -> None:
        table = SymbolTable()
        assert table.upsert_variable("x", "1")
        assert table.upsert_variable("x", "2")
        assert dict(table.variables) == {"x": "2"}

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_is_ignored(self, name) -> None:
        """Empty names are a no-op, not an error"""
        table = SymbolTable()
        assert table.upsert_variable(name, "1") is False
        assert dict(table.variables) == {}

    def test_remove_is_idempotent(self) -> None:
        table = SymbolTable(variables={"x": "1"})
        table.remove_variable("x")
        table.remove_variable("x")
        table.remove_variable("never_there")
        assert dict(table.variables) == {}

    def test_views_are_read_only(self) -> None:
        table = SymbolTable(constants={"R": "8"})
        with pytest.raises(TypeError):
            table.constants["R"] = "9"


class TestConstants:
    """Bulk replacement and snapshots"""

    def test_replace_is_wholesale(self) -> None:
        table = SymbolTable(constants={"OLD": "1", "R": "8"})
        table.replace_constants({"R": "8.314", "NEW": "2"})
        assert dict(table.constants) == {"R": "8.314", "NEW": "2"}

    def test_replace_keeps_variables(self) -> None:
        table = SymbolTable(constants={"R": "8"}, variables={"x": "1"})
        table.replace_constants({})
        assert dict(table.variables) == {"x": "1"}

    def test_snapshot_is_independent(self) -> None:
        """Changes after the snapshot are not visible in it"""
        table = SymbolTable(constants={"R": "8"}, variables={"x": "1"})
        snapshot = table.snapshot()
        table.upsert_variable("y", "2")
        table.remove_variable("x")
        table.replace_constants({"Q": "3"})
        assert snapshot.names() == ["R", "x"]


class TestListing:
    """Sorting, searching and clipboard text for the constants tab"""

    def setup_method(self) -> None:
        self.table = SymbolTable(constants={"T0C": "273.15f", "R": "8.314462618f", "OneAtmosphere": "101.325f"})

    def test_sorted_both_ways(self) -> None:
        assert [name for name, _ in self.table.sorted_constants()] == ["OneAtmosphere", "R", "T0C"]
        assert [name for name, _ in self.table.sorted_constants(descending=True)] == ["T0C", "R", "OneAtmosphere"]

    def test_search_name_or_value_case_insensitive(self) -> None:
        assert self.table.search_constants("atmos") == [("OneAtmosphere", "101.325f")]
        assert self.table.search_constants("273") == [("T0C", "273.15f")]
        assert len(self.table.search_constants("")) == 3

    def test_clipboard_text(self) -> None:
        rows = [("R", "8.314f"), ("T0C", "273.15f")]
        assert to_clipboard_text(rows) == "R\t8.314f\nT0C\t273.15f\n"
        assert to_clipboard_text([]) == ""
