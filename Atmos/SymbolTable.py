# SymbolTable.py
"""""
Constants and user variables.

Two independent name -> definition mappings. Constants come in bulk from a
source file and are only ever swapped as a whole; variables are added and
deleted one by one by the user. When the same name is in both, the user
variable wins.
"""""

from types import MappingProxyType


class SymbolTable:

    def __init__(self, constants=None, variables=None):
        self._constants = dict(constants or {})
        self._variables = dict(variables or {})

    # --- Read access ---

    @property
    def constants(self):
        return MappingProxyType(self._constants)

    @property
    def variables(self):
        return MappingProxyType(self._variables)

    def lookup(self, name):
        """Definition of name, or None. User variables are checked before constants."""
        if name in self._variables:
            return self._variables[name]
        return self._constants.get(name)

    def __contains__(self, name):
        return name in self._variables or name in self._constants

    def names(self):
        """All defined names, sorted, each once."""
        return sorted(set(self._constants) | set(self._variables))

    def snapshot(self):
        """Independent copy; later changes to self are not visible in it."""
        return SymbolTable(self._constants, self._variables)

    # --- Write access ---

    def upsert_variable(self, name, definition):
        """Insert or overwrite a user variable. Empty names are ignored (returns False)."""
        name = name.strip()
        if not name:
            return False
        self._variables[name] = definition.strip()
        return True

    def remove_variable(self, name):
        self._variables.pop(name, None)

    def replace_constants(self, constants):
        self._constants = dict(constants)

    # --- Constant listing helpers for the constants tab ---

    def sorted_constants(self, descending=False):
        return sorted(self._constants.items(), key=lambda item: item[0], reverse=descending)

    def search_constants(self, query, descending=False):
        """Constants whose name or definition contains query (case-insensitive)."""
        rows = self.sorted_constants(descending)
        if not query:
            return rows
        query = query.lower()
        return [(name, value) for name, value in rows
                if query in name.lower() or query in value.lower()]


def to_clipboard_text(rows):
    """One 'name<TAB>value' line per row."""
    return "".join(f"{name}\t{value}\n" for name, value in rows)
