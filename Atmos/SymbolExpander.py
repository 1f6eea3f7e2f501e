# SymbolExpander.py
"""""
Text-level symbol substitution.

Definitions are free-form text ('R * T0C', '1.5f', 'MolesCellStandard / 2')
that only become parseable once every name in them is a number, so this
works on strings instead of a syntax tree:

1) strip literal markers (LiteralNormalizer),
2) replace every whole-word occurrence of a known name by its value,
   resolving the name's own definition first when it is not a plain number,
3) repeat until a pass changes nothing,
4) report whatever name-shaped token is still left.

Nested definitions are resolved depth-first with the current path kept as a
tuple: meeting a name that is already on the path is a cycle. Depth and
pass count are both capped, so every call terminates.
"""""

import re
from decimal import Decimal

from . import MathEngine
from . import ScientificEngine
from . import LiteralNormalizer
from . import error as E

# Debug toggle for optional prints in this module
debug = False

DEFAULT_MAX_DEPTH = 32
DEFAULT_MAX_PASSES = 64

# Name-shaped token. It may follow a digit ('2R' is 2 * R) but not a letter,
# '_' or '.', and the 'e' of an exponent ('1e5', '2E-3') is no name.
NAME_TOKEN = re.compile(r"(?<![^\W\d])(?<!\.)(?!(?<=\d)[eE][-+]?\d)([^\W\d]\w*)")


class SymbolExpander:
    """Replaces symbol names by numbers, using one SymbolTable.

    Give it a snapshot when the table may change while it is in use. Resolved
    values are cached per instance, so one expander should not outlive the
    snapshot it was built for.
    """

    def __init__(self, table, evaluate=None, max_depth=DEFAULT_MAX_DEPTH,
                 max_passes=DEFAULT_MAX_PASSES, degrees=False):
        self.table = table
        self.evaluate = evaluate or MathEngine.evaluate
        self.max_depth = max_depth
        self.max_passes = max_passes
        self.degrees = degrees
        self._resolved = {}

    # --- Public API ---

    def expand(self, expression, bindings=None):
        """Return expression with every known name replaced by a numeric literal.

        Raises UnknownSymbol for a leftover name that is neither a function
        call, a built-in constant nor in bindings, and CyclicOrUnbounded /
        MalformedLiteral when a referenced definition cannot be reduced.
        """
        return self._expand(expression, depth=0, path=(), bindings=bindings or {})

    def resolve_symbol(self, name):
        """Decimal value of one defined name."""
        return self._resolve(name, depth=0, path=())

    # --- Internals ---

    def _expand(self, expression, depth, path, bindings):
        expr = LiteralNormalizer.normalize(expression)

        passes = 0
        while True:
            passes += 1
            if passes > self.max_passes:
                raise E.CyclicOrUnbounded(path[-1] if path else expression)

            expr, changed = self._substitute(expr, depth, path)

            if debug == True:
                print(f"pass {passes} (depth {depth}): {expr}")

            if not changed:
                break

        leftover = self._leftover_name(expr, bindings)
        if leftover is not None:
            raise E.UnknownSymbol(leftover)

        return expr

    def _substitute(self, expr, depth, path):
        """One pass: every name-shaped token defined in the table becomes its value."""
        changed = False

        def replace(match):
            nonlocal changed
            name = match.group(1)
            if name not in self.table:
                return name
            changed = True
            literal = LiteralNormalizer.render(self._resolve(name, depth, path))
            # '2R' must read '2(9)', not '29'
            if match.start() > 0 and expr[match.start() - 1].isdigit():
                return f"({literal})"
            return literal

        return NAME_TOKEN.sub(replace, expr), changed

    def _leftover_name(self, expr, bindings):
        for match in NAME_TOKEN.finditer(expr):
            name = match.group(1)
            rest = expr[match.end():].lstrip()
            if ScientificEngine.is_function(name) and rest.startswith("("):
                continue
            if ScientificEngine.is_constant(name) or name in bindings:
                continue
            return name
        return None

    def _resolve(self, name, depth, path):
        if name in self._resolved:
            return self._resolved[name]

        if name in path or depth >= self.max_depth:
            raise E.CyclicOrUnbounded(name)

        definition = self.table.lookup(name)
        if definition is None:
            raise E.UnknownSymbol(name)

        value = LiteralNormalizer.parse_number(definition)
        if value is None:
            value = self._resolve_definition(name, definition, depth, path)

        self._resolved[name] = value
        return value

    def _resolve_definition(self, name, definition, depth, path):
        try:
            inner = self._expand(definition, depth + 1, path + (name,), bindings={})
        except E.ResolveError as e:
            e.trail.insert(0, name)
            raise

        try:
            value = self.evaluate(inner, {}, degrees=self.degrees)
        except E.MathError:
            error = E.MalformedLiteral(definition, name=name)
            error.trail.append(name)
            raise error

        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        return value
