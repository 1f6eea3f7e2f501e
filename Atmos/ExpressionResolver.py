# ExpressionResolver.py
"""""
Public entry point: expression text + SymbolTable -> Decimal.

resolve() works on a snapshot of the table taken when it is called, so the
UI may add or delete variables (or reload constants) while a result is on
its way without changing that result.
"""""

from . import MathEngine
from . import SymbolExpander as SE
from . import error as E

# Debug toggle for optional prints in this module
debug = False


def build_context(table, expander):
    """Numeric value of every symbol that can be reduced to one.

    Symbols that fail (unknown names, cycles, text that is no number) are left
    out; one broken constant must not make the whole table unusable.
    """
    context = {}
    for name in table.names():
        try:
            context[name] = expander.resolve_symbol(name)
        except E.ResolveError as e:
            if debug == True:
                print(f"Skipping {name}: {e.message}")
    return context


def resolve(expression, table, max_depth=SE.DEFAULT_MAX_DEPTH,
            max_passes=SE.DEFAULT_MAX_PASSES, degrees=False):
    """Reduce expression to a Decimal.

    Raises one of UnknownSymbol, CyclicOrUnbounded, MalformedLiteral or
    EvaluationFailed (all ResolveError); nothing else escapes. The error's
    `equation` is the expression as it was given.
    """
    snapshot = table.snapshot()
    try:
        expander = SE.SymbolExpander(snapshot, evaluate=MathEngine.evaluate,
                                     max_depth=max_depth, max_passes=max_passes,
                                     degrees=degrees)
        context = build_context(snapshot, expander)
        expanded = expander.expand(expression, bindings=context)

        if debug == True:
            print(f"{expression} -> {expanded}")

        try:
            return MathEngine.evaluate(expanded, context, degrees=degrees)
        except E.MathError as e:
            raise E.EvaluationFailed(e.message, cause_code=e.code)

    except E.ResolveError as e:
        e.equation = expression
        raise e
    except RecursionError:
        raise E.CyclicOrUnbounded(expression, equation=expression)
    except Exception as e:
        raise E.EvaluationFailed(f"Unexpected crash: {e}", code="9999", equation=expression)


def resolve_or_error(expression, table, **options):
    """Like resolve(), but returns the ResolveError instead of raising it."""
    try:
        return resolve(expression, table, **options)
    except E.ResolveError as e:
        return e
