# ScientificEngine
import math
from decimal import Decimal

from . import error as E


# Constants the evaluator knows without a binding
CONSTANTS = {
    "pi": Decimal(repr(math.pi)),
    "π": Decimal(repr(math.pi)),
}

TRIG = ("sin", "cos", "tan")


def _log(number, base=None):
    if number <= 0:
        raise ValueError("log of non-positive number")
    if base is None:
        return math.log(number)
    if base <= 0 or base == 1:
        raise ValueError("invalid logarithm base")
    return math.log(number, base)


def _round(number, digits=0):
    return round(number, int(digits))


# name -> (callable, min_args, max_args)
FUNCTIONS = {
    "sqrt": (math.sqrt, 1, 1),
    "√": (math.sqrt, 1, 1),
    "abs": (abs, 1, 1),
    "exp": (math.exp, 1, 1),
    "ln": (math.log, 1, 1),
    "log": (_log, 1, 2),
    "sin": (math.sin, 1, 1),
    "cos": (math.cos, 1, 1),
    "tan": (math.tan, 1, 1),
    "floor": (math.floor, 1, 1),
    "ceil": (math.ceil, 1, 1),
    "round": (_round, 1, 2),
    "min": (min, 2, None),
    "max": (max, 2, None),
}


def is_function(name):
    return name in FUNCTIONS


def is_constant(name):
    return name in CONSTANTS


def call_function(name, arguments, degrees=False):
    """Apply a named function to Decimal arguments and return a Decimal.

    Works in float internally, except for the functions that are exact on
    Decimal (abs/min/max/floor/ceil/round).
    """
    if name not in FUNCTIONS:
        raise E.CalculationError(f"Unknown function: {name}", code="2001")

    function, min_args, max_args = FUNCTIONS[name]
    if len(arguments) < min_args or (max_args is not None and len(arguments) > max_args):
        raise E.CalculationError(f"Wrong number of arguments for {name}: {len(arguments)}", code="2003")

    if name in ("abs", "min", "max", "floor", "ceil"):
        return Decimal(function(*arguments))

    if name == "round":
        return Decimal(_round(*arguments))

    values = [float(argument) for argument in arguments]
    if name in TRIG and degrees:
        values[0] = math.radians(values[0])

    try:
        ergebnis = function(*values)
    except (ValueError, OverflowError) as e:
        raise E.CalculationError(f"{name}({', '.join(str(a) for a in arguments)}): {e}", code="2002")

    return Decimal(repr(ergebnis))
