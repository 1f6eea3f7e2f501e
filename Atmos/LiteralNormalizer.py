# LiteralNormalizer.py
"""""
Numeric literal clean-up.

Constants copied out of C# sources carry type markers ('1.5f', '2e-3f',
'10d', '0.1m'). The evaluator only understands plain decimal/scientific
numbers, so the markers are stripped before anything else happens.
"""""

import re
from decimal import Decimal, InvalidOperation

SUFFIXES = "fFdDmM"

# A whole numeric literal followed by one marker letter. Neither side may touch
# another word character or a dot, so 'x2f', 'a1.5f' or '2fx' stay untouched.
NUMBER_WITH_SUFFIX = re.compile(
    r"(?<![\w.])((?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)[" + SUFFIXES + r"](?![\w.])"
)

PLAIN_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def normalize(expression):
    """Strip float/double/decimal markers from every numeric literal in the text.

    Idempotent: a second run finds nothing left to strip.
    """
    return NUMBER_WITH_SUFFIX.sub(r"\1", expression)


def parse_number(text):
    """Return the Decimal value of a bare numeric literal, or None.

    Surrounding whitespace and a single marker letter are accepted; anything
    else (names, operators, 'inf', '1_000') is not a plain number.
    """
    candidate = normalize(text.strip())
    if not PLAIN_NUMBER.fullmatch(candidate):
        return None
    try:
        return Decimal(candidate)
    except InvalidOperation:
        return None


def is_plain_number(text):
    return parse_number(text) is not None


def render(value):
    """Text used when a symbol is replaced by its value.

    Negative numbers are bracketed so that 'C^2' with C = -5 reads '(-5)^2'.
    """
    text = str(value)
    if value < 0:
        return f"({text})"
    return text
