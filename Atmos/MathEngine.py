# MathEngine.py
"""""
Arithmetic evaluator for Atmos+.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of tokens.
2) Parser (AST): builds an Abstract Syntax Tree (recursive-descent, precedence aware).
3) Evaluator: walks the tree with a mapping of name -> Decimal bindings.
4) Formatter: renders results using Decimal and the decimal_places preference.

The evaluator only knows numbers, the names it is given and the functions of
ScientificEngine. Replacing constant/variable names by their values happens
before this module is called (see SymbolExpander).
"""""

from decimal import Decimal, localcontext, Overflow, InvalidOperation, DivisionByZero

from . import ScientificEngine
from . import error as E

# Debug toggle for optional prints in this module
debug = False

# Supported operators (kept as simple lists for quick membership checks)
Operations = ["+", "-", "*", "/", "%", "^"]
Punctuation = ["(", ")", ","]
DIGITS = "0123456789"

# Decimal precision used for every evaluation
PRECISION = 50


# -----------------------------
# Utilities / small helpers
# -----------------------------

def isOp(zahl):
    """Return index of a known basic operator or -1 if unknown."""
    try:
        return Operations.index(zahl)
    except ValueError:
        return -1


def is_name(token):
    """True for identifier tokens (everything that is a str but no operator/bracket)."""
    return isinstance(token, str) and token not in Operations and token not in Punctuation


def is_name_start(char):
    return char.isalpha() or char == "_" or char == "√"


def is_name_char(char):
    return char.isalpha() or char in DIGITS or char == "_"


# -----------------------------
# AST node types
# -----------------------------

class Number:
    """AST node for numeric literal backed by Decimal."""
    def __init__(self, value):
        # Always normalize input to Decimal via string to avoid float artifacts
        if not isinstance(value, Decimal):
            value = str(value)
        self.value = Decimal(value)

    def evaluate(self, bindings, degrees=False):
        return self.value

    def __repr__(self):
        return f"Number({self.value})"


class Variable:
    """AST node for a name; looked up in the bindings, then in the built-in constants."""
    def __init__(self, name):
        self.name = name

    def evaluate(self, bindings, degrees=False):
        if self.name in bindings:
            return Decimal(bindings[self.name])
        if ScientificEngine.is_constant(self.name):
            return ScientificEngine.CONSTANTS[self.name]
        raise E.CalculationError(f"Unknown variable: {self.name}", code="3031")

    def __repr__(self):
        return f"Variable('{self.name}')"


class Call:
    """AST node for a function call like sqrt(2) or log(8, 2)."""
    def __init__(self, name, arguments):
        self.name = name
        self.arguments = arguments

    def evaluate(self, bindings, degrees=False):
        werte = [argument.evaluate(bindings, degrees) for argument in self.arguments]
        return ScientificEngine.call_function(self.name, werte, degrees=degrees)

    def __repr__(self):
        return f"Call({self.name!r}, {self.arguments})"


class BinOp:
    """AST node for a binary operation: left <operator> right."""
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def evaluate(self, bindings, degrees=False):
        """Evaluate numeric subtree and apply the binary operator."""
        left_value = self.left.evaluate(bindings, degrees)
        right_value = self.right.evaluate(bindings, degrees)

        if self.operator == '+':
            return left_value + right_value
        elif self.operator == '-':
            return left_value - right_value
        elif self.operator == '*':
            return left_value * right_value
        elif self.operator == '^':
            return left_value ** right_value
        elif self.operator == '/':
            if right_value == 0:
                raise E.CalculationError("Division by zero", code="3003")
            return left_value / right_value
        elif self.operator == '%':
            if right_value == 0:
                raise E.CalculationError("Modulo by zero", code="3003")
            return left_value % right_value
        else:
            raise E.CalculationError(f"Unknown operator: {self.operator}", code="3004")

    def __repr__(self):
        return f"BinOp({self.operator!r}, left={self.left}, right={self.right})"


# -----------------------------
# Tokenizer
# -----------------------------

def translator(problem):
    """Convert raw input string into a token list (Decimals, operators, brackets, names).

    Notes:
    - Numbers may use scientific notation ('6.02e23', '1E-3'); an 'e' that is
      not followed by digits starts a name instead ('2e' -> 2 * e).
    - Inserts implicit multiplication where needed (e.g. '2(3)' -> 2 * (3), '2R' -> 2 * R).
    """
    full_problem = []
    b = 0

    while b < len(problem):
        current_char = problem[b]

        # --- Numbers: digits, decimal separator, optional exponent ---
        if current_char in DIGITS or current_char == ".":
            start = b
            hat_schon_komma = False  # Only one dot allowed in a numeric literal

            while b < len(problem) and (problem[b] in DIGITS or problem[b] == "."):
                if problem[b] == ".":
                    if hat_schon_komma:
                        raise E.SyntaxError("Double comma sign.", code="3008")
                    hat_schon_komma = True
                b += 1

            if b < len(problem) and problem[b] in "eE":
                c = b + 1
                if c < len(problem) and problem[c] in "+-":
                    c += 1
                if c < len(problem) and problem[c] in DIGITS:
                    while c < len(problem) and problem[c] in DIGITS:
                        c += 1
                    b = c

            str_number = problem[start:b]
            if str_number == ".":
                raise E.SyntaxError("Unexpected token: .", code="3011")
            full_problem.append(Decimal(str_number))
            continue

        # --- Names: variables, constants, functions ---
        elif is_name_start(current_char):
            start = b
            b += 1
            if current_char != "√":
                while b < len(problem) and is_name_char(problem[b]):
                    b += 1
            full_problem.append(problem[start:b])
            continue

        # --- Operators ---
        elif isOp(current_char) != -1:
            full_problem.append(current_char)

        # --- Parentheses and argument separator ---
        elif current_char in Punctuation:
            full_problem.append(current_char)

        # --- Whitespace (ignored) ---
        elif current_char.isspace():
            pass

        else:
            raise E.SyntaxError(f"Unexpected token: {current_char}", code="3011")

        b = b + 1

    # --- Implicit multiplication pass ---
    b = 0
    while b + 1 < len(full_problem):
        aktuelles_element = full_problem[b]
        nachfolger = full_problem[b + 1]

        ist_funktionsaufruf = is_name(aktuelles_element) and ScientificEngine.is_function(aktuelles_element)
        links_fertig = isinstance(aktuelles_element, Decimal) or aktuelles_element == ")" or \
            (is_name(aktuelles_element) and not ist_funktionsaufruf)
        rechts_beginnt = nachfolger == "(" or is_name(nachfolger) or \
            (isinstance(nachfolger, Decimal) and not isinstance(aktuelles_element, Decimal)
             and not is_name(aktuelles_element))

        if links_fertig and rechts_beginnt:
            full_problem.insert(b + 1, '*')

        b += 1

    return full_problem


# -----------------------------
# Parser (recursive descent)
# -----------------------------

def ast(analysed):
    """Parse a token stream into an AST.
    Implements precedence via nested functions: factor -> power -> unary -> term -> sum.
    """
    analysed = list(analysed)

    if not analysed:
        raise E.CalculationError("Missing Number.", code="3027")

    # ---- Parsing functions in precedence order ----

    def parse_factor(tokens):
        """Numbers, names, function calls and sub-expressions in '()'."""
        if len(tokens) > 0:
            token = tokens.pop(0)
        else:
            raise E.CalculationError("Missing Number.", code="3027")

        # Parenthesized sub-expression
        if token == "(":
            baum_in_der_klammer = parse_sum(tokens)
            if not tokens or tokens.pop(0) != ')':
                raise E.SyntaxError("Missing closing parenthesis ')'", code="3009")
            return baum_in_der_klammer

        elif isinstance(token, Decimal):
            return Number(token)

        elif is_name(token) and ScientificEngine.is_function(token):
            # function must be followed by '('
            if not tokens or tokens.pop(0) != '(':
                raise E.SyntaxError(f"Missing opening parenthesis after function {token}", code="3010")
            argumente = [parse_sum(tokens)]
            while tokens and tokens[0] == ',':
                tokens.pop(0)
                argumente.append(parse_sum(tokens))
            if not tokens or tokens.pop(0) != ')':
                raise E.SyntaxError(f"Missing closing parenthesis after function '{token}'", code="3009")
            return Call(token, argumente)

        elif is_name(token):
            return Variable(token)

        else:
            raise E.SyntaxError(f"Unexpected token: {token}", code="3011")

    def parse_unary(tokens):
        """Handle leading '+'/'-' (unary minus becomes 0 - operand)."""
        if tokens and tokens[0] in ('+', '-'):
            operator = tokens.pop(0)
            operand = parse_unary(tokens)

            if operator == '-':
                if isinstance(operand, Number):
                    return Number(-operand.value)
                return BinOp(Number('0'), '-', operand)
            else:
                return operand
        return parse_power(tokens)

    def parse_power(tokens):
        """Exponentiation '^' (right-associative, binds tighter than unary minus on its left)."""
        aktueller_baum = parse_factor(tokens)
        if tokens and tokens[0] == "^":
            operator = tokens.pop(0)
            rechtes_teil = parse_unary(tokens)
            aktueller_baum = BinOp(aktueller_baum, operator, rechtes_teil)
        return aktueller_baum

    def parse_term(tokens):
        """Multiplication, division and modulo."""
        aktueller_baum = parse_unary(tokens)
        while tokens and tokens[0] in ("*", "/", "%"):
            operator = tokens.pop(0)
            rechtes_teil = parse_unary(tokens)
            aktueller_baum = BinOp(aktueller_baum, operator, rechtes_teil)
        return aktueller_baum

    def parse_sum(tokens):
        """Addition and subtraction."""
        aktueller_baum = parse_term(tokens)
        while tokens and tokens[0] in ("+", "-"):
            operator = tokens.pop(0)
            rechte_seite = parse_term(tokens)
            aktueller_baum = BinOp(aktueller_baum, operator, rechte_seite)
        return aktueller_baum

    finaler_baum = parse_sum(analysed)

    if analysed:
        raise E.SyntaxError(f"Unexpected token: {analysed[0]}", code="3011")

    if debug == True:
        print("Final AST:")
        print(finaler_baum)

    return finaler_baum


# -----------------------------
# Result formatting
# -----------------------------

def cleanup(ergebnis, target_decimals):
    """Round a Decimal result for display.

    Returns:
        (rendered_text, rounding_flag)
    where rounding_flag tells whether rounding changed the value.
    """
    rounding = False

    if not ergebnis.is_finite():
        return str(ergebnis), rounding

    if ergebnis == ergebnis.to_integral_value():
        # Integer result: return normalized without rounding
        return format(ergebnis.normalize(), 'f'), rounding

    with localcontext() as ctx:
        ctx.prec = 128  # Prevent quantize overflow for long results
        rundungs_muster = Decimal(1).scaleb(-max(0, int(target_decimals)))
        gerundetes_ergebnis = ergebnis.quantize(rundungs_muster)

    if gerundetes_ergebnis != ergebnis:
        rounding = True

    return format(gerundetes_ergebnis.normalize(), 'f'), rounding


# -----------------------------
# Public entry point
# -----------------------------

def evaluate(problem, bindings=None, degrees=False):
    """Main API: tokenize -> parse -> evaluate with bindings -> Decimal."""
    if bindings is None:
        bindings = {}
    try:
        with localcontext() as ctx:
            ctx.prec = PRECISION
            finaler_baum = ast(translator(problem))
            ergebnis = finaler_baum.evaluate(bindings, degrees)
            if debug == True:
                print(f"{problem} -> {ergebnis}")
            return +ergebnis

    # Known numeric overflow
    except Overflow:
        raise E.CalculationError(
            message="Number too large (Arithmetic overflow).",
            code="3026",
            equation=problem
        )
    except (InvalidOperation, DivisionByZero):
        raise E.CalculationError(
            message="Invalid operation (e.g. negative base with fractional exponent).",
            code="3032",
            equation=problem
        )
    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise e
    # Convert unexpected Python exceptions to our unified error type
    except Exception as e:
        raise E.MathError(message=str(e).strip(), code="9999", equation=problem)


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    print(evaluate(problem))


if __name__ == "__main__":
    test_main()
