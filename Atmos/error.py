# error.py


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class SyntaxError(MathError):
    pass

class CalculationError(MathError):
    pass

class ConfigError(MathError):
    pass

class LoaderError(MathError):
    pass


class ResolveError(MathError):
    """Base for everything that can go wrong while reducing an expression to a number.

    `trail` lists the symbols through which the failure was reached,
    outermost first (e.g. ['A', 'B'] when A -> B -> unknown X).
    """
    def __init__(self, message, code="8000", equation=None):
        super().__init__(message, code=code, equation=equation)
        self.trail = []

    def origin(self):
        return self.trail[0] if self.trail else None


class UnknownSymbol(ResolveError):
    def __init__(self, name, equation=None):
        super().__init__(f"Unknown symbol: {name}", code="8001", equation=equation)
        self.name = name


class CyclicOrUnbounded(ResolveError):
    def __init__(self, name, equation=None):
        super().__init__(f"Cyclic or unbounded definition: {name}", code="8002", equation=equation)
        self.name = name


class MalformedLiteral(ResolveError):
    def __init__(self, text, name=None, equation=None):
        if name:
            message = f"Definition of {name} is not a number: {text}"
        else:
            message = f"Not a number: {text}"
        super().__init__(message, code="8003", equation=equation)
        self.text = text
        self.name = name


class EvaluationFailed(ResolveError):
    def __init__(self, message, code="8004", equation=None, cause_code=None):
        super().__init__(message, code=code, equation=equation)
        self.cause_code = cause_code




Error_Dictionary= {

    "1" : "Missing Files",
    "2" : "Scientific Calculation Error",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "6" : "Communication Error",
    "8" : "Symbol Resolution Error",

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "2001" : "Unknown function: ", # + function name
    "2002" : "Invalid argument for function: ", # + function name
    "2003" : "Wrong number of arguments: ", # + function name

    "3003" : "Division by Zero",
    "3004" : "Invalid Operator: ", # + operator
    "3008" : "More than one '.' in one number.",
    "3009" : "Missing ')'. ",
    "3010" : "Missing '('. ",
    "3011" : "Unexpected Token: ", # + Token
    "3026" : "Number too big.",
    "3027" : "Missing Number.",
    "3031" : "Unknown variable: ", # + name
    "3032" : "Invalid operation.",

    "4002" : "Load already running!",

    "5001" : "Configuration could not be read.",
    "5002" : "Not all Settings could be saved: ", # + Error raising setting

    "6001" : "Could not fetch source: ", # + url
    "6002" : "No constants found in source.",
    "6003" : "Catalog could not be parsed.",

    "8001" : "Unknown symbol: ", # + name
    "8002" : "Cyclic or unbounded definition: ", # + name
    "8003" : "Definition is not a number: ", # + definition
    "8004" : "Evaluation failed: ", # + evaluator message

    "9999" : "Unexpected Error: " #+error
}
