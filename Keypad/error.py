# error.py
"""""
Error types shared by the keypad calculator.

Every failure that crosses a module boundary is a MathError carrying a
4-digit code, so the controller can turn it into a display string instead
of crashing.
"""""

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

class SolverError(MathError):
    pass

class EngineMissingError(MathError):
    pass

Error_Dictionary = {

    "3": "Calculator Error",
    "9": "Unexpected Error"

}

# Error codes are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number

ERROR_MESSAGES = {
    "3003": "Division by Zero",
    "3009": "Missing ']'. ",
    "3010": "Missing '['. ",
    "3011": "Undefined symbol: ",  # + symbol
    "3012": "Invalid character: ",  # + character
    "3026": "Number too big.",
    "3027": "Missing Number.",
    "3030": "Evaluator not available.",
    "3031": "Leading coefficient is zero (not a quadratic).",

    "9999": "Unexpected Error: "  # + error
}

# Fixed display strings for the result line
SYNTAX_ERROR_TEXT = "Syntax Error"
ENGINE_MISSING_TEXT = "Error: Math lib missing"

def describe(error):
    """Return 'Error <code>: <text>' for a MathError, used for debug output."""
    return f"Error {error.code}: {ERROR_MESSAGES.get(error.code, 'Unknown error')}{error.message}"
