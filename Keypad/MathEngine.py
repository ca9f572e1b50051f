# MathEngine.py
"""""
Evaluator collaborator for the keypad calculator.

Pipeline
--------
1) Rewriter: turns keypad notation into sympy input (π, math.js style
   matrix literals such as [1,2;3,4]).
2) Guards: only known names and keypad characters reach the parser, and
   powers too large to compute exactly are refused (3026).
3) Parser / Evaluator: delegated to sympy's parse_expr, with '^' read as
   power and implicit multiplication ('2pi', '3(4)').
4) Checks: undefined symbols and division by zero become MathErrors.
5) Formatter: renders values for the result line (scalars to a fixed number
   of significant digits, complex numbers as 're + imi', matrices as rows).

Every failure leaves this module as an error.MathError.
"""""

import math
import re

import sympy
from sympy.logic.boolalg import BooleanAtom
from sympy.matrices import MatrixBase
from sympy.parsing.sympy_parser import (
    parse_expr,
    standard_transformations,
    implicit_multiplication,
    convert_xor,
)

from . import config_manager as config_manager
from . import ScientificEngine
from . import error as E

# Debug toggle for optional prints in this module
debug = config_manager.load_setting_value("debug") == True

TRANSFORMATIONS = standard_transformations + (implicit_multiplication, convert_xor)

# Powers whose exact value would need more digits than this are refused
MAX_DIGITS = 10000

# Largest float still printed as a plain integer
MAX_PLAIN_INTEGER = 1e16

# Characters a keypad entry may contain once rewritten; names are checked separately
ALLOWED_CHARACTERS = set("0123456789.+-*/^()[],;<> ")

# Names sympy itself prints inside results that are fed back through Ans
RESULT_NAMES = {"I", "E", "Abs", "Matrix", "oo", "True", "False"}

TOKEN_PATTERN = re.compile(r"\d*\.?\d+(?:[eE][+-]?\d+)?|[A-Za-z]\w*")


# -----------------------------
# Utilities / small helpers
# -----------------------------

def isfloat(zahl):
    """Return True if the given string can be parsed as float; else False."""
    try:
        float(zahl)
        return True
    except (TypeError, ValueError):
        return False


def plain_number(value):
    """Render a Python number the way the display expects ('2.0' -> '2')."""
    if isinstance(value, float) and abs(value) < MAX_PLAIN_INTEGER and value == int(value):
        return str(int(value))
    return str(value)


def split_top_level(text, separator):
    """Split text at separators that are not nested inside any bracket."""
    parts = []
    depth = 0
    current = ""
    for current_char in text:
        if current_char in "([":
            depth += 1
        elif current_char in ")]":
            depth -= 1
        if current_char == separator and depth == 0:
            parts.append(current)
            current = ""
        else:
            current += current_char
    parts.append(current)
    return parts


def isolate_bracket(problem, start):
    """Return (content between '[' at start and its matching ']', index after ']')."""
    b = start + 1
    bracket_count = 1
    while bracket_count != 0 and b < len(problem):
        if problem[b] == '[':
            bracket_count += 1
        elif problem[b] == ']':
            bracket_count -= 1
        b += 1
    if bracket_count != 0:
        raise E.SyntaxError("Missing closing bracket ']'", code="3009", equation=problem)
    return problem[start + 1:b - 1], b


# -----------------------------
# Rewriter
# -----------------------------

def matrix_literal(content):
    """'1,2;3,4' -> 'Matrix([[1,2],[3,4]])'. Nested '[[..],[..]]' is kept as rows."""
    rows = split_top_level(content, ";")
    if len(rows) > 1:
        body = ",".join("[" + row + "]" for row in rows)
    elif content.strip().startswith("["):
        body = content
    else:
        body = "[" + content + "]"
    return "Matrix([" + body + "])"


def rewrite(problem):
    """Translate keypad notation into text sympy can parse."""
    problem = problem.replace("π", "pi")

    rewritten = ""
    b = 0
    while b < len(problem):
        current_char = problem[b]
        if current_char == "[":
            content, b = isolate_bracket(problem, b)
            rewritten += matrix_literal(content)
            continue
        elif current_char == "]":
            raise E.SyntaxError("Missing opening bracket '['", code="3010", equation=problem)
        rewritten += current_char
        b += 1

    if debug == True:
        print(f"Rewritten: {problem!r} -> {rewritten!r}")
    return rewritten


# -----------------------------
# Guards
# -----------------------------

def check_names(rewritten, problem):
    """Only keypad characters and known names may be handed to parse_expr."""
    for current_char in rewritten:
        if current_char in ALLOWED_CHARACTERS or current_char.isascii() and current_char.isalpha():
            continue
        raise E.SyntaxError(f"Invalid character: {current_char}", code="3012", equation=problem)

    allowed_names = set(ScientificEngine.namespace()) | RESULT_NAMES
    for match in TOKEN_PATTERN.finditer(rewritten):
        token = match.group()
        if token[0].isalpha() and token not in allowed_names:
            raise E.SyntaxError(f"Undefined symbol: {token}", code="3011", equation=problem)


def size_namespace():
    """Like ScientificEngine.namespace(), but every function stays unevaluated."""
    names = {}
    for name, value in ScientificEngine.namespace().items():
        if isinstance(value, sympy.Basic):
            names[name] = value
        elif name == "Matrix":
            names[name] = lambda rows: sympy.Function("Matrix")(*sympy.flatten(rows))
        else:
            names[name] = sympy.Function(name)
    return names


def estimate_digits(node):
    """Rough log10 of the magnitude of an unevaluated node; raises 3026 for huge powers."""
    if node.is_Rational:
        if node == 0:
            return 0.0
        return max(math.log10(abs(node.p)), math.log10(node.q))

    if node.is_Pow:
        base_digits = estimate_digits(node.base)
        exponent = 10 ** min(estimate_digits(node.exp), 308.0)
        digits = base_digits * exponent
        # 'not <=' also catches nan
        if not digits <= MAX_DIGITS:
            raise E.CalculationError("Number too big.", code="3026")
        return digits

    if node.args:
        sizes = [estimate_digits(arg) for arg in node.args]
        if node.is_Mul:
            return sum(sizes)
        return max(sizes) + math.log10(len(sizes))

    try:
        return abs(math.log10(abs(float(node))))
    except (TypeError, ValueError, OverflowError):
        return 1.0


def check_size(rewritten, problem):
    try:
        tree = parse_expr(
            rewritten,
            local_dict=size_namespace(),
            transformations=TRANSFORMATIONS,
            evaluate=False,
        )
    except Exception as e:
        # The real parse below reports malformed input with its own error
        if debug == True:
            print(f"Size check skipped: {e}")
        return

    if isinstance(tree, sympy.Basic):
        estimate_digits(tree)


# -----------------------------
# Value inspection
# -----------------------------

def is_matrix(value):
    return isinstance(value, MatrixBase)


def is_scalar(value):
    """True only for real numbers; matrices, complex values and booleans are excluded."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return True
    return isinstance(value, sympy.Expr) and value.is_number and value.is_real == True


def to_number(value):
    """Convert a real scalar value to int or float for memory arithmetic."""
    if isinstance(value, (int, float)):
        return value
    if value.is_Integer:
        return int(value)
    return float(value)


def to_expression(value):
    """Text form of a value, parseable again when it replaces 'Ans'."""
    if is_matrix(value):
        return str(value.tolist())
    return str(value)


def check_result(value, problem):
    if is_matrix(value):
        for entry in value:
            check_result(entry, problem)
        return

    if not isinstance(value, sympy.Basic):
        return

    if value.has(sympy.zoo, sympy.nan):
        raise E.CalculationError("Division by zero", code="3003", equation=problem)

    free_symbols = getattr(value, "free_symbols", set())
    if free_symbols:
        names = ", ".join(sorted(str(symbol) for symbol in free_symbols))
        raise E.SyntaxError(f"Undefined symbol: {names}", code="3011", equation=problem)


# -----------------------------
# Formatter
# -----------------------------

def format_real(value, precision):
    try:
        number = float(value)
    except OverflowError:
        raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026")

    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"

    ausgabe_string = f"{number:.{precision}g}"
    # 1e-07 -> 1e-7, as the display shows exponents without padding
    ausgabe_string = re.sub(r"e([+-])0+(\d)", r"e\1\2", ausgabe_string)
    if ausgabe_string == "-0":
        ausgabe_string = "0"
    return ausgabe_string


def format_complex(value, precision):
    real_part, imag_part = value.as_real_imag()
    real_text = format_real(real_part, precision)
    imag_text = format_real(abs(imag_part), precision)
    if imag_text == "1":
        imag_text = ""

    if real_text == "0":
        sign = "-" if imag_part < 0 else ""
        return f"{sign}{imag_text}i"
    sign = "-" if imag_part < 0 else "+"
    return f"{real_text} {sign} {imag_text}i"


def format(value, precision=None):
    """Render an evaluated value for the result line."""
    if precision is None:
        precision = config_manager.load_setting_value("display_precision")

    if is_matrix(value):
        rows = []
        for r in range(value.rows):
            rows.append("[" + ", ".join(format(value[r, c], precision) for c in range(value.cols)) + "]")
        return "[" + ", ".join(rows) + "]"

    if isinstance(value, (bool, BooleanAtom)):
        return "true" if bool(value) else "false"

    if is_scalar(value):
        return format_real(value, precision)

    if isinstance(value, sympy.Expr) and value.is_number:
        return format_complex(value, precision)

    return str(value)


# -----------------------------
# Public entry point
# -----------------------------

def evaluate(problem):
    """Main API: rewrite -> parse/evaluate with sympy -> check. Returns the raw value."""
    if not problem or not problem.strip():
        raise E.SyntaxError("Missing Number.", code="3027", equation=problem)

    try:
        rewritten = rewrite(problem)
        check_names(rewritten, problem)
        check_size(rewritten, problem)
        ergebnis = parse_expr(
            rewritten,
            local_dict=ScientificEngine.namespace(),
            transformations=TRANSFORMATIONS,
        )
        check_result(ergebnis, problem)
        return ergebnis

    # Re-raise our domain errors after attaching the source expression
    except E.MathError as e:
        e.equation = problem
        raise e
    except ZeroDivisionError:
        raise E.CalculationError("Division by zero", code="3003", equation=problem)
    except OverflowError:
        raise E.CalculationError("Number too large (Arithmetic overflow).", code="3026", equation=problem)
    # Convert parser and sympy failures to our unified error type
    except Exception as e:
        error_message = str(e).strip()
        parts = error_message.split(maxsplit=1)
        code = "9999"
        message = error_message

        # If an error string already begins with a 4-digit code, respect it
        if parts and parts[0].isdigit() and len(parts[0]) == 4:
            code = parts[0]
            if len(parts) > 1:
                message = parts[1]
        raise E.MathError(message=message, code=code, equation=problem)


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    try:
        print(format(evaluate(problem)))
    except E.MathError as e:
        print(E.describe(e))


if __name__ == "__main__":
    test_main()
