# EquationSolver.py
"""""
Guided quadratic solver used while the calculator is in EQN mode.

A session walks through a fixed set of steps:

    SELECT_TYPE -> GET_A -> GET_B -> GET_C -> SHOW_X1 -> SHOW_X2 -> (done)

Each submitted entry (the text typed before pressing '=') advances the
session by at most one step. advance_equation() never mutates the
controller; it returns the session to keep (or None once the sequence is
over), the text for the result line and whether the entry buffer should
be cleared.
"""""

import math

from . import config_manager as config_manager
from . import MathEngine
from . import error as E

# Steps
SELECT_TYPE = "SELECT_TYPE"
GET_A = "GET_A"
GET_B = "GET_B"
GET_C = "GET_C"
SHOW_X1 = "SHOW_X1"
SHOW_X2 = "SHOW_X2"

# Kinds
QUADRATIC = "QUADRATIC"
CUBIC = "CUBIC"

# Prompts
ENTRY_PROMPT = "EQN Mode: Press = to start"
TYPE_PROMPT = "1:Quad(ax²+bx+c) 2:Cubic"
SELECT_AGAIN = "Select 1 or 2"
CUBIC_MISSING = "Cubic Not Impl"
SOLVED = "Eqn Solved. AC to exit"
ZERO_A = "Math ERROR a=0"

# Coefficient steps: (step, attribute, next step, prompt for the next step)
COEFFICIENT_STEPS = {
    GET_A: ("a", GET_B, "b?"),
    GET_B: ("b", GET_C, "c?"),
    GET_C: ("c", SHOW_X1, None),
}


class EquationSession:
    """State of one solving sequence. Only the InputController holds one."""

    def __init__(self):
        self.step = SELECT_TYPE
        self.kind = None
        self.a = None
        self.b = None
        self.c = None
        self.x1 = None
        self.x2 = None

    def __repr__(self):
        return (f"EquationSession(step={self.step!r}, kind={self.kind!r}, "
                f"a={self.a}, b={self.b}, c={self.c}, x1={self.x1!r}, x2={self.x2!r})")


def parse_coefficient(text):
    """Return the entry as float, or None if it is not a number."""
    text = text.strip()
    if not MathEngine.isfloat(text):
        return None
    value = float(text)
    if math.isnan(value):
        return None
    return value


def solve_quadratic(a, b, c, decimals=None):
    """Roots of a*x^2 + b*x + c = 0.

    Real roots come back as floats (x1 uses +sqrt(d)); complex roots as the
    strings 're + imi' / 're - imi' rounded to `decimals` places.
    """
    if decimals is None:
        decimals = config_manager.load_setting_value("complex_decimals")

    if a == 0:
        raise E.SolverError("Leading coefficient is zero.", code="3031")

    d = b * b - 4 * a * c  # Discriminant

    if d > 0:
        x1 = (-b + math.sqrt(d)) / (2 * a)
        x2 = (-b - math.sqrt(d)) / (2 * a)
        return x1, x2

    elif d == 0:
        x = -b / (2 * a)
        return x, x

    # Rounded first, then '+ 0.0' turns -0.0 into 0.0, so '-0.0000' never shows
    real = round(-b / (2 * a), decimals) + 0.0
    imag = abs(math.sqrt(-d) / (2 * a))
    real_text = f"{real:.{decimals}f}"
    imag_text = f"{imag:.{decimals}f}"
    return f"{real_text} + {imag_text}i", f"{real_text} - {imag_text}i"


def show_root(name, value):
    return f"{name}={MathEngine.plain_number(value)}"


def advance_equation(session, text):
    """Feed one submitted entry into the solver.

    Returns (session, result_text, clear_entry). session is None when the
    sequence has ended.
    """
    # --- 0. First submit in EQN mode starts a sequence ---
    if session is None:
        return EquationSession(), TYPE_PROMPT, True

    # --- 1. Type selection ---
    if session.step == SELECT_TYPE:
        choice = text.strip()
        if choice == "1":
            session.kind = QUADRATIC
            session.step = GET_A
            return session, "a?", True
        elif choice == "2":
            # Cubic equations are not supported; the sequence ends here
            session.kind = CUBIC
            return None, CUBIC_MISSING, True
        return session, SELECT_AGAIN, True

    # --- 2. Coefficients ---
    if session.step in COEFFICIENT_STEPS:
        name, next_step, prompt = COEFFICIENT_STEPS[session.step]
        value = parse_coefficient(text)
        if value is None:
            # Stay on this step and keep the entry so it can be corrected
            return session, f"Invalid {name}", False

        setattr(session, name, value)
        if next_step != SHOW_X1:
            session.step = next_step
            return session, prompt, True

        try:
            session.x1, session.x2 = solve_quadratic(session.a, session.b, session.c)
        except E.SolverError:
            session.step = GET_A
            return session, ZERO_A, True
        session.step = SHOW_X1
        return session, show_root("X1", session.x1), True

    # --- 3. Root reveal ---
    if session.step == SHOW_X1:
        session.step = SHOW_X2
        return session, show_root("X2", session.x2), True

    # SHOW_X2: sequence complete
    return None, SOLVED, True
