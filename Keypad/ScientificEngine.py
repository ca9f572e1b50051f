# ScientificEngine
"""""
Function and constant table handed to sympy when an expression is parsed.

The keypad writes math.js style names (log10, log, asin, e, i, ...).
This module maps each of them onto the matching sympy object, and wraps
the trig functions when the calculator runs in degree mode.
"""""
import sympy

from . import config_manager as config_manager


degree_setting_sincostan = 1 if config_manager.load_setting_value("degree_mode") else 0  # 0 = radians, 1 = degrees


def to_radians(angle):
    return angle * sympy.pi / 180


def to_degrees(angle):
    return angle * 180 / sympy.pi


def log10(number):
    return sympy.log(number, 10)


def trig_functions(degrees):
    """Return sin/cos/tan and their inverses, converted for degree mode if asked."""
    if not degrees:
        return {
            "sin": sympy.sin,
            "cos": sympy.cos,
            "tan": sympy.tan,
            "asin": sympy.asin,
            "acos": sympy.acos,
            "atan": sympy.atan,
        }

    return {
        "sin": lambda x: sympy.sin(to_radians(x)),
        "cos": lambda x: sympy.cos(to_radians(x)),
        "tan": lambda x: sympy.tan(to_radians(x)),
        "asin": lambda x: to_degrees(sympy.asin(x)),
        "acos": lambda x: to_degrees(sympy.acos(x)),
        "atan": lambda x: to_degrees(sympy.atan(x)),
    }


def namespace(degrees=None):
    """Names the evaluator understands. 'log' is the natural logarithm."""
    if degrees is None:
        degrees = degree_setting_sincostan == 1

    names = {
        "log": sympy.log,
        "log10": log10,
        "sqrt": sympy.sqrt,
        "exp": sympy.exp,
        "abs": sympy.Abs,
        "e": sympy.E,
        "pi": sympy.pi,
        "i": sympy.I,
        "Matrix": sympy.Matrix,
    }
    names.update(trig_functions(degrees))
    return names
