import pytest

from Keypad import EquationSolver
from Keypad import error as E
from Keypad.EquationSolver import EquationSession, advance_equation, solve_quadratic
from Keypad.InputController import InputController


def enter_eqn_mode(calc):
    for _ in range(3):
        calc.handle_key("MODE")
    assert calc.mode == "EQN"


def submit(calc, text=""):
    """Type an entry (MINUS for '-') and press '='; return the result line."""
    for current_char in text:
        calc.handle_key("MINUS" if current_char == "-" else current_char)
    calc.handle_key("EQUALS")
    return calc.get_result()


def solve_with_keys(a, b, c):
    calc = InputController()
    enter_eqn_mode(calc)
    shown = [submit(calc), submit(calc, "1")]
    for coefficient in (a, b, c):
        shown.append(submit(calc, coefficient))
    shown.append(submit(calc))
    shown.append(submit(calc))
    return calc, shown


# -----------------------------
# Full sequences through the controller
# -----------------------------

def test_distinct_real_roots():
    calc, shown = solve_with_keys("1", "-3", "2")
    assert shown == [
        EquationSolver.TYPE_PROMPT,
        "a?",
        "b?",
        "c?",
        "X1=2",
        "X2=1",
        "Eqn Solved. AC to exit",
    ]
    assert calc.eqn_state is None
    assert calc.mode == "EQN"

    # the next '=' starts over at the type menu
    assert submit(calc) == EquationSolver.TYPE_PROMPT
    assert calc.eqn_state.step == EquationSolver.SELECT_TYPE


def test_repeated_root():
    calc, shown = solve_with_keys("1", "2", "1")
    assert shown[4:6] == ["X1=-1", "X2=-1"]


def test_complex_roots():
    calc, shown = solve_with_keys("1", "0", "1")
    assert shown[4:6] == ["X1=0.0000 + 1.0000i", "X2=0.0000 - 1.0000i"]


def test_fractional_roots():
    calc, shown = solve_with_keys("2", "-1", "0")
    assert shown[4:6] == ["X1=0.5", "X2=0"]


def test_entry_buffer_cleared_after_each_step():
    calc = InputController()
    enter_eqn_mode(calc)
    submit(calc)
    submit(calc, "1")
    assert calc.expression == ""
    submit(calc, "5")
    assert calc.expression == ""
    assert calc.eqn_state.a == 5.0


def test_equation_mode_does_not_touch_ans_or_memory():
    calc = InputController()
    for current_char in "7":
        calc.handle_key(current_char)
    calc.handle_key("M+")
    enter_eqn_mode(calc)
    calc.handle_key("M+")
    for current_char in "1":
        calc.handle_key(current_char)
    calc.handle_key("M+")
    assert calc.get_result() == "a?"
    assert calc.memory == 7
    assert calc.ans == 7


def test_session_only_exists_in_eqn_mode():
    calc = InputController()
    submit(calc, "1")
    assert calc.eqn_state is None
    enter_eqn_mode(calc)
    assert calc.eqn_state is None
    submit(calc)
    assert calc.eqn_state is not None


# -----------------------------
# Invalid entries
# -----------------------------

def test_invalid_type_reprompts():
    calc = InputController()
    enter_eqn_mode(calc)
    submit(calc)
    assert submit(calc, "3") == "Select 1 or 2"
    assert calc.eqn_state.step == EquationSolver.SELECT_TYPE
    assert submit(calc, "1") == "a?"


def test_cubic_ends_session():
    calc = InputController()
    enter_eqn_mode(calc)
    submit(calc)
    assert submit(calc, "2") == "Cubic Not Impl"
    assert calc.eqn_state is None
    assert calc.expression == ""


@pytest.mark.parametrize("step, name", [
    (EquationSolver.GET_A, "a"),
    (EquationSolver.GET_B, "b"),
    (EquationSolver.GET_C, "c"),
])
def test_invalid_coefficient_stays_on_step(step, name):
    session = EquationSession()
    session.step = step
    session, shown, clear_entry = advance_equation(session, "abc")
    assert shown == f"Invalid {name}"
    assert session.step == step
    assert clear_entry is False


def test_invalid_coefficient_can_be_corrected():
    calc = InputController()
    enter_eqn_mode(calc)
    submit(calc)
    submit(calc, "1")
    assert submit(calc, ".") == "Invalid a"
    assert calc.expression == "."
    calc.handle_key("DEL")
    assert submit(calc, "3") == "b?"


def test_empty_coefficient_is_invalid():
    session = EquationSession()
    session.step = EquationSolver.GET_B
    session, shown, clear_entry = advance_equation(session, "")
    assert shown == "Invalid b"


def test_zero_leading_coefficient_asks_for_a_again():
    calc = InputController()
    enter_eqn_mode(calc)
    submit(calc)
    submit(calc, "1")
    submit(calc, "0")
    submit(calc, "2")
    assert submit(calc, "1") == EquationSolver.ZERO_A
    assert calc.eqn_state.step == EquationSolver.GET_A
    assert submit(calc, "1") == "b?"


# -----------------------------
# Quadratic formula
# -----------------------------

def test_solve_real_roots():
    assert solve_quadratic(1.0, -3.0, 2.0) == (2.0, 1.0)


def test_solve_repeated_root():
    x1, x2 = solve_quadratic(1.0, 2.0, 1.0)
    assert x1 == x2 == -1.0


def test_solve_complex_roots():
    assert solve_quadratic(1.0, 2.0, 5.0, decimals=4) == ("-1.0000 + 2.0000i", "-1.0000 - 2.0000i")


def test_complex_imaginary_part_is_a_magnitude():
    assert solve_quadratic(-1.0, 0.0, -4.0, decimals=2) == ("0.00 + 2.00i", "0.00 - 2.00i")


def test_tiny_negative_real_part_has_no_sign():
    assert solve_quadratic(1.0, 0.00002, 1.0, decimals=4) == ("0.0000 + 1.0000i", "0.0000 - 1.0000i")


def test_huge_root_is_shown_in_exponent_form():
    assert EquationSolver.show_root("X1", 1e300) == "X1=1e+300"
    assert EquationSolver.show_root("X2", -2.0) == "X2=-2"


def test_solve_rejects_zero_a():
    with pytest.raises(E.SolverError) as excinfo:
        solve_quadratic(0.0, 1.0, 1.0)
    assert excinfo.value.code == "3031"


@pytest.mark.parametrize("text, expected", [
    ("3", 3.0),
    ("-2.5", -2.5),
    (" 4 ", 4.0),
    ("1e3", 1000.0),
    ("abc", None),
    ("", None),
    ("nan", None),
])
def test_parse_coefficient(text, expected):
    assert EquationSolver.parse_coefficient(text) == expected
