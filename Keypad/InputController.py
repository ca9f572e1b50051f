# InputController.py
"""""
Key handling for the keypad calculator.

Responsibilities
----------------
- Own the calculator session: entry buffer, result line, mode, Ans,
  independent memory M, the SHIFT/ALPHA modifiers and the equation session
- Translate each key into an edit of the entry buffer, a mode change or a
  submit
- On submit, hand the entry to the evaluator collaborator (MathEngine) or,
  in EQN mode, to the EquationSolver
- Never let an evaluator failure escape: errors end up on the result line

Modifier Note
-------------
SHIFT and ALPHA are one-shot. The key after them reads the flag first and
the flag is cleared afterwards (see consume_modifiers). SHIFT, ALPHA, MODE
and ON return before that point.
"""""

from . import config_manager as config_manager
from . import EquationSolver
from . import MathEngine
from . import error as E

# Debug toggle for optional prints in this module
debug = config_manager.load_setting_value("debug") == True

# Mode ring, cycled by the MODE key
MODES = ["COMP", "CMPLX", "MAT", "EQN"]

ANS_TOKEN = "Ans"

# Keys that only append text: key -> (normal text, text under SHIFT)
APPEND_KEYS = {
    "PLUS": ("+", "+"),
    "MINUS": ("-", "-"),
    "MULTIPLY": ("*", "*"),
    "DIVIDE": ("/", "/"),
    "ANS": (ANS_TOKEN, ANS_TOKEN),
    "SIN": ("sin(", "asin("),
    "COS": ("cos(", "acos("),
    "TAN": ("tan(", "atan("),
    "LOG": ("log10(", "log10("),
    "LN": ("log(", "e^"),
    "SQRT": ("sqrt(", "sqrt("),
    "X2": ("^2", "^2"),
    "POW": ("^", "^"),
    "EXP": ("e", "e"),
    "(": ("(", "["),
    ")": (")", "]"),
    "SD": ("", ","),    # plain SD has no statistics function; only SHIFT+SD inserts ','
    "ENG": ("", "i"),   # SHIFT+ENG inserts the imaginary unit
}


class InputController:
    """The single owner of a calculator session's state."""

    def __init__(self, engine=MathEngine, precision=None):
        # engine=None means no evaluator is available
        self.engine = engine
        self.precision = precision

        self.expression = ""
        self.result = "0"
        self.mode = "COMP"
        self.ans = 0
        self.shift_active = False
        self.alpha_active = False
        self.memory = 0
        self.eqn_state = None  # EquationSession while a sequence is running

    # -----------------------------
    # Key dispatch
    # -----------------------------

    def handle_key(self, key):
        """Process one key event start to finish."""
        # --- 1. Keys that return before the modifiers are consumed ---
        if key == "SHIFT":
            self.shift_active = not self.shift_active
            return
        elif key == "ALPHA":
            self.alpha_active = not self.alpha_active
            return
        elif key == "MODE":
            self.cycle_mode()
            return
        elif key == "ON":
            self.clear_all()
            return

        # --- 2. Everything else reads the modifiers ---
        if key == "AC":
            self.clear_entry()
        elif key == "DEL":
            self.expression = self.expression[:-1]
        elif key == "EQUALS":
            self.submit(add_to_memory=False)
        elif key == "M+":
            if self.shift_active:
                self.expression += ";"  # Row separator for matrix literals
            else:
                self.submit(add_to_memory=True)
        elif key in APPEND_KEYS:
            normal_text, shift_text = APPEND_KEYS[key]
            self.expression += shift_text if self.shift_active else normal_text
        else:
            # Digits, '.', letters and anything else are typed as-is
            self.expression += key

        # --- 3. One-shot modifiers are cleared only after they were read ---
        self.consume_modifiers(key)

    def consume_modifiers(self, key):
        if self.shift_active and key != "SHIFT":
            self.shift_active = False
        if self.alpha_active and key != "ALPHA":
            self.alpha_active = False

    # -----------------------------
    # Mode and reset keys
    # -----------------------------

    def cycle_mode(self):
        current_index = MODES.index(self.mode)
        self.mode = MODES[(current_index + 1) % len(MODES)]
        self.expression = ""
        self.eqn_state = None

        if self.mode == "EQN":
            self.result = EquationSolver.ENTRY_PROMPT
        else:
            self.result = f"Mode: {self.mode}"

    def clear_entry(self):
        """AC: empty the entry, abandon any equation sequence."""
        self.expression = ""
        self.eqn_state = None
        if self.mode == "EQN":
            self.result = EquationSolver.ENTRY_PROMPT
        else:
            self.result = "0"

    def clear_all(self):
        """ON: back to the power-on state."""
        self.expression = ""
        self.result = "0"
        self.mode = "COMP"
        self.shift_active = False
        self.alpha_active = False
        self.ans = 0
        self.eqn_state = None
        self.memory = 0

    # -----------------------------
    # Submit
    # -----------------------------

    def submit(self, add_to_memory=False):
        """EQUALS / M+: evaluate the entry, or advance the equation sequence in EQN mode."""
        if self.mode == "EQN":
            self.advance_equation(self.expression)
            return

        if self.engine is None:
            if debug == True:
                missing = E.EngineMissingError("No evaluator configured.", code="3030", equation=self.expression)
                print(E.describe(missing))
            self.result = E.ENGINE_MISSING_TEXT
            return

        problem = self.expression.replace(ANS_TOKEN, f"({self.engine.to_expression(self.ans)})")

        try:
            value = self.engine.evaluate(problem)
            display = self.engine.format(value, self.precision)

        except E.MathError as e:
            if debug == True:
                print(E.describe(e))
            self.result = E.SYNTAX_ERROR_TEXT
            return

        except Exception as e:
            # An unexpected crash inside the collaborator must not take the session down
            if debug == True:
                print(f"Unexpected crash in evaluator: {e}")
            self.result = E.SYNTAX_ERROR_TEXT
            return

        self.ans = value
        self.result = display

        # Only plain real numbers go into M; matrices and complex values are skipped
        if add_to_memory and self.engine.is_scalar(value):
            self.memory += self.engine.to_number(value)
            self.result = f"M = {MathEngine.plain_number(self.memory)}"

    def advance_equation(self, text):
        self.eqn_state, self.result, clear_entry = EquationSolver.advance_equation(self.eqn_state, text)
        if clear_entry:
            self.expression = ""

        if debug == True:
            print(f"EQN: {self.eqn_state!r} -> {self.result!r}")

    # -----------------------------
    # Display accessors
    # -----------------------------

    def get_expression(self):
        display_expression = self.expression
        if self.shift_active:
            display_expression = "S " + display_expression
        if self.alpha_active:
            display_expression = "A " + display_expression
        return display_expression

    def get_result(self):
        return self.result
