# UI.py
"""""PySide6 keypad window for the scientific calculator.

Structure
---------
- Two display lines: the entry being typed (history line) and the result
- A grid of keypad buttons, each carrying a key identifier

Responsibilities
----------------
- Forward every button click and keyboard key to InputController.handle_key
- Redraw both display lines after each key
- Copy the result line to the clipboard
- Apply dark/light mode from the settings

All calculator behavior lives in InputController; this window only draws.
"""""

from PySide6 import QtWidgets
from PySide6.QtCore import Qt
import sys
import pyperclip
from . import config_manager as config_manager
from . import InputController as InputController

COPY_BUTTON = "COPY"

# (label, key, row, column)
BUTTONS = [
    ("SHIFT", "SHIFT", 0, 0), ("ALPHA", "ALPHA", 0, 1), ("MODE", "MODE", 0, 2), ("ON", "ON", 0, 3), ("Copy", COPY_BUTTON, 0, 4),
    ("x²", "X2", 1, 0), ("^", "POW", 1, 1), ("√", "SQRT", 1, 2), ("log", "LOG", 1, 3), ("ln", "LN", 1, 4),
    ("sin", "SIN", 2, 0), ("cos", "COS", 2, 1), ("tan", "TAN", 2, 2), ("(", "(", 2, 3), (")", ")", 2, 4),
    ("7", "7", 3, 0), ("8", "8", 3, 1), ("9", "9", 3, 2), ("DEL", "DEL", 3, 3), ("AC", "AC", 3, 4),
    ("4", "4", 4, 0), ("5", "5", 4, 1), ("6", "6", 4, 2), ("×", "MULTIPLY", 4, 3), ("÷", "DIVIDE", 4, 4),
    ("1", "1", 5, 0), ("2", "2", 5, 1), ("3", "3", 5, 2), ("+", "PLUS", 5, 3), ("−", "MINUS", 5, 4),
    ("0", "0", 6, 0), (".", ".", 6, 1), ("EXP", "EXP", 6, 2), ("Ans", "ANS", 6, 3), ("=", "EQUALS", 6, 4),
    ("S⇔D", "SD", 7, 0), ("M+", "M+", 7, 1), ("ENG", "ENG", 7, 2), (",", ",", 7, 3), ("π", "π", 7, 4),
]

# Physical keyboard: Qt key -> calculator key (digits and '.' pass through as text)
KEYBOARD_KEYS = {
    Qt.Key.Key_Return: "EQUALS",
    Qt.Key.Key_Enter: "EQUALS",
    Qt.Key.Key_Backspace: "DEL",
    Qt.Key.Key_Escape: "AC",
    Qt.Key.Key_Plus: "PLUS",
    Qt.Key.Key_Minus: "MINUS",
    Qt.Key.Key_Asterisk: "MULTIPLY",
    Qt.Key.Key_Slash: "DIVIDE",
    Qt.Key.Key_AsciiCircum: "POW",
    Qt.Key.Key_ParenLeft: "(",
    Qt.Key.Key_ParenRight: ")",
}


class CalculatorWindow(QtWidgets.QWidget):

    def __init__(self, controller=None):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.controller = controller or InputController.InputController()
        self.button_objects = {}

        # --- 2. Window Setup ---
        self.setWindowTitle("Scientific Calculator")
        self.resize(320, 520)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 3. Display Setup ---
        self.history_line = QtWidgets.QLabel("")
        self.history_line.setAlignment(Qt.AlignmentFlag.AlignLeft)
        self.result_line = QtWidgets.QLabel("0")
        self.result_line.setAlignment(Qt.AlignmentFlag.AlignRight)
        font = self.result_line.font()
        font.setPointSize(22)
        self.result_line.setFont(font)
        main_v_layout.addWidget(self.history_line)
        main_v_layout.addWidget(self.result_line)

        # --- 4. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 3)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(2)
        button_grid.setContentsMargins(0, 0, 0, 0)

        for label, key, row, col in BUTTONS:
            button = QtWidgets.QPushButton(label)
            button.setSizePolicy(expanding_policy)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)  # keep keyboard input on the window
            button.clicked.connect(lambda checked=False, val=key: self.handle_button_press(val))
            button_grid.addWidget(button, row, col)
            self.button_objects[key] = button

        self.update_darkmode()
        self.update_display()

    def handle_button_press(self, key):
        if key == COPY_BUTTON:
            pyperclip.copy(self.controller.get_result())
            return

        self.controller.handle_key(key)
        self.update_display()

    def keyPressEvent(self, event):
        key = KEYBOARD_KEYS.get(event.key())
        if key is None and event.text() and (event.text().isdigit() or event.text() == "."):
            key = event.text()

        if key is None:
            super().keyPressEvent(event)
            return
        self.handle_button_press(key)

    def update_display(self):
        self.history_line.setText(self.controller.get_expression())
        self.result_line.setText(self.controller.get_result())

        # Show which modifier is waiting for its key
        for key, active in (("SHIFT", self.controller.shift_active), ("ALPHA", self.controller.alpha_active)):
            button = self.button_objects.get(key)
            if button:
                button.setStyleSheet("background-color: #e0a800; font-weight: bold;" if active else self.button_style())

    def button_style(self):
        if self.setting_value_list["darkmode"] == True:
            return "background-color: #121212; color: white; font-weight: bold;"
        return "font-weight: normal;"

    def update_darkmode(self):
        # --- Apply Dark/Light Mode to all buttons ---
        for button in self.button_objects.values():
            button.setStyleSheet(self.button_style())

        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("background-color: #121212;")
            self.history_line.setStyleSheet("color: #bbbbbb;")
            self.result_line.setStyleSheet("color: white; font-weight: bold;")
        else:
            self.setStyleSheet("")
            self.history_line.setStyleSheet("color: #555555;")
            self.result_line.setStyleSheet("font-weight: bold;")


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
