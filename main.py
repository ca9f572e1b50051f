# Main.py
""""" Entry point for the Scientific Keypad Calculator.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Load configuration and start the Qt GUI

"""""
import sys
from pathlib import Path
from Keypad import config_manager as config_manager, UI as UI


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
      In production (.exe) the files are embedded by the bundler and this check is skipped.
    """

    modules_dir = PROJECT_ROOT / "Keypad"

    REQUIRED = [
        modules_dir / "UI.py",
        modules_dir / "InputController.py",
        modules_dir / "EquationSolver.py",
        modules_dir / "MathEngine.py",
        modules_dir / "ScientificEngine.py",
        modules_dir / "config_manager.py",
        modules_dir / "error.py",
        PROJECT_ROOT / "config.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def main():

    """
    Load configuration and start the GUI.
    - Keep this thin: no calculator logic here.
    """

    all_settings = config_manager.load_setting_value("all")
    if all_settings["debug"] == True:
        print("Config loaded:", all_settings)

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()


if __name__ == "__main__":
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        print("Production mode (.exe) is starting...")
    main()
