# Main.py
""""" Entry point for Atmos+.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Load configuration and start the Qt GUI

"""""
import sys
from pathlib import Path
from Atmos import config_manager as config_manager


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent


REQUIRED_MODULES = [
    "UI.py",
    "MathEngine.py",
    "ScientificEngine.py",
    "SymbolTable.py",
    "LiteralNormalizer.py",
    "SymbolExpander.py",
    "ExpressionResolver.py",
    "SourceLoader.py",
    "CatalogLoader.py",
    "config_manager.py",
    "error.py",
]


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.

      In production (.exe) the files are embedded by the bundler, so this check is skipped.
    """

    modules_dir = PROJECT_ROOT / "Atmos"

    REQUIRED = [modules_dir / module_name for module_name in REQUIRED_MODULES]
    REQUIRED.append(PROJECT_ROOT / "config.json")
    REQUIRED.append(PROJECT_ROOT / "ui_strings.json")

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
    - Keep this thin: no business logic here.
    """

    all_settings = config_manager.load_setting_value("all")
    print("Config loaded:", all_settings)

    # Imported here so the file check above runs before Qt is touched
    from Atmos import UI as UI
    UI.main()


if __name__ == "__main__":
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        print("Production mode (.exe) is starting...")
    main()
