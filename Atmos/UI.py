# UI.py
""""PySide6 user interface for Atmos+.

Structure
---------
- Main window with four tabs: Atmos Constants, Calculator, Gases, Reactions
- Settings UI: modal dialog for user preferences

Responsibilities (Main window)
------------------------------
- Load constants / gases / reactions (in a worker thread) and show them as tables
- Sort, search and copy the constants table to the clipboard
- Resolve calculator input against constants and user variables
- Add and delete user variables
- Show loader and resolution errors as dialogs


Responsibilities (Settings)
---------------------------

- Load Current Settings and Settings Descriptions via Config_Manager
- Validate user input (e.g. minimum decimal places)
- Save and apply theme changes immediately


Threading Note
--------------
Downloads run off the UI thread in Worker(QObject), so the window stays responsive.
Results (or errors) are emitted via a Qt signal and handled back in the UI.
Resolution itself is quick and runs on the UI thread against a snapshot of the symbol table.
"""""

from PySide6 import QtWidgets
from PySide6.QtCore import Qt, QObject, Signal
import sys
import threading
from pynput.keyboard import Controller
import pyperclip
from . import error as E
from . import config_manager as config_manager
from . import SymbolTable as ST
from . import ExpressionResolver
from . import MathEngine
from . import SourceLoader
from . import CatalogLoader


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for the "shift to copy" setting.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


def show_value(value):
    return "n/a" if value is None else str(value)


class Worker(QObject):
    """""

    Runs one loader function in a separate thread and emits a Signal with the result
    (or the LoaderError) back to the main window.

    """""

    job_finished = Signal(str, object)

    def __init__(self, kind, job):
        super().__init__()
        self.kind = kind
        self.job = job

    def run(self):
        try:
            result = self.job()
        except E.MathError as e:
            result = e
        except Exception as e:
            result = E.LoaderError(message=f"Unexpected crash: {e}", code="9999")
        self.job_finished.emit(self.kind, result)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Three kinds of settings, told apart by their current value:
    1. Checkboxes   (True / False)
    2. Number Fields (integers)
    3. Text Fields  (source URLs)

    """""

    settings_saved = Signal()  # Signal to tell the main window to update

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        self.setWindowTitle("Atmos+ Settings")
        self.setMinimumSize(420, 300)

        main_layout = QtWidgets.QVBoxLayout(self)

        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            else:
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                if key_value == "decimal_places":
                    description += " (min. 2)"
                label = QtWidgets.QLabel(description + ":")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder
                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(lambda: self.save_settings(self.setting_value_list))
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self, setting_value_list):
        for key_value, widget in self.widgets.items():

            if isinstance(widget, QtWidgets.QCheckBox):
                setting_value_list[key_value] = widget.isChecked()
                continue

            new_value_str = widget.text().strip()
            if new_value_str == "":
                continue  # blank keeps the old value

            if isinstance(setting_value_list[key_value], int):
                try:
                    new_value_int = int(new_value_str)
                    if key_value == "decimal_places" and new_value_int < 2:
                        raise ValueError(f"'{new_value_int}' is too small. Minimum is 2.")
                    if new_value_int < 1:
                        raise ValueError(f"'{new_value_int}' must be at least 1.")
                except ValueError as e:
                    print(f"Invalid Input: {e}")
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                    return  # Stop saving!
                setting_value_list[key_value] = new_value_int
            else:
                setting_value_list[key_value] = new_value_str

        saved_settings = config_manager.save_setting(setting_value_list)

        if saved_settings != {}:
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 5002: {E.ERROR_MESSAGES['5002']}config.json")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class AtmosWindow(QtWidgets.QWidget):

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State Variables ---
        self.table = ST.SymbolTable()
        self.gases = []
        self.reactions = []
        self.gases_loaded = False
        self.reactions_loaded = False
        self.sort_descending = False
        self.visible_constants = []
        self.running_jobs = set()
        self.workers = []  # keeps Worker objects alive until they report back

        # --- 3. Window Setup ---
        self.setWindowTitle("Atmos+")
        self.resize(900, 600)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        top_row = QtWidgets.QHBoxLayout()
        settings_button = QtWidgets.QPushButton("Settings")
        settings_button.clicked.connect(self.open_settings)
        top_row.addStretch(1)
        top_row.addWidget(settings_button)
        main_v_layout.addLayout(top_row)

        self.tabs = QtWidgets.QTabWidget()
        self.tabs.addTab(self.build_constants_tab(), "Atmos Constants")
        self.tabs.addTab(self.build_calculator_tab(), "Calculator")
        self.tabs.addTab(self.build_gases_tab(), "Gases")
        self.tabs.addTab(self.build_reactions_tab(), "Reactions")
        self.tabs.currentChanged.connect(self.handle_tab_changed)
        main_v_layout.addWidget(self.tabs)

        self.update_darkmode()

    # --- Tab builders ---

    def make_table(self, headers):
        table = QtWidgets.QTableWidget(0, len(headers))
        table.setHorizontalHeaderLabels(headers)
        table.setAlternatingRowColors(True)
        table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        table.horizontalHeader().setStretchLastSection(True)
        return table

    def build_constants_tab(self):
        tab = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(tab)

        row = QtWidgets.QHBoxLayout()
        self.load_constants_button = QtWidgets.QPushButton("Load Constants")
        self.load_constants_button.clicked.connect(self.load_constants)
        ascending_button = QtWidgets.QPushButton("Sort Ascending")
        ascending_button.clicked.connect(lambda: self.set_sort_order(False))
        descending_button = QtWidgets.QPushButton("Sort Descending")
        descending_button.clicked.connect(lambda: self.set_sort_order(True))
        copy_button = QtWidgets.QPushButton("Copy to Clipboard")
        copy_button.clicked.connect(self.copy_constants)
        self.search_field = QtWidgets.QLineEdit()
        self.search_field.setPlaceholderText("Search")
        self.search_field.textChanged.connect(self.refresh_constants)

        for widget in (self.load_constants_button, ascending_button, descending_button, copy_button):
            row.addWidget(widget)
        row.addWidget(QtWidgets.QLabel("Search:"))
        row.addWidget(self.search_field, 1)
        layout.addLayout(row)

        self.constants_table = self.make_table(["Constant Name", "Value"])
        layout.addWidget(self.constants_table)
        return tab

    def build_calculator_tab(self):
        tab = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(tab)

        row = QtWidgets.QHBoxLayout()
        row.addWidget(QtWidgets.QLabel("Expression:"))
        self.expression_field = QtWidgets.QLineEdit()
        self.expression_field.returnPressed.connect(self.calculate)
        row.addWidget(self.expression_field, 1)
        calculate_button = QtWidgets.QPushButton("Calculate")
        calculate_button.clicked.connect(self.calculate)
        row.addWidget(calculate_button)
        layout.addLayout(row)

        self.result_label = QtWidgets.QLabel("Result:")
        self.result_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        layout.addWidget(self.result_label)

        layout.addWidget(QtWidgets.QLabel("Create New Variable"))
        row = QtWidgets.QHBoxLayout()
        row.addWidget(QtWidgets.QLabel("Name:"))
        self.variable_name_field = QtWidgets.QLineEdit()
        row.addWidget(self.variable_name_field)
        row.addWidget(QtWidgets.QLabel("Value:"))
        self.variable_value_field = QtWidgets.QLineEdit()
        row.addWidget(self.variable_value_field, 1)
        add_button = QtWidgets.QPushButton("Add Variable")
        add_button.clicked.connect(self.add_variable)
        row.addWidget(add_button)
        layout.addLayout(row)

        self.variables_table = self.make_table(["Variable Name", "Value", ""])
        layout.addWidget(self.variables_table)
        return tab

    def build_gases_tab(self):
        tab = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(tab)
        load_button = QtWidgets.QPushButton("Load Gases")
        load_button.clicked.connect(self.load_gases)
        layout.addWidget(load_button)
        self.gases_table = self.make_table(["Gas Name", "Specific Heat", "Heat Capacity Ratio", "Molar Mass"])
        layout.addWidget(self.gases_table)
        return tab

    def build_reactions_tab(self):
        tab = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(tab)
        load_button = QtWidgets.QPushButton("Load Reactions")
        load_button.clicked.connect(self.load_reactions)
        layout.addWidget(load_button)
        self.reactions_table = self.make_table(["Reaction ID", "Priority", "Minimum Temperature",
                                                "Maximum Temperature", "Minimum Requirements", "Effects"])
        layout.addWidget(self.reactions_table)
        layout.addWidget(QtWidgets.QLabel("Minimum Requirements Index Table:\n" + CatalogLoader.requirement_legend()))
        return tab

    # --- Loading (worker threads) ---

    def start_job(self, kind, job):
        if kind in self.running_jobs:
            print(f"ERROR: {kind} is already loading!")  # 4002
            return
        self.running_jobs.add(kind)
        worker_instance = Worker(kind, job)
        worker_instance.job_finished.connect(self.job_result)
        self.workers.append(worker_instance)
        my_thread = threading.Thread(target=worker_instance.run, daemon=True)
        my_thread.start()

    def load_constants(self):
        url = self.setting_value_list["constants_url"]
        timeout = self.setting_value_list["request_timeout"]
        self.start_job("constants", lambda: SourceLoader.reload_constants(self.table, url, timeout))

    def load_gases(self):
        url = self.setting_value_list["gases_url"]
        timeout = self.setting_value_list["request_timeout"]
        self.start_job("gases", lambda: CatalogLoader.fetch_gases(url, timeout))

    def load_reactions(self):
        url = self.setting_value_list["reactions_url"]
        timeout = self.setting_value_list["request_timeout"]
        self.start_job("reactions", lambda: CatalogLoader.fetch_reactions(url, timeout))

    def handle_tab_changed(self, index):
        # Gases and reactions are fetched the first time their tab is opened
        if index == 2 and not self.gases_loaded:
            self.load_gases()
        elif index == 3 and not self.reactions_loaded:
            self.load_reactions()

    def job_result(self, kind, result):
        self.running_jobs.discard(kind)
        self.workers = [worker for worker in self.workers if worker.kind != kind]

        if isinstance(result, E.MathError):
            # Existing data stays as it was
            print(f"Error fetching {kind}: {result.message}", file=sys.stderr)
            self.show_error("Loading error", result)
            return

        if kind == "constants":
            print(f"Loaded {result} constants")
            self.refresh_constants()
        elif kind == "gases":
            self.gases = result
            self.gases_loaded = True
            self.refresh_gases()
        elif kind == "reactions":
            self.reactions = result
            self.reactions_loaded = True
            self.refresh_reactions()

    # --- Constants tab ---

    def set_sort_order(self, descending):
        self.sort_descending = descending
        self.refresh_constants()

    def refresh_constants(self):
        self.visible_constants = self.table.search_constants(self.search_field.text(), self.sort_descending)
        self.fill_table(self.constants_table, self.visible_constants)

    def copy_constants(self):
        pyperclip.copy(ST.to_clipboard_text(self.visible_constants))

    # --- Calculator tab ---

    def calculate(self):
        expression = self.expression_field.text()
        max_depth, max_passes = config_manager.resolver_limits()
        result = ExpressionResolver.resolve_or_error(
            expression, self.table,
            max_depth=max_depth, max_passes=max_passes,
            degrees=self.setting_value_list["degrees"])

        if isinstance(result, E.ResolveError):
            self.result_label.setText(f"Result: {result.message}")
            self.show_error("Calculation error", result)
            return

        text, rounding = MathEngine.cleanup(result, self.setting_value_list["decimal_places"])
        approx_sign = "\u2248"  # "≈"
        self.result_label.setText(f"Result: {approx_sign if rounding else '='} {text}")

        if self.setting_value_list["shift_to_copy"] and is_shift_pressed():
            pyperclip.copy(text)

    def add_variable(self):
        if self.table.upsert_variable(self.variable_name_field.text(), self.variable_value_field.text()):
            self.variable_name_field.clear()
            self.variable_value_field.clear()
            self.refresh_variables()

    def delete_variable(self, name):
        self.table.remove_variable(name)
        self.refresh_variables()

    def refresh_variables(self):
        rows = sorted(self.table.variables.items())
        self.fill_table(self.variables_table, rows)
        for row_index, (name, value) in enumerate(rows):
            delete_button = QtWidgets.QPushButton("Delete")
            delete_button.clicked.connect(lambda checked=False, n=name: self.delete_variable(n))
            self.variables_table.setCellWidget(row_index, 2, delete_button)

    # --- Gases / Reactions tabs ---

    def refresh_gases(self):
        rows = [(gas.name, show_value(gas.specific_heat), show_value(gas.heat_capacity_ratio),
                 show_value(gas.molar_mass)) for gas in self.gases]
        self.fill_table(self.gases_table, rows)

    def refresh_reactions(self):
        rows = [(reaction.id, show_value(reaction.priority), show_value(reaction.minimum_temperature),
                 show_value(reaction.maximum_temperature), str(reaction.minimum_requirements),
                 str(reaction.effects)) for reaction in self.reactions]
        self.fill_table(self.reactions_table, rows)

    # --- Helpers ---

    def fill_table(self, table, rows):
        table.setRowCount(len(rows))
        for row_index, row in enumerate(rows):
            for column_index, value in enumerate(row):
                table.setItem(row_index, column_index, QtWidgets.QTableWidgetItem(str(value)))

    def show_error(self, title, error_obj):
        error_box = QtWidgets.QMessageBox(self)
        error_code = error_obj.code
        additional_info = f"Details: {error_obj.message}"
        if error_obj.equation:
            additional_info += f"\nEquation: {error_obj.equation}"
        if getattr(error_obj, "trail", None):
            additional_info += "\nVia: " + " -> ".join(error_obj.trail)

        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle(title)
        error_box.setText(f"Error {error_code}: {E.ERROR_MESSAGES.get(error_code, 'Unknown error')}")
        error_box.setInformativeText(additional_info)
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # "exec" makes the dialog modal (blocks main window)

        # Reload settings after dialog closes
        self.setting_value_list = config_manager.load_setting_value("all")
        self.update_darkmode()

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QWidget {background-color: #121212; color: white;}
                        QLineEdit, QTableWidget {background-color: #2e2e2e; color: white;}
                        QPushButton {background-color: #444444; color: white;}""")
        else:
            self.setStyleSheet("")

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        else:
            return ""


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication()
    window = AtmosWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
