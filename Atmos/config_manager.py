# config_manager.py
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent.parent / "config.json"
ui_strings = Path(__file__).resolve().parent.parent / "ui_strings.json"


SOURCE_BASE = "https://raw.githubusercontent.com/space-wizards/space-station-14/master"

DEFAULT_SETTINGS = {
    "darkmode": False,
    "shift_to_copy": True,
    "degrees": False,
    "decimal_places": 6,
    "max_depth": 32,
    "max_passes": 64,
    "request_timeout": 10,
    "constants_url": SOURCE_BASE + "/Content.Shared/Atmos/Atmospherics.cs",
    "gases_url": SOURCE_BASE + "/Resources/Prototypes/Atmospherics/gases.yml",
    "reactions_url": SOURCE_BASE + "/Resources/Prototypes/Atmospherics/reactions.yml",
}


def _read_json(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}

    if not isinstance(data, dict):
        return {}
    return data


def load_setting_value(key_value):
    """Return one setting, or all of them for key_value == "all".

    Values from config.json win over DEFAULT_SETTINGS; a missing or broken
    file just means defaults.
    """
    settings_dict = dict(DEFAULT_SETTINGS)
    settings_dict.update(_read_json(config_json))

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def load_setting_description(key_value):
    settings_dict = _read_json(ui_strings)

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, key_value)


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except (OSError, TypeError, ValueError):
        return {}


def resolver_limits():
    """(max_depth, max_passes) from the settings, clamped to at least 1."""
    settings = load_setting_value("all")
    try:
        max_depth = max(1, int(settings["max_depth"]))
        max_passes = max(1, int(settings["max_passes"]))
    except (TypeError, ValueError):
        max_depth = DEFAULT_SETTINGS["max_depth"]
        max_passes = DEFAULT_SETTINGS["max_passes"]
    return max_depth, max_passes


if __name__ == "__main__":
    print(load_setting_value("all"))
    print(resolver_limits())
