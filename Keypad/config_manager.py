# config_manager.py
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent.parent / "config.json"

# Used whenever config.json is missing, unreadable or lacks a key
DEFAULT_SETTINGS = {
    "display_precision": 10,
    "complex_decimals": 4,
    "degree_mode": False,
    "darkmode": False,
    "debug": False
}


def load_setting_value(key_value, path=None):
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(path or config_json, 'r', encoding='utf-8') as f:
            settings_dict.update(json.load(f))

    except (FileNotFoundError, json.JSONDecodeError):
        pass

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def save_setting(settings_dict, path=None):
    try:
        with open(path or config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except (FileNotFoundError, PermissionError):
        return {}


if __name__ == "__main__":
    print(load_setting_value("all"))
