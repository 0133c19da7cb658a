import json
import os
from pathlib import Path

from dotenv import load_dotenv

# Allow a .env file to point at an alternative balance file.
load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / 'configs' / 'sim_balance.json'
CONFIG_FILE_PATH = os.getenv('RACER_CONFIG_PATH', str(DEFAULT_CONFIG_PATH))

def load_config(path=CONFIG_FILE_PATH):
    """
    Loads the simulation balance config file.
    Returns None when the file is missing or unreadable; callers fall back
    to their in-code defaults.
    """
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        return config
    except FileNotFoundError:
        print(f"Warning: Could not find config file at {path}, using defaults")
        return None
    except (OSError, json.JSONDecodeError) as e:
        print(f"Warning: Could not parse config file {path}: {e}")
        return None

# Load the config ONCE when the module is first imported
BALANCE_CONFIG = load_config()

def get_config(key_path, default=None):
    """
    Safely gets a value from the loaded config using a 'dot.path'.
    Example: get_config('driver.stuck_timeout_seconds')
    """
    if not BALANCE_CONFIG:
        return default

    try:
        keys = key_path.split('.')
        value = BALANCE_CONFIG
        for key in keys:
            value = value[key]
        return value
    except (KeyError, TypeError):
        print(f"Warning: Could not find config key: {key_path}")
        return default
