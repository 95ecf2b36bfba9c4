import json
import os
from typing import Dict, Any

from engine.table_params import TableParams, params_from_dict

# RAILWAY PERSISTENCE CONFIGURATION
# The volume is mounted at '/app/data'.
# If it exists, we read from there. If not, we use the local folder.
VOLUME_PATH = '/app/data'
PROFILE_FILENAME = 'profile.json'

def get_file_path(filename: str) -> str:
    """Returns the volume path if available, else local path."""
    if os.path.exists(VOLUME_PATH):
        return os.path.join(VOLUME_PATH, filename)
    return filename

# --- PROFILE (Table Settings) ---

def load_profile(path: str = None) -> Dict[str, Any]:
    path = path or get_file_path(PROFILE_FILENAME)
    if not os.path.exists(path):
        return {}
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error loading profile: {e}")
        return {}
    return data if isinstance(data, dict) else {}

def load_table_params(path: str = None) -> TableParams:
    """Table settings from the 'table' section of the profile, defaults otherwise."""
    section = load_profile(path).get('table') or {}
    try:
        return params_from_dict(section)
    except (TypeError, ValueError) as e:
        print(f"Invalid table settings in profile, using defaults: {e}")
        return TableParams()
