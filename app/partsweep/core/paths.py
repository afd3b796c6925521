"""Filesystem locations used by partsweep.

Two groups of paths live here: where partsweep keeps its own files
(XDG config and state directories), and where the telephony provider
keeps the data partsweep reconciles on a device.
"""

import os
from pathlib import Path

APP_NAME = "partsweep"

# Telephony provider data root on an unlocked device (device-encrypted storage)
PROVIDER_DATA_DIR = Path("/data/user_de/0/com.android.providers.telephony")

# Attachment blobs live in "app_parts", the message store in databases/mmssms.db
DEFAULT_PARTS_DIR = PROVIDER_DATA_DIR / "app_parts"
DEFAULT_DATABASE_PATH = PROVIDER_DATA_DIR / "databases" / "mmssms.db"

CONFIG_FILENAME = "config.toml"
HISTORY_FILENAME = "history.jsonl"


def _xdg_app_dir(env_var: str, fallback: str) -> Path:
    """Resolve an XDG base directory and append the application name.

    An unset or empty variable falls back to the given path under $HOME.
    """
    base = os.environ.get(env_var) or str(Path.home() / fallback)
    return Path(base) / APP_NAME


def get_config_dir() -> Path:
    """$XDG_CONFIG_HOME/partsweep, by default ~/.config/partsweep."""
    return _xdg_app_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """$XDG_STATE_HOME/partsweep, by default ~/.local/state/partsweep.

    Holds the cleanup history, which outlives a single run but is not
    configuration.
    """
    return _xdg_app_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Default configuration file."""
    return get_config_dir() / CONFIG_FILENAME


def get_history_path() -> Path:
    """Default cleanup history file."""
    return get_state_dir() / HISTORY_FILENAME


def _ensure_dir(path: Path, label: str) -> Path:
    """Create a directory and its parents if missing.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {label} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {label} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_state_dir() -> Path:
    """Create the state directory if missing and return it."""
    return _ensure_dir(get_state_dir(), "state")
