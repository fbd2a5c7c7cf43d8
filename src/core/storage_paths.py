"""
Storage Paths
Resolves where bundled resources are read from and where user data is written.
"""

import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "REFKEEPER_DATA_DIR"


def is_frozen() -> bool:
    """Check if running as compiled executable (PyInstaller)."""
    return getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS')


def get_app_folder_name() -> str:
    """Folder name used under the per-user data directory."""
    return "RefKeeper"


def get_resource_base_path() -> Path:
    """Return the base directory for bundled, read-only resources.

    Dev: project root
    Frozen (PyInstaller): sys._MEIPASS (fallback to exe dir)
    """
    if is_frozen():
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass and Path(meipass).exists():
            return Path(meipass)
        return Path(sys.executable).parent
    # src/core/storage_paths.py -> src/core -> src -> project root
    return Path(__file__).resolve().parents[2]


def get_default_storage_path() -> Path:
    """
    Per-user writable storage.

    REFKEEPER_DATA_DIR wins; otherwise %APPDATA% on Windows and
    $XDG_CONFIG_HOME (or ~/.config) elsewhere.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        base = Path(override)
    elif os.environ.get('APPDATA'):
        base = Path(os.environ['APPDATA']) / get_app_folder_name()
    else:
        config_home = os.environ.get('XDG_CONFIG_HOME') or str(Path.home() / '.config')
        base = Path(config_home) / get_app_folder_name().lower()
    try:
        base.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create storage directory at %s: %s", base, e)
    return base


def get_settings_file_path() -> Path:
    return get_default_storage_path() / "settings.json"


def get_locales_path() -> Path:
    return get_resource_base_path() / "locales"


def get_configs_path() -> Path:
    return get_resource_base_path() / "configs"
