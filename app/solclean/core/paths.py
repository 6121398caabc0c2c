"""XDG-compliant path management for solclean.

This module provides standardized paths following the XDG Base Directory
Specification for configuration storage, plus the default
location of the external (profile) log folders.

XDG defaults:
- Config: ~/.config/solclean/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "solclean"

# Profile folder holding the external Logs and TraceLogFiles folders
EXTERNAL_ROOT_NAME = "IISExpress"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/solclean/ (or XDG_CONFIG_HOME/solclean/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/solclean/settings.toml.
    """
    return get_config_dir() / "settings.toml"


def get_documents_dir() -> Path:
    """Get the user's documents directory.

    Honors XDG_DOCUMENTS_DIR when set, otherwise ~/Documents.
    """
    base = os.environ.get("XDG_DOCUMENTS_DIR")
    if base:
        return Path(base)
    return Path.home() / "Documents"


def get_default_external_root() -> Path:
    """Get the default root of the external log folders.

    Returns:
        Path to ~/Documents/IISExpress.
    """
    return get_documents_dir() / EXTERNAL_ROOT_NAME

