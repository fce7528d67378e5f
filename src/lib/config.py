"""Configuration management.

TIER 1: May import from core only.

Reads the optional project config file (.jsonc-edit.jsonc or
.jsonc-edit.json at the project root). The file is JSONC and is parsed
with the editor's own parser, so comments and trailing commas are fine.
"""

import os
from pathlib import Path
from typing import Any

from core.errors import ConfigError, JsoncParseError
from core.jsonc import parse
from core.printer import FormatOptions

# Cache for loaded config
_config_cache: dict | None = None
_project_root_cache: Path | None = None

# Config file names (priority order)
CONFIG_FILES = [".jsonc-edit.jsonc", ".jsonc-edit.json"]

# Environment variable overriding the project root
ROOT_ENV = "JSONC_EDIT_ROOT"

DEFAULTS: dict[str, Any] = {
    "format": {"tab_size": 2, "insert_spaces": True, "eol": "\n"},
    "sort": {"deep": True},
    "limits": {
        "max_file_size": 50 * 1024 * 1024,
        "max_json_size": 10 * 1024 * 1024,
        "max_json_depth": 100,
    },
}

# Limit keys that environment variables may override
LIMIT_ENV = {
    "max_file_size": "JSONC_EDIT_MAX_FILE_SIZE",
    "max_json_size": "JSONC_EDIT_MAX_JSON_SIZE",
    "max_json_depth": "JSONC_EDIT_MAX_JSON_DEPTH",
}


def get_project_root() -> Path:
    """Get the project root directory.

    Looks for a config file or .git/ in the current directory and its
    parents.

    Returns:
        Project root path.

    Raises:
        ConfigError: If project root cannot be found.
    """
    global _project_root_cache

    if _project_root_cache is not None:
        return _project_root_cache

    # Check environment variable first
    if env_root := os.environ.get(ROOT_ENV):
        _project_root_cache = Path(env_root)
        return _project_root_cache

    # Walk up from current directory
    current = Path.cwd()
    while current != current.parent:
        if any((current / name).exists() for name in CONFIG_FILES):
            _project_root_cache = current
            return _project_root_cache
        if (current / ".git").exists():
            _project_root_cache = current
            return _project_root_cache
        current = current.parent

    raise ConfigError(f"Could not find project root (no {CONFIG_FILES[0]} or .git/ found)")


def get_config_path() -> Path | None:
    """Find config file path.

    Looks for .jsonc-edit.jsonc first, then .jsonc-edit.json.

    Returns:
        Path to config file, or None if not found.
    """
    try:
        root = get_project_root()
    except ConfigError:
        return None

    for filename in CONFIG_FILES:
        config_path = root / filename
        if config_path.exists():
            return config_path

    return None


def load_config() -> dict:
    """Load the project config file.

    Returns:
        Configuration dictionary ({} without a config file).

    Raises:
        ConfigError: If the file is malformed or not an object.
    """
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    config_path = get_config_path()

    if config_path is None:
        _config_cache = {}
        return _config_cache

    try:
        config = parse(config_path.read_text(encoding="utf-8"))
    except JsoncParseError as e:
        raise ConfigError(f"Invalid {config_path.name}: {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigError(f"Invalid {config_path.name}: top-level value must be an object")

    _config_cache = config
    return _config_cache


def _lookup(config: dict, parts: list[str]) -> tuple[bool, Any]:
    value: Any = config
    for part in parts:
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return False, None
    return True, value


def get(key: str, default: Any = None) -> Any:
    """Get config value by dot notation.

    Falls back to the built-in defaults, then to default.

    Args:
        key: Dot-separated key path (e.g., "format.tab_size").
        default: Default value if key not found anywhere.

    Returns:
        Config value or default.

    Example:
        get("format.tab_size")  # 2 unless the project config says otherwise
        get("sort.deep", True)
    """
    parts = key.split(".")

    found, value = _lookup(load_config(), parts)
    if found:
        return value

    found, value = _lookup(DEFAULTS, parts)
    return value if found else default


def _non_negative_int(value: Any, source: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid {source}: must be a non-negative integer")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid {source}: must be a non-negative integer") from e
    if number < 0:
        raise ConfigError(f"Invalid {source}: must be a non-negative integer")
    return number


def get_limit(name: str) -> int:
    """Get a resource limit, honoring its environment override.

    Args:
        name: One of max_file_size, max_json_size, max_json_depth.

    Returns:
        Limit value.

    Raises:
        ConfigError: If the override or config value is not a non-negative integer.
    """
    env_name = LIMIT_ENV[name]
    if (env_value := os.environ.get(env_name)) is not None:
        return _non_negative_int(env_value.strip(), f"{env_name} environment variable")
    return _non_negative_int(get(f"limits.{name}"), f"limits.{name}")


def format_options() -> FormatOptions:
    """Formatting options from the project config."""
    eol = get("format.eol")
    if eol not in ("\n", "\r\n"):
        raise ConfigError(f"Invalid format.eol: {eol!r}")
    return FormatOptions(
        tab_size=_non_negative_int(get("format.tab_size"), "format.tab_size"),
        insert_spaces=bool(get("format.insert_spaces")),
        eol=eol,
    )


def clear_cache() -> None:
    """Clear config cache (for testing)."""
    global _config_cache, _project_root_cache
    _config_cache = None
    _project_root_cache = None
