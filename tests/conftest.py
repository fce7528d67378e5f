"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def tmp_project(tmp_path, monkeypatch):
    """Create a temporary project with a config file and cwd inside it."""
    from lib.config import clear_cache

    (tmp_path / ".jsonc-edit.jsonc").write_text(
        """{
  // formatting used by the format command
  "format": {
    "tab_size": 4,
  },
}"""
    )
    monkeypatch.delenv("JSONC_EDIT_ROOT", raising=False)
    monkeypatch.chdir(tmp_path)
    clear_cache()
    yield tmp_path
    clear_cache()


@pytest.fixture
def settings_jsonc():
    """Return a multi-line JSONC document with comments of every kind."""
    return """{
  // Editor settings
  "editor": {
    "tabSize": 2, // spaces per level
    "wordWrap": "on"
  },
  /* Files to skip */
  "exclude": ["node_modules", "dist"],
  "telemetry": false
}"""


@pytest.fixture
def tsconfig_jsonc():
    """Return a tsconfig-style document with trailing commas."""
    return """{
  "compilerOptions": {
    "target": "ES2022",
    "strict": true,
  },
  "include": ["src"],
}"""


@pytest.fixture
def clear_config_cache(monkeypatch):
    """Clear config cache and env overrides before and after test."""
    from lib.config import LIMIT_ENV, clear_cache

    for name in LIMIT_ENV.values():
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("JSONC_EDIT_ROOT", raising=False)
    clear_cache()
    yield
    clear_cache()
