"""Pytest configuration for calwriter."""

import sys
from pathlib import Path

import pytest

# Add src/ to PYTHONPATH so absolute imports work without an install
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from calwriter import config  # noqa: E402


@pytest.fixture
def override_settings(monkeypatch):
    """Swap the settings singleton for one built from keyword overrides."""

    def _apply(**overrides) -> config.Settings:
        new = config.Settings(_env_file=None, **overrides)
        monkeypatch.setattr(config, "settings", new)
        return new

    return _apply
