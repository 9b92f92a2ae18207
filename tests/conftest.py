# tests/conftest.py

"""Shared pytest fixtures for the storefront tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from storefront.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_logs_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Point Settings.LOGS_DIR at a per-test ``logs`` directory."""
    logs_dir = tmp_path / "logs"
    monkeypatch.setattr(Settings, "LOGS_DIR", logs_dir)
    yield logs_dir
