from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Ensure the src/ directory is importable when tests run without an install.
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from mchammer import VersionRegistry  # noqa: E402
from mchammer.cli.deps import reset_settings  # noqa: E402


@pytest.fixture
def version_registry() -> VersionRegistry:
    return VersionRegistry()


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    reset_settings()
    yield
    reset_settings()
