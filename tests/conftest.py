"""Test configuration."""

import os
from collections.abc import Generator
from pathlib import Path
from typing import List

import pytest
from pytest import Config

from mintpipe.core.logging import configure_logging

fixture = pytest.fixture


@fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


pytest_plugins: List[str] = [
    "tests.fixtures.content_store",
    "tests.fixtures.randomness",
]


@fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep real credentials and overrides out of tests."""
    for key in list(os.environ):
        if key.startswith(("PINATA_", "CONTENT_STORE_", "UPLOAD_")):
            monkeypatch.delenv(key, raising=False)
    for key in ("MINIMUM_STAKE", "REQUEST_TIMEOUT_SECONDS", "IMAGES_LOCATION"):
        monkeypatch.delenv(key, raising=False)
    yield


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    # Configure logging for test environment
    configure_logging(testing=True)
