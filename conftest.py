"""
Repository-level pytest configuration (showcase-safe).

Why this exists:
  - Register the UI command-line options (they must live in a rootdir conftest)
  - Provide safe defaults for demo environments (no secrets embedded)
  - Keep behavior explicit and discoverable

Important:
  Credentials below are placeholders for a demo application.
  Real projects should load secrets from a secure secret manager in CI/CD.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from qa_automation.ui_testing.framework.browser_manager import SUPPORTED_BROWSERS

# Fixture-level tests of the UI conftest run through pytester
pytest_plugins = ["pytester"]


def pytest_addoption(parser):
    """Register UI command-line options."""
    group = parser.getgroup("ui", "UI test options")
    group.addoption(
        "--headless",
        action="store_true",
        default=None,
        help="Run the browser headless (default: HEADLESS env var, else false)",
    )
    group.addoption(
        "--ui-browser",
        choices=SUPPORTED_BROWSERS,
        default=os.getenv("UI_BROWSER", "chromium"),
        help="Browser used by UI tests (default: chromium)",
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set demo-safe environment defaults if not already provided by the user/CI.

    This prevents accidental leakage and keeps local runs predictable.
    """
    defaults = {
        "UI_USERNAME": "valid_user@example.com",
        "UI_PASSWORD": "validPassword123",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
