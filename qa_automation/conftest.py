"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the pytest configuration shared by the UI scenarios and
the offline unit tests. It registers common markers and tags tests by suite.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )

    # Suite markers
    config.addinivalue_line(
        "markers", "ui: Browser scenarios against a running application"
    )
    config.addinivalue_line(
        "markers", "unit: Offline framework tests (no browser)"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to login and logout"
    )
    config.addinivalue_line(
        "markers", "signup: Tests related to user registration"
    )
    config.addinivalue_line(
        "markers", "dashboard: Tests related to the dashboard"
    )


def pytest_collection_modifyitems(config, items):
    """Tag collected tests with their suite marker based on location."""
    for item in items:
        parts = item.path.parts

        if "ui_testing" in parts:
            item.add_marker(pytest.mark.ui)

        if "unit" in parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "QA Automation - UI Regression Suite",
        "=" * 60,
        "",
    ]
