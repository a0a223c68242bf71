"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework.

Components:
    - config_reader: Properties/YAML configuration with env overrides
    - waits: Bounded, fixed-interval condition polling
    - element_locator: Declarative selectors and element state waits
    - browser_manager: Browser session lifecycle
    - page_base: Base page object for common operations

Author: Automation Team
License: MIT
================================================================================
"""

from .config_reader import ConfigReader, ConfigurationError
from .waits import AsyncWaiter, WaitConfig, WaitTimeoutError
from .element_locator import By, ElementLocator, ElementLookupError, Selector
from .browser_manager import BrowserManager, BrowserSession, SessionStartupError
from .page_base import BasePage

__all__ = [
    "ConfigReader",
    "ConfigurationError",
    "AsyncWaiter",
    "WaitConfig",
    "WaitTimeoutError",
    "By",
    "ElementLocator",
    "ElementLookupError",
    "Selector",
    "BrowserManager",
    "BrowserSession",
    "SessionStartupError",
    "BasePage",
]
