"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Element actions that wait for the visible / clickable state first
    - Text and visibility queries with a documented timeout policy
    - Navigation and load-state waits
    - Screenshot and failure capture for Allure

Timeout policy:
    - Actions (`type_text`, `clear`, `click`) raise ElementLookupError
    - `is_displayed` returns False
    - `get_text` raises ElementLookupError
    - `get_text_or` returns the caller's fallback value

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Page

from .browser_manager import BrowserSession
from .element_locator import ElementLocator, ElementLookupError, Selector
from .waits import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT, WaitConfig


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


def _display_value(selector: Selector, value: str) -> str:
    if "password" in selector.label.lower():
        return "*" * len(value)
    return value


class BasePage:
    """
    Base class for all page objects.

    A page object is bound to one explicit `BrowserSession` and keeps no state
    of its own beyond the locator helper.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/auth"
            USERNAME_INPUT = Selector(By.NAME, "username", "username input")

            async def enter_username(self, username: str):
                await self.type_text(self.USERNAME_INPUT, username)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        session: BrowserSession,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        """
        Initialize page object.

        Args:
            session: Open browser session the page operates on
            timeout: Explicit-wait timeout in seconds
            poll_interval: Fixed poll interval in seconds
        """
        self.session = session
        self.page: Page = session.page
        self.base_url = session.base_url
        self.locator = ElementLocator(
            self.page, WaitConfig(timeout=timeout, poll_interval=poll_interval)
        )

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        return self.page.url

    async def open(self) -> "BasePage":
        """Navigate to this page and wait for it to load."""
        with allure.step(f"Navigate to {self.URL_PATH}"):
            await self.page.goto(self.url)
            logger.debug(f"Navigated to: {self.url}")
        await self.wait_for_page_load()
        return self

    async def wait_for_page_load(
        self,
        state: str = "load",
        timeout: Optional[float] = None,
    ) -> None:
        """
        Wait for the page to reach a load state.

        Args:
            state: Playwright load state ('load', 'domcontentloaded', 'networkidle')
            timeout: Timeout in seconds (defaults to the explicit-wait timeout)
        """
        seconds = self.locator.timeout if timeout is None else timeout
        await self.page.wait_for_load_state(state, timeout=seconds * 1000)

    async def title(self) -> str:
        return await self.page.title()

    # =========================================================================
    # Element Actions
    # =========================================================================

    async def type_text(self, selector: Selector, text: str) -> None:
        """
        Clear the field and type `text` into it once it is visible.

        Raises:
            ElementLookupError: Field not visible within the timeout
        """
        with allure.step(f"Fill {selector.label}: {_display_value(selector, text)}"):
            element = await self.locator.wait_visible(selector)
            await element.clear()
            await element.fill(text)

    async def clear(self, selector: Selector) -> None:
        """Clear a visible field."""
        with allure.step(f"Clear {selector.label}"):
            element = await self.locator.wait_visible(selector)
            await element.clear()

    async def click(self, selector: Selector) -> None:
        """
        Click the element once it is visible and enabled.

        Raises:
            ElementLookupError: Element not clickable within the timeout
        """
        with allure.step(f"Click: {selector.label}"):
            element = await self.locator.wait_clickable(selector)
            await element.click()

    # =========================================================================
    # Element Queries
    # =========================================================================

    async def get_text(self, selector: Selector) -> str:
        """
        Visible text of the element.

        Raises:
            ElementLookupError: Element not visible within the timeout
        """
        element = await self.locator.wait_visible(selector)
        return (await element.inner_text()).strip()

    async def get_text_or(self, selector: Selector, fallback: str) -> str:
        """Visible text of the element, or `fallback` if it never shows up."""
        try:
            return await self.get_text(selector)
        except ElementLookupError:
            logger.warning(f"'{selector.label}' not visible, returning fallback: {fallback!r}")
            return fallback

    async def get_value(self, selector: Selector) -> str:
        """Current value of an input field."""
        element = await self.locator.wait_visible(selector)
        return await element.input_value()

    async def is_displayed(self, selector: Selector, timeout: Optional[float] = None) -> bool:
        """True when the element becomes visible within the timeout."""
        return await self.locator.is_visible(selector, timeout)

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """Attach a screenshot and the current URL to the Allure report."""
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", full_page=True)
            allure.attach(
                self.page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )


__all__ = [
    "BasePage",
]
