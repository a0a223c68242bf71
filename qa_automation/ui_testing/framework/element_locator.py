"""
================================================================================
Element Locator
================================================================================

Declarative element selectors and state waits.

Page objects declare their elements as `Selector` constants using one of the
strategies the application contract relies on (CSS, XPath, id, name or link
text). `ElementLocator` turns a selector into a Playwright locator and waits,
with a bounded timeout, for the element to become visible or clickable.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import NamedTuple, Optional

from loguru import logger
from playwright._impl._errors import TargetClosedError
from playwright.async_api import Locator, Page

from .waits import AsyncWaiter, WaitConfig, WaitTimeoutError


class ElementLookupError(Exception):
    """Raised when an element does not reach the required state in time."""
    pass


class By:
    """Supported locator strategies."""
    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    NAME = "name"
    LINK_TEXT = "link_text"

    ALL = (CSS, XPATH, ID, NAME, LINK_TEXT)


class Selector(NamedTuple):
    """
    A single element selector.

    Attributes:
        by: Strategy from `By`
        value: Strategy-specific selector text
        name: Human-readable element name for logs and Allure steps
    """
    by: str
    value: str
    name: str = ""

    @property
    def label(self) -> str:
        return self.name or f"{self.by}={self.value}"


def _attribute_selector(attribute: str, value: str) -> str:
    # JSON string escaping is valid CSS string escaping for quotes/backslashes
    return f"[{attribute}={json.dumps(value)}]"


def to_playwright_selector(selector: Selector) -> str:
    """
    Convert a selector into a Playwright selector string.

    Link text is resolved with `get_by_role` instead; see `ElementLocator.resolve`.
    """
    if selector.by == By.CSS:
        return f"css={selector.value}"
    if selector.by == By.XPATH:
        return f"xpath={selector.value}"
    if selector.by == By.ID:
        # Attribute form keeps ids such as ":r8:-form-item" valid
        return f"css={_attribute_selector('id', selector.value)}"
    if selector.by == By.NAME:
        return f"css={_attribute_selector('name', selector.value)}"
    raise ValueError(f"Unsupported locator strategy for selector string: {selector.by}")


class ElementLocator:
    """
    Resolves selectors and waits for element states.

    Usage:
        >>> locator = ElementLocator(page)
        >>> element = await locator.wait_visible(Selector(By.NAME, "username"))
        >>> await element.fill("john")

    Waiting polls the element state with a fixed interval until the timeout;
    on expiry `ElementLookupError` is raised. A closed page, context or browser
    raises `TargetClosedError` straight away, also from `is_visible`.
    """

    def __init__(
        self,
        page: Page,
        config: Optional[WaitConfig] = None,
    ):
        """
        Args:
            page: Playwright Page object
            config: Explicit-wait timeout and poll interval
        """
        self.page = page
        self.waiter = AsyncWaiter(config or WaitConfig(), fatal_errors=(TargetClosedError,))

    @property
    def timeout(self) -> float:
        return self.waiter.config.timeout

    def resolve(self, selector: Selector) -> Locator:
        """Return the Playwright locator for the first element matching `selector`."""
        if selector.by not in By.ALL:
            raise ValueError(f"Unknown locator strategy: {selector.by}")

        if selector.by == By.LINK_TEXT:
            return self.page.get_by_role("link", name=selector.value, exact=True).first
        return self.page.locator(to_playwright_selector(selector)).first

    async def wait_visible(
        self,
        selector: Selector,
        timeout: Optional[float] = None,
    ) -> Locator:
        """
        Wait for the element to be visible.

        Raises:
            ElementLookupError: Element not visible within the timeout
        """
        locator = self.resolve(selector)

        async def check():
            return await locator.is_visible(), locator

        return await self._wait(check, selector, "visible", timeout)

    async def wait_clickable(
        self,
        selector: Selector,
        timeout: Optional[float] = None,
    ) -> Locator:
        """
        Wait for the element to be visible and enabled.

        Raises:
            ElementLookupError: Element not clickable within the timeout
        """
        locator = self.resolve(selector)

        async def check():
            if not await locator.is_visible():
                return False, locator
            return await locator.is_enabled(), locator

        return await self._wait(check, selector, "clickable", timeout)

    async def is_visible(
        self,
        selector: Selector,
        timeout: Optional[float] = None,
    ) -> bool:
        """Return True when the element becomes visible within the timeout."""
        try:
            await self.wait_visible(selector, timeout)
            return True
        except ElementLookupError:
            return False

    async def _wait(self, check, selector: Selector, state: str, timeout: Optional[float]) -> Locator:
        description = f"'{selector.label}' to be {state}"
        try:
            return await self.waiter.wait(check, description=description, timeout=timeout)
        except WaitTimeoutError as e:
            logger.debug(f"Element lookup timed out: {e}")
            raise ElementLookupError(
                f"Element '{selector.label}' ({selector.by}={selector.value}) "
                f"not {state} after {self.timeout if timeout is None else timeout}s"
            ) from e


__all__ = [
    "By",
    "Selector",
    "ElementLocator",
    "ElementLookupError",
    "to_playwright_selector",
]
