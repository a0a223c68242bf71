"""
================================================================================
Browser Manager
================================================================================

Browser session lifecycle for UI scenarios.

Features:
    - One isolated browser session per scenario
    - Configuration applied at startup (headless, implicit wait, viewport,
      executable path, start URL)
    - Idempotent close that never raises
    - Scoped acquisition via `async with manager.session() as session`

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
)

from .config_reader import ConfigReader


SUPPORTED_BROWSERS = ("chromium", "firefox")


class SessionStartupError(Exception):
    """Raised when a browser session cannot be started."""
    pass


@dataclass
class BrowserSession:
    """
    One live browser session.

    Owned by the `BrowserManager` that opened it. Page objects receive the
    session explicitly and use `session.page`.
    """
    playwright: Playwright
    browser: Browser
    context: BrowserContext
    page: Page
    config: ConfigReader
    browser_type: str = "chromium"
    headless: bool = False
    closed: bool = field(default=False, init=False)

    @property
    def is_open(self) -> bool:
        return not self.closed

    @property
    def base_url(self) -> str:
        return self.config.application_url.rstrip("/")


class BrowserManager:
    """
    Opens and closes browser sessions.

    Usage:
        manager = BrowserManager(ConfigReader())

        async with manager.session(headless=True) as session:
            login_page = LoginPage(session)
            await login_page.login("user", "secret")

        # Or explicitly
        session = await manager.open(headless=False)
        try:
            ...
        finally:
            await manager.close(session)
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": False,
        "args": [
            "--ignore-certificate-errors",
        ],
    }

    # Default context options (maximized desktop viewport)
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        config: ConfigReader,
        browser_type: str = "chromium",
        playwright_factory: Callable[[], Any] = async_playwright,
    ):
        """
        Initialize browser manager.

        Args:
            config: Loaded configuration
            browser_type: Browser to use - 'chromium' or 'firefox'
            playwright_factory: Returns a Playwright context manager
                (`async_playwright` by default)
        """
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser '{browser_type}'. "
                f"Expected one of: {', '.join(SUPPORTED_BROWSERS)}"
            )
        self.config = config
        self.browser_type = browser_type
        self._playwright_factory = playwright_factory

    def _launch_options(self, headless: bool) -> Dict[str, Any]:
        # Chromium-only switches
        args: list = []
        if self.browser_type == "chromium":
            args = [*self.DEFAULT_LAUNCH_OPTIONS["args"], "--start-maximized"]

        options: Dict[str, Any] = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": headless,
            "args": args,
        }

        executable = self.config.driver_path(self.browser_type)
        if executable:
            if not Path(executable).exists():
                raise SessionStartupError(
                    f"{self.browser_type} executable not found: {executable}"
                )
            options["executable_path"] = executable

        return options

    async def open(self, headless: bool = False) -> BrowserSession:
        """
        Start a browser session and navigate to the configured start URL.

        Args:
            headless: Run browser in headless mode

        Returns:
            Open BrowserSession

        Raises:
            SessionStartupError: Executable missing, launch failure or
                unreachable start URL. Nothing is left running.
        """
        launch_options = self._launch_options(headless)
        start_url = self.config.application_url
        implicit_wait_ms = self.config.implicit_wait * 1000

        playwright = None
        browser = None
        try:
            playwright = await self._playwright_factory().start()
            launcher = getattr(playwright, self.browser_type)
            browser = await launcher.launch(**launch_options)

            context = await browser.new_context(**self.DEFAULT_CONTEXT_OPTIONS)
            context.set_default_timeout(implicit_wait_ms)
            page = await context.new_page()

            await page.goto(start_url)
        except PlaywrightError as e:
            logger.error(f"Failed to start {self.browser_type} session at {start_url}: {e}")
            await self._release(browser, playwright)
            raise SessionStartupError(
                f"Could not start {self.browser_type} session at {start_url}: {e}"
            ) from e

        logger.debug(
            f"Browser session started: {self.browser_type} "
            f"(headless={headless}, implicit_wait={self.config.implicit_wait}s) -> {start_url}"
        )
        return BrowserSession(
            playwright=playwright,
            browser=browser,
            context=context,
            page=page,
            config=self.config,
            browser_type=self.browser_type,
            headless=headless,
        )

    async def close(self, session: Optional[BrowserSession]) -> None:
        """
        Close the session and release the browser process.

        Safe to call more than once and with a session whose browser has
        already gone away.
        """
        if session is None or session.closed:
            return
        session.closed = True

        try:
            await session.context.close()
        except Exception as e:
            logger.debug(f"Ignoring error while closing context: {e}")

        await self._release(session.browser, session.playwright)
        logger.debug("Browser session closed")

    @staticmethod
    async def _release(browser: Optional[Browser], playwright: Optional[Playwright]) -> None:
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing browser: {e}")

        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                logger.debug(f"Ignoring error while stopping Playwright: {e}")

    @asynccontextmanager
    async def session(self, headless: bool = False) -> AsyncIterator[BrowserSession]:
        """Open a session for the duration of the `async with` block."""
        browser_session = await self.open(headless=headless)
        try:
            yield browser_session
        finally:
            await self.close(browser_session)


__all__ = [
    "BrowserManager",
    "BrowserSession",
    "SessionStartupError",
    "SUPPORTED_BROWSERS",
]
