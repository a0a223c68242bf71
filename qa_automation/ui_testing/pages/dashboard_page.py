"""
================================================================================
Dashboard Page Object (Async / Playwright)
================================================================================

Landing page after a successful login.

Highlights:
  - `get_welcome_message()` raises ElementLookupError when the greeting never
    appears: the dashboard is not usable without it
  - `is_dashboard_displayed()` returns False instead of raising

================================================================================
"""

from __future__ import annotations

import allure

from qa_automation.ui_testing.framework.element_locator import By, Selector
from qa_automation.ui_testing.framework.page_base import BasePage


class DashboardPage(BasePage):
    """Dashboard page object (async)."""

    URL_PATH = "/"
    PAGE_TITLE = "Dashboard"

    WELCOME_MESSAGE = Selector(By.CSS, ".welcome-message", "welcome message")
    PROFILE_LINK = Selector(By.LINK_TEXT, "Profile", "profile link")
    SETTINGS_LINK = Selector(By.LINK_TEXT, "Settings", "settings link")
    LOGOUT_BUTTON = Selector(By.ID, "logoutButton", "logout button")

    async def get_welcome_message(self) -> str:
        return await self.get_text(self.WELCOME_MESSAGE)

    async def click_profile(self) -> None:
        await self.click(self.PROFILE_LINK)

    async def click_settings(self) -> None:
        await self.click(self.SETTINGS_LINK)

    @allure.step("Logout")
    async def click_logout(self) -> None:
        await self.click(self.LOGOUT_BUTTON)

    async def is_dashboard_displayed(self) -> bool:
        return await self.is_displayed(self.WELCOME_MESSAGE)
