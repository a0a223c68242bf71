"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Login tab of the authentication screen.

Timeout policy:
  - Actions and `login()` raise ElementLookupError
  - `get_error_message()` returns ERROR_MESSAGE_NOT_FOUND
  - `is_login_page_displayed()` returns False

================================================================================
"""

from __future__ import annotations

import allure

from qa_automation.ui_testing.framework.element_locator import By, Selector
from qa_automation.ui_testing.framework.page_base import BasePage


ERROR_MESSAGE_NOT_FOUND = "Error message not found."


class LoginPage(BasePage):
    """Login page object (async)."""

    URL_PATH = "/auth"
    PAGE_TITLE = "Login"

    USERNAME_INPUT = Selector(By.NAME, "username", "username input")
    PASSWORD_INPUT = Selector(By.XPATH, "//input[@name='password']", "password input")
    LOGIN_BUTTON = Selector(By.CSS, "button[type='submit']", "login button")
    ERROR_MESSAGE = Selector(By.CSS, ".error-message", "error message")
    CREATE_ACCOUNT_LINK = Selector(By.XPATH, "//button[text()='Register']", "create account link")

    async def enter_username(self, username: str) -> None:
        await self.type_text(self.USERNAME_INPUT, username)

    async def enter_password(self, password: str) -> None:
        await self.type_text(self.PASSWORD_INPUT, password)

    async def click_login(self) -> None:
        await self.click(self.LOGIN_BUTTON)

    async def click_create_account(self) -> None:
        """Switch to the registration form."""
        await self.click(self.CREATE_ACCOUNT_LINK)

    async def get_error_message(self) -> str:
        """Login error text, or ERROR_MESSAGE_NOT_FOUND when none is shown."""
        return await self.get_text_or(self.ERROR_MESSAGE, ERROR_MESSAGE_NOT_FOUND)

    async def is_login_page_displayed(self) -> bool:
        return await self.is_displayed(self.LOGIN_BUTTON)

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> None:
        """
        Fill the credentials and submit the form.

        Waits for the resulting page load; it does not check whether the login
        was accepted. Use DashboardPage / `get_error_message()` for that.
        """
        await self.enter_username(username)
        await self.enter_password(password)
        await self.click_login()
        await self.wait_for_page_load()

    async def assert_login_page_loaded(self) -> None:
        """Hard assertion helper used by tests."""
        assert await self.is_login_page_displayed(), "Login form should be visible"
