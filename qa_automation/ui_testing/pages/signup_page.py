"""
================================================================================
Signup Page Object (Async / Playwright)
================================================================================

Registration tab of the authentication screen, reached from the login form
via "Register".

NOTE:
  The password field has no name attribute on the registration form; it is
  addressed by the id the form library generates for it.

================================================================================
"""

from __future__ import annotations

import allure

from qa_automation.ui_testing.framework.element_locator import By, Selector
from qa_automation.ui_testing.framework.page_base import BasePage


VALIDATION_MESSAGE_NOT_FOUND = "Validation message not found."


class SignupPage(BasePage):
    """Signup page object (async)."""

    URL_PATH = "/auth"
    PAGE_TITLE = "Register"

    USERNAME_INPUT = Selector(By.NAME, "username", "signup username input")
    EMAIL_INPUT = Selector(By.NAME, "email", "email input")
    FULL_NAME_INPUT = Selector(By.NAME, "name", "full name input")
    PASSWORD_INPUT = Selector(By.ID, ":r8:-form-item", "signup password input")
    CREATE_ACCOUNT_BUTTON = Selector(By.XPATH, "//button[text()='Create Account']", "create account button")
    VALIDATION_MESSAGE = Selector(By.CSS, "[id$='-form-item-message']", "validation message")

    async def enter_username(self, username: str) -> None:
        await self.type_text(self.USERNAME_INPUT, username)

    async def enter_email(self, email: str) -> None:
        await self.type_text(self.EMAIL_INPUT, email)

    async def enter_full_name(self, full_name: str) -> None:
        await self.type_text(self.FULL_NAME_INPUT, full_name)

    async def enter_password(self, password: str) -> None:
        await self.type_text(self.PASSWORD_INPUT, password)

    async def click_signup(self) -> None:
        await self.click(self.CREATE_ACCOUNT_BUTTON)

    async def fill_form(
        self,
        username: str,
        email: str,
        full_name: str,
        password: str,
    ) -> None:
        """Fill every registration field without submitting."""
        await self.enter_username(username)
        await self.enter_email(email)
        await self.enter_full_name(full_name)
        await self.enter_password(password)

    @allure.step("Sign up (username={username}, email={email})")
    async def signup(
        self,
        username: str,
        email: str,
        full_name: str,
        password: str,
    ) -> None:
        """Fill the registration form, submit it and wait for the page load."""
        await self.fill_form(username, email, full_name, password)
        await self.click_signup()
        await self.wait_for_page_load()

    async def is_signup_form_displayed(self) -> bool:
        return await self.is_displayed(self.CREATE_ACCOUNT_BUTTON)

    async def get_validation_message(self) -> str:
        """First inline validation message, or VALIDATION_MESSAGE_NOT_FOUND."""
        return await self.get_text_or(self.VALIDATION_MESSAGE, VALIDATION_MESSAGE_NOT_FOUND)
