"""
Fixtures for offline unit tests.

The fakes below stand in for the Playwright objects the framework touches,
so page objects and the session manager can be exercised without a browser.
"""

from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from playwright._impl._errors import TargetClosedError
from playwright.async_api import Error as PlaywrightError

from qa_automation.ui_testing.framework.config_reader import ConfigReader
from qa_automation.ui_testing.framework.element_locator import By, Selector, to_playwright_selector


CONFIG_ENV_VARS = (
    "APP_URL",
    "CHROME_DRIVER_PATH",
    "FIREFOX_DRIVER_PATH",
    "IMPLICIT_WAIT",
    "QA_CONFIG_PATH",
)

VALID_PROPERTIES = """\
# Application under test
app.url=http://app.test
chrome.driver.path=
firefox.driver.path=
implicit.wait=7
"""


@pytest.fixture(autouse=True)
def _isolated_config_env(monkeypatch):
    """Keep developer/CI env overrides out of unit tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# ================================================================================
# Page / Locator Fakes
# ================================================================================

class FakeElement:
    """DOM element state. Becomes visible after `appear_after` visibility checks."""

    def __init__(self, text: str = "", value: str = "", visible: bool = True,
                 enabled: bool = True, appear_after: int = 0):
        self.text = text
        self.value = value
        self.visible = visible
        self.enabled = enabled
        self.appear_after = appear_after
        self.visibility_checks = 0


class FakeLocator:
    def __init__(self, page: "FakePage", key: str):
        self._page = page
        self.key = key

    @property
    def first(self) -> "FakeLocator":
        return self

    @property
    def element(self) -> Optional[FakeElement]:
        return self._page.elements.get(self.key)

    async def is_visible(self) -> bool:
        if self._page.closed:
            raise TargetClosedError("Target page, context or browser has been closed")
        element = self.element
        if element is None:
            return False
        element.visibility_checks += 1
        return element.visible and element.visibility_checks > element.appear_after

    async def is_enabled(self) -> bool:
        return self.element is not None and self.element.enabled

    async def clear(self) -> None:
        self.element.value = ""
        self._page.events.append(("clear", self.key))

    async def fill(self, value: str) -> None:
        self.element.value = value
        self._page.events.append(("fill", self.key, value))

    async def click(self) -> None:
        snapshot = {key: element.value for key, element in self._page.elements.items()}
        self._page.events.append(("click", self.key, snapshot))
        action = self._page.on_click.get(self.key)
        if action:
            action(self._page)

    async def inner_text(self) -> str:
        return self.element.text

    async def input_value(self) -> str:
        return self.element.value


class FakePage:
    """Minimal async Page: elements are keyed by Playwright selector string."""

    def __init__(self, url: str = "http://app.test/"):
        self.url = url
        self.elements: Dict[str, FakeElement] = {}
        self.on_click: Dict[str, object] = {}
        self.events: List[tuple] = []
        self.page_title = "RaptorTest"
        self.closed = False

    @staticmethod
    def key_for(selector: Selector) -> str:
        if selector.by == By.LINK_TEXT:
            return f"link:{selector.value}"
        return to_playwright_selector(selector)

    def add(self, selector: Selector, **kwargs) -> FakeElement:
        element = FakeElement(**kwargs)
        self.elements[self.key_for(selector)] = element
        return element

    def remove(self, selector: Selector) -> None:
        self.elements.pop(self.key_for(selector), None)

    def element(self, selector: Selector) -> FakeElement:
        return self.elements[self.key_for(selector)]

    def when_clicked(self, selector: Selector, action) -> None:
        self.on_click[self.key_for(selector)] = action

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def get_by_role(self, role: str, name: str, exact: bool = False) -> FakeLocator:
        return FakeLocator(self, f"{role}:{name}")

    async def goto(self, url: str, **kwargs) -> None:
        self.url = url
        self.events.append(("goto", url))

    async def wait_for_load_state(self, state: str = "load", timeout: float = None) -> None:
        self.events.append(("load_state", state))

    async def title(self) -> str:
        return self.page_title

    def clicks(self) -> List[tuple]:
        return [event for event in self.events if event[0] == "click"]


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_session(fake_page: FakePage):
    """Stand-in for BrowserSession exposing only what page objects use."""
    return SimpleNamespace(page=fake_page, base_url="http://app.test")


@pytest.fixture
def fast_wait() -> dict:
    """Page object kwargs for short, deterministic waits."""
    return {"timeout": 0.2, "poll_interval": 0.01}


# ================================================================================
# Playwright Fakes
# ================================================================================

class FakeBrowserPage:
    def __init__(self, goto_error: Optional[Exception] = None):
        self.goto_error = goto_error
        self.url = "about:blank"

    async def goto(self, url: str, **kwargs) -> None:
        if self.goto_error:
            raise self.goto_error
        self.url = url


class FakeContext:
    def __init__(self, options: dict, goto_error: Optional[Exception] = None):
        self.options = options
        self.default_timeout = None
        self.page = FakeBrowserPage(goto_error)
        self.close_calls = 0

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    async def new_page(self) -> FakeBrowserPage:
        return self.page

    async def close(self) -> None:
        self.close_calls += 1
        if self.close_calls > 1:
            raise PlaywrightError("Target page, context or browser has been closed")


class FakeBrowser:
    def __init__(self, goto_error: Optional[Exception] = None):
        self.goto_error = goto_error
        self.contexts: List[FakeContext] = []
        self.close_calls = 0

    async def new_context(self, **options) -> FakeContext:
        context = FakeContext(options, self.goto_error)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.close_calls += 1


class FakeLauncher:
    def __init__(self, state: "FakePlaywrightState"):
        self._state = state

    async def launch(self, **options) -> FakeBrowser:
        self._state.launch_options.append(options)
        if self._state.launch_error:
            raise self._state.launch_error
        browser = FakeBrowser(self._state.goto_error)
        self._state.browsers.append(browser)
        return browser


class FakePlaywrightState:
    """Shared record of everything the fake Playwright was asked to do."""

    def __init__(self):
        self.launch_options: List[dict] = []
        self.browsers: List[FakeBrowser] = []
        self.launch_error: Optional[Exception] = None
        self.goto_error: Optional[Exception] = None
        self.starts = 0
        self.stops = 0

    @property
    def browser(self) -> FakeBrowser:
        return self.browsers[-1]

    @property
    def context(self) -> FakeContext:
        return self.browser.contexts[-1]


class FakePlaywright:
    def __init__(self, state: FakePlaywrightState):
        self._state = state
        self.chromium = FakeLauncher(state)
        self.firefox = FakeLauncher(state)

    async def stop(self) -> None:
        self._state.stops += 1


class FakePlaywrightFactory:
    """Replacement for `async_playwright` passed to BrowserManager."""

    def __init__(self):
        self.state = FakePlaywrightState()

    def __call__(self):
        return self

    async def start(self) -> FakePlaywright:
        self.state.starts += 1
        return FakePlaywright(self.state)


@pytest.fixture
def playwright_factory() -> FakePlaywrightFactory:
    return FakePlaywrightFactory()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.properties"
    path.write_text(VALID_PROPERTIES, encoding="utf-8")
    return path


@pytest.fixture
def config(config_file) -> ConfigReader:
    return ConfigReader(config_file)
