"""In-memory stand-ins for a browser session and its elements."""

from __future__ import annotations

from typing import Any

from e2ekit.models import Locator, ScreenSize


class FakeElement:
    """Mimics the subset of Playwright's locator API the helpers use."""

    def __init__(
        self,
        *,
        visible: bool = True,
        checked: bool = False,
        value: str = "",
        tag: str = "input",
        text: str = "",
        click_failures: int = 0,
        checkbox: bool = False,
        typing_drops_input: bool = False,
        drop_input_times: int = 0,
        aria_expanded: str | None = None,
    ) -> None:
        self.visible = visible
        self.checked = checked
        self.value = value
        self.tag = tag
        self.text = text
        self.click_failures = click_failures
        self.checkbox = checkbox
        self.typing_drops_input = typing_drops_input
        self.drop_input_times = drop_input_times
        self.aria_expanded = aria_expanded
        self.clicks = 0
        self.hovered = False
        self.selected_label: str | None = None
        self.children: dict[Locator, FakeElement] = {}

    async def is_visible(self) -> bool:
        return self.visible

    async def click(self) -> None:
        if self.click_failures:
            self.click_failures -= 1
            raise RuntimeError("Element is not clickable at point")
        self.clicks += 1
        if self.aria_expanded is not None:
            self.aria_expanded = "false" if self.aria_expanded == "true" else "true"
        if self.checkbox:
            self.checked = not self.checked

    async def is_checked(self) -> bool:
        return self.checked

    async def fill(self, value: str) -> None:
        self.value = value

    async def press_sequentially(self, text: str) -> None:
        if self.typing_drops_input:
            return
        if self.drop_input_times:
            self.drop_input_times -= 1
            return
        self.value += text

    async def get_attribute(self, name: str) -> str | None:
        if name == "aria-expanded":
            return self.aria_expanded
        return None

    async def input_value(self) -> str:
        return self.value

    async def hover(self) -> None:
        self.hovered = True

    async def evaluate(self, expression: str) -> Any:
        return self.tag

    async def text_content(self) -> str:
        return self.text

    async def select_option(self, label: str | None = None) -> list[str]:
        self.selected_label = label
        return [label or ""]


class FakeSession:
    """Elements live in a dict keyed by locator; mutate it to change the page."""

    def __init__(self, url: str = "https://example.test/") -> None:
        self.elements: dict[Locator, FakeElement] = {}
        self.url = url
        self.find_calls = 0
        self.scripts: list[str] = []
        self.keys: list[str] = []
        self.cookies_cleared = False
        self.size = ScreenSize(1440, 1000)
        self.screenshot_bytes = b"\x89PNG fake"

    async def find(self, locator: Locator, *, within: Any = None) -> FakeElement | None:
        self.find_calls += 1
        if within is not None:
            return within.children.get(locator)
        return self.elements.get(locator)

    async def navigate(self, url: str) -> None:
        self.url = url

    async def current_url(self) -> str:
        return self.url

    async def execute_script(self, script: str, arg: Any = None) -> Any:
        self.scripts.append(script)
        return None

    async def delete_all_cookies(self) -> None:
        self.cookies_cleared = True

    async def press_key(self, key: str) -> None:
        self.keys.append(key)

    async def screenshot(self) -> bytes:
        return self.screenshot_bytes

    async def set_window_size(self, size: ScreenSize) -> None:
        self.size = size

    async def window_size(self) -> ScreenSize | None:
        return self.size
