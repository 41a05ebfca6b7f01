"""Protocol definition for browser sessions consumed by the helpers."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from e2ekit.models import Locator, ScreenSize


@runtime_checkable
class BrowserSession(Protocol):
    """Opaque handle to one open browser page.

    Every method is async so helpers can ``await`` each round trip. Elements
    returned by :meth:`find` expose Playwright's locator API (``is_visible``,
    ``click``, ``fill``, ``press_sequentially``, ``input_value``,
    ``is_checked``, ``select_option``, ``hover``, ``evaluate``).
    """

    async def find(self, locator: Locator, *, within: Any = None) -> Any | None:
        """Return the first element matching *locator*, or ``None``. Never waits."""
        ...

    async def navigate(self, url: str) -> None:
        """Load *url* and wait for the page load event."""
        ...

    async def current_url(self) -> str:
        """Return the current page URL."""
        ...

    async def execute_script(self, script: str, arg: Any = None) -> Any:
        """Run a JS expression in the page and return the result."""
        ...

    async def delete_all_cookies(self) -> None:
        """Drop every cookie in the session."""
        ...

    async def press_key(self, key: str) -> None:
        """Press *key* (e.g. ``"PageUp"``) on the focused page."""
        ...

    async def screenshot(self) -> bytes:
        """Capture the visible viewport as PNG bytes."""
        ...

    async def set_window_size(self, size: ScreenSize) -> None:
        """Resize the viewport."""
        ...

    async def window_size(self) -> ScreenSize | None:
        """Return the current viewport size."""
        ...
