"""Playwright-backed implementation of BrowserSession."""

from __future__ import annotations

import logging
from typing import Any

from playwright.async_api import BrowserContext, Locator as PageLocator, Page

from e2ekit.models import Locator, ScreenSize

logger = logging.getLogger(__name__)


class PlaywrightSession:
    """Session handle over a single Playwright page."""

    def __init__(self, page: Page, context: BrowserContext, session_id: str = "") -> None:
        self._page = page
        self._context = context
        self.session_id = session_id

    @property
    def page(self) -> Page:
        return self._page

    @property
    def context(self) -> BrowserContext:
        return self._context

    # --- querying ---

    async def find(self, locator: Locator, *, within: Any = None) -> PageLocator | None:
        root = within if within is not None else self._page
        matches = root.locator(locator.to_selector())
        if await matches.count() == 0:
            return None
        return matches.first

    # --- navigation ---

    async def navigate(self, url: str) -> None:
        await self._page.goto(url, wait_until="load")

    async def current_url(self) -> str:
        return self._page.url

    # --- page state ---

    async def execute_script(self, script: str, arg: Any = None) -> Any:
        if arg is not None:
            return await self._page.evaluate(script, arg)
        return await self._page.evaluate(script)

    async def delete_all_cookies(self) -> None:
        await self._context.clear_cookies()
        logger.debug("Cookies cleared.")

    async def press_key(self, key: str) -> None:
        await self._page.keyboard.press(key)

    async def screenshot(self) -> bytes:
        return await self._page.screenshot()

    # --- viewport ---

    async def set_window_size(self, size: ScreenSize) -> None:
        await self._page.set_viewport_size(size.as_viewport())

    async def window_size(self) -> ScreenSize | None:
        viewport = self._page.viewport_size
        if viewport is None:
            return None
        return ScreenSize(viewport["width"], viewport["height"])
