"""Browser session lifecycle: launch, resize, proxy, remote grid, teardown."""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from typing import Any

from playwright.async_api import Browser, BrowserContext, BrowserType, async_playwright

from e2ekit.browser.playwright_session import PlaywrightSession
from e2ekit.browser.remote import build_capabilities, build_ws_endpoint, redact_endpoint
from e2ekit.exceptions import (
    BrowserLaunchError,
    NavigationError,
    SessionNotOpenError,
    UnsupportedConfigurationError,
)
from e2ekit.models import DEFAULT_SCREEN_SIZE, ScreenSize, resolve_screen_size
from e2ekit.settings import SessionSettings

logger = logging.getLogger(__name__)

CHROME_UA = (
    "Mozilla/5.0 (e2ekit) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
FIREFOX_UA = "Mozilla/5.0 (e2ekit) Gecko/20100101 Firefox/121.0"

_BROWSER_ENGINES: dict[str, str] = {
    "chrome": "chromium",
    "chromium": "chromium",
    "firefox": "firefox",
}

_PROXY_MODES = ("direct", "system")

# Console message types ranked by severity; "log" is Playwright's default type.
_CONSOLE_LEVELS: dict[str, int] = {
    "debug": 10,
    "log": 20,
    "info": 20,
    "warning": 30,
    "error": 40,
}

_FIREFOX_PREFS: dict[str, Any] = {
    "browser.startup.homepage_override.mstone": "ignore",
    "browser.startup.homepage": "about:blank",
    "startup.homepage_welcome_url.additional": "about:blank",
}


def resolve_engine(browser: str) -> str:
    """Map a configured browser name onto a Playwright engine."""
    engine = _BROWSER_ENGINES.get(browser.strip().lower())
    if engine is None:
        raise UnsupportedConfigurationError(
            f"The specified browser: '{browser}' in the config is not supported. "
            'Supported browsers are "chrome" and "firefox".'
        )
    return engine


def proxy_launch_options(engine: str, mode: str) -> dict[str, Any]:
    """Return the ``launch()`` keyword arguments for a proxy *mode*."""
    mode = mode.strip().lower()
    if mode not in _PROXY_MODES:
        raise UnsupportedConfigurationError(
            f"Unknown proxy type specified of: '{mode}'. "
            'Supported values are "direct" or "system".'
        )
    if engine == "firefox":
        prefs = dict(_FIREFOX_PREFS)
        prefs["network.proxy.type"] = 0 if mode == "direct" else 5
        return {"firefox_user_prefs": prefs}

    args = ["--no-sandbox"]
    if mode == "direct":
        args.append("--no-proxy-server")
    return {"args": args}


def resolve_log_level(level: str) -> int:
    try:
        return _CONSOLE_LEVELS[level.strip().lower()]
    except KeyError:
        raise UnsupportedConfigurationError(
            f"Unknown browser log level '{level}'. "
            "Supported values are debug, info, warning and error."
        ) from None


class BrowserManager:
    """Owns one Playwright browser session configured from ``SessionSettings``.

    Usage::

        async with BrowserManager(settings) as manager:
            await manager.navigate("/work-with-us/")
            await helpers.wait_till_present_and_displayed(manager.session, By.css("#content"))
    """

    def __init__(self, settings: SessionSettings | None = None) -> None:
        self.settings = settings if settings is not None else SessionSettings.from_yaml()
        self.session_id = ""
        self._pw: Any = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._session: PlaywrightSession | None = None
        self._log_threshold = _CONSOLE_LEVELS["error"]
        self._browser_logs: list[str] = []

    @property
    def session(self) -> PlaywrightSession:
        if self._session is None:
            raise SessionNotOpenError("Browser not launched — call open() first.")
        return self._session

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def screen_size_class(self) -> str:
        return (self.settings.screen_size or DEFAULT_SCREEN_SIZE).lower()

    @property
    def browser_logs(self) -> list[str]:
        return list(self._browser_logs)

    # --- lifecycle ---

    async def open(self) -> PlaywrightSession:
        """Launch (or connect to) the browser and open a page."""
        if self._session is not None:
            return self._session

        # Configuration problems fail fast, before any process is started.
        engine = resolve_engine(self.settings.browser)
        launch_options = proxy_launch_options(engine, self.settings.proxy)
        size = resolve_screen_size(self.screen_size_class)
        self._log_threshold = resolve_log_level(self.settings.browser_log_level)
        ws_endpoint = ""
        if self.settings.remote.enabled:
            caps = build_capabilities(
                self.settings.remote,
                self.settings.browser,
                self.screen_size_class,
                build_number=os.environ.get("CIRCLE_BUILD_NUM"),
            )
            ws_endpoint = build_ws_endpoint(self.settings.remote.endpoint, caps)

        self.session_id = uuid.uuid4().hex[:12]
        try:
            self._pw = await async_playwright().start()
            browser_type: BrowserType = getattr(self._pw, engine)
            if ws_endpoint:
                logger.info("Connecting to remote grid %s.", redact_endpoint(ws_endpoint))
                self._browser = await browser_type.connect(ws_endpoint)
            else:
                self._browser = await browser_type.launch(
                    headless=self.settings.headless,
                    slow_mo=self.settings.slow_mo,
                    **launch_options,
                )
            self._context = await self._browser.new_context(**self._context_options(engine, size))
            self._context.set_default_timeout(self.settings.implicit_wait_ms)
            self._context.set_default_navigation_timeout(self.settings.page_load_timeout_ms)
            page = await self._context.new_page()
        except Exception as exc:
            await self._shutdown()
            raise BrowserLaunchError(
                f"Failed to start {self.settings.browser}: {exc}"
            ) from exc

        page.on("console", self._on_console)
        self._session = PlaywrightSession(page, self._context, self.session_id)
        logger.info(
            "Browser %s launched (session=%s, headless=%s, size=%s).",
            self.settings.browser,
            self.session_id,
            self.settings.headless,
            self.screen_size_class,
        )
        return self._session

    def _context_options(self, engine: str, size: ScreenSize) -> dict[str, Any]:
        options: dict[str, Any] = {}
        if self.settings.resize_browser_window:
            options["viewport"] = size.as_viewport()
        if self.settings.use_custom_ua:
            default_ua = FIREFOX_UA if engine == "firefox" else CHROME_UA
            options["user_agent"] = self.settings.custom_user_agent or default_ua
        return options

    async def close(self, drain_delay_ms: int = 0) -> None:
        """Wait *drain_delay_ms*, then shut the browser down."""
        if drain_delay_ms > 0:
            await asyncio.sleep(drain_delay_ms / 1000)
        await self._shutdown()
        logger.info("Browser closed (session=%s).", self.session_id)

    async def _shutdown(self) -> None:
        context, browser, pw = self._context, self._browser, self._pw
        self._session = None
        self._context = None
        self._browser = None
        self._pw = None
        # Each step runs even if an earlier one fails, so the driver never leaks.
        steps = (
            ("context", context.close if context is not None else None),
            ("browser", browser.close if browser is not None else None),
            ("playwright", pw.stop if pw is not None else None),
        )
        for name, closer in steps:
            if closer is None:
                continue
            try:
                await closer()
            except Exception as exc:
                logger.warning("Failed to close %s: %s; continuing teardown.", name, exc)

    async def __aenter__(self) -> "BrowserManager":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # --- window ---

    async def resize(self, size_class: str) -> ScreenSize:
        """Resize the viewport to a named size class."""
        size = resolve_screen_size(size_class)
        await self.session.set_window_size(size)
        logger.debug("Viewport resized to %s (%dx%d).", size_class, size.width, size.height)
        return size

    # --- navigation ---

    def page_url(self, path: str = "/") -> str:
        """Join *path* onto the configured base URL."""
        return f"{self.settings.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def navigate(self, path_or_url: str = "/") -> str:
        """Load an absolute URL, or a path relative to ``base_url``."""
        if "://" in path_or_url or path_or_url.startswith(("about:", "data:")):
            url = path_or_url
        else:
            url = self.page_url(path_or_url)
        try:
            await self.session.navigate(url)
        except SessionNotOpenError:
            raise
        except Exception as exc:
            raise NavigationError(f"Failed to load {url}: {exc}") from exc
        return url

    # --- browser console ---

    def _on_console(self, message: Any) -> None:
        level = _CONSOLE_LEVELS.get(message.type, _CONSOLE_LEVELS["log"])
        if level < self._log_threshold:
            return
        entry = f"[{message.type}] {message.text}"
        self._browser_logs.append(entry)
        if level >= _CONSOLE_LEVELS["warning"]:
            logger.warning("Browser console: %s", entry)
        else:
            logger.debug("Browser console: %s", entry)
