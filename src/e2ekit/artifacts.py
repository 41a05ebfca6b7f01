"""Screenshot and log files written after a test finishes."""

from __future__ import annotations

import base64
import logging
import re
import unicodedata
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from e2ekit.models import TestResult

if TYPE_CHECKING:
    from e2ekit.browser.manager import BrowserManager

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[^a-z0-9\-_]+")


def slugify(text: str, max_len: int = 80) -> str:
    if not text:
        return "untitled"
    slug = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode().lower()
    slug = _SLUG_RE.sub("-", slug).strip("-")
    slug = re.sub(r"-{2,}", "-", slug)
    return slug[:max_len].strip("-") or "untitled"


def _timestamp(when: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, ``:`` replaced for file systems."""
    when = when.astimezone(timezone.utc)
    stamp = when.strftime("%Y-%m-%dT%H:%M:%S") + f".{when.microsecond // 1000:03d}Z"
    return stamp.replace(":", "-")


def screenshot_filename(
    result: TestResult, size_class: str, when: datetime | None = None
) -> str:
    """``<state>-<size>-<slug(title)>-<timestamp>.png``"""
    when = when or datetime.now(timezone.utc)
    return f"{result.state}-{size_class}-{slugify(result.title)}-{_timestamp(when)}.png"


def write_image(data: bytes | str, dst: str | Path) -> Path:
    """Write PNG *data* (raw bytes or base64 text) to *dst*."""
    dst = Path(dst)
    dst.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        data = base64.b64decode(data)
    dst.write_bytes(data)
    return dst


def write_text(content: str, dst: str | Path) -> Path:
    dst = Path(dst)
    dst.parent.mkdir(parents=True, exist_ok=True)
    dst.write_text(content, encoding="utf-8")
    return dst


async def take_screenshot(manager: BrowserManager, result: TestResult | None) -> Path | None:
    """Capture the current page into ``screenshots_dir`` named after *result*.

    Does nothing when there is no finished test to name the file after.
    """
    if result is None:
        return None

    session = manager.session
    try:
        logger.info("Taking screenshot of: '%s'", await session.current_url())
    except Exception as exc:
        logger.warning("Could not capture the URL when taking a screenshot: '%s'", exc)

    data = await session.screenshot()
    dst = Path(manager.settings.screenshots_dir) / screenshot_filename(
        result, manager.screen_size_class
    )
    write_image(data, dst)
    logger.debug("Screenshot written to %s.", dst)
    return dst


def write_browser_log(manager: BrowserManager, dst: str | Path) -> Path:
    """Dump the captured browser console messages to *dst*, one per line."""
    lines = manager.browser_logs
    return write_text("\n".join(lines) + ("\n" if lines else ""), dst)
