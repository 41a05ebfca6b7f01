"""Wait / click / fill helpers built on the condition poller.

Each helper pairs a predicate with the poller. Predicates receive the session
and locator as arguments and report a ``PollOutcome``; anything they raise is
treated by the poller as "not ready yet".

Example::

    from e2ekit import By, helpers

    await helpers.set_when_settable(session, By.css("input[name='username']"), "admin")
    await helpers.click_when_clickable(session, By.css("button[type='submit']"))
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any

from e2ekit.browser.base import BrowserSession
from e2ekit.exceptions import VerificationMismatchError
from e2ekit.models import By, Locator, NotYetReady, PollOutcome, Success
from e2ekit.polling import DEFAULT_WAIT_MS, poll, poll_until

logger = logging.getLogger(__name__)

SECURE_MASK = "*********"


def _timeout_message(locator: Locator, state: str) -> str:
    return f"Timed out waiting for element with {locator} to be {state}"


# ---- predicates ----


async def _present_and_displayed(session: BrowserSession, locator: Locator) -> PollOutcome:
    element = await session.find(locator)
    if element is None:
        return NotYetReady("not present")
    if not await element.is_visible():
        return NotYetReady("present but not displayed")
    return Success(True)


async def _absent(session: BrowserSession, locator: Locator) -> PollOutcome:
    outcome = await _present_and_displayed(session, locator)
    if isinstance(outcome, Success):
        return NotYetReady("still displayed")
    return Success(True)


async def _clicked(session: BrowserSession, locator: Locator) -> PollOutcome:
    element = await session.find(locator)
    if element is None:
        return NotYetReady("not present")
    await element.click()
    return Success(True)


async def _cleared(session: BrowserSession, locator: Locator) -> PollOutcome:
    element = await session.find(locator)
    if element is None:
        return NotYetReady("not present")
    await element.fill("")
    actual = await element.input_value()
    if actual != "":
        raise VerificationMismatchError("", actual)
    return Success(True)


async def _settable(
    session: BrowserSession, locator: Locator, value: str, secure: bool
) -> PollOutcome:
    element = await session.find(locator)
    if element is None:
        return NotYetReady("not present")
    await element.fill("")
    await element.press_sequentially(value)
    actual = await element.input_value()
    if actual != value:
        raise VerificationMismatchError(value, actual, secure=secure)
    return Success(True)


async def _checkbox_state(
    session: BrowserSession, locator: Locator, checked: bool
) -> PollOutcome:
    element = await session.find(locator)
    if element is None:
        return NotYetReady("not present")
    if await element.is_checked() == checked:
        return Success(True)
    await element.click()
    if await element.is_checked() != checked:
        return NotYetReady("checkbox did not change state")
    return Success(True)


def option_locator(option_text: str) -> Locator:
    """Locator for an ``<option>`` whose text contains *option_text*."""
    return By.xpath(f'.//option[contains(text(),"{option_text}")]')


async def _option_selected(
    session: BrowserSession,
    dropdown_locator: Locator,
    option_text: str,
    opened: dict[str, bool],
) -> PollOutcome:
    dropdown = await session.find(dropdown_locator)
    if dropdown is None:
        return NotYetReady("dropdown not present")
    # Clicking an open custom dropdown closes it again, so open it once and
    # only reopen when it reports itself collapsed.
    if not opened.get("dropdown") or await dropdown.get_attribute("aria-expanded") == "false":
        await dropdown.click()
        opened["dropdown"] = True
    option = await session.find(option_locator(option_text), within=dropdown)
    if option is None:
        return NotYetReady(f"no option containing {option_text!r}")

    tag = await dropdown.evaluate("el => el.tagName.toLowerCase()")
    if tag == "select":
        label = (await option.text_content() or "").strip()
        await dropdown.select_option(label=label)
    else:
        await option.click()
    return Success(True)


# ---- waits ----


async def wait_till_present_and_displayed(
    session: BrowserSession, locator: Locator, wait_ms: int = DEFAULT_WAIT_MS
) -> bool:
    """Wait until the element located by *locator* is present and displayed.

    Raises ``PollTimeoutError`` if it is not within *wait_ms*.
    """
    return await poll(
        partial(_present_and_displayed, session, locator),
        timeout_ms=wait_ms,
        description=_timeout_message(locator, "present and displayed"),
        locator=locator,
    )


async def is_eventually_present_and_displayed(
    session: BrowserSession, locator: Locator, wait_ms: int = DEFAULT_WAIT_MS
) -> bool:
    """Return ``True`` if the element shows up within *wait_ms*, else ``False``."""
    return await poll_until(
        partial(_present_and_displayed, session, locator),
        timeout_ms=wait_ms,
        description=_timeout_message(locator, "present and displayed"),
        locator=locator,
    )


async def wait_till_not_present(
    session: BrowserSession, locator: Locator, wait_ms: int = DEFAULT_WAIT_MS
) -> bool:
    """Wait until the element is missing or hidden; both count as absent."""
    return await poll(
        partial(_absent, session, locator),
        timeout_ms=wait_ms,
        description=_timeout_message(locator, "not present"),
        locator=locator,
    )


# ---- actions ----


async def click_when_clickable(
    session: BrowserSession, locator: Locator, wait_ms: int = DEFAULT_WAIT_MS
) -> bool:
    """Click the element as soon as a click goes through.

    Every attempt both probes and clicks, so an element that was briefly
    clickable and then replaced may receive more than one click.
    """
    return await poll(
        partial(_clicked, session, locator),
        timeout_ms=wait_ms,
        description=_timeout_message(locator, "clickable"),
        locator=locator,
    )


async def wait_for_field_clearable(
    session: BrowserSession, locator: Locator, wait_ms: int = DEFAULT_WAIT_MS
) -> bool:
    """Clear the field and wait until it reads back empty."""
    return await poll(
        partial(_cleared, session, locator),
        timeout_ms=wait_ms,
        description=_timeout_message(locator, "clearable"),
        locator=locator,
    )


async def set_when_settable(
    session: BrowserSession,
    locator: Locator,
    value: str,
    *,
    secure_value: bool = False,
    wait_ms: int = DEFAULT_WAIT_MS,
) -> bool:
    """Clear the field, type *value* and wait until it reads back *value*.

    Pass ``secure_value=True`` for passwords so the value never appears in
    error messages or logs.
    """
    log_value = SECURE_MASK if secure_value else value
    return await poll(
        partial(_settable, session, locator, value, secure_value),
        timeout_ms=wait_ms,
        description=_timeout_message(locator, f"settable to: '{log_value}'"),
        locator=locator,
    )


async def toggle_checkbox(
    session: BrowserSession,
    locator: Locator,
    checked: bool = True,
    wait_ms: int = DEFAULT_WAIT_MS,
) -> bool:
    """Bring the checkbox to *checked*, clicking only when its state differs."""
    state = "checked" if checked else "unchecked"
    return await poll(
        partial(_checkbox_state, session, locator, checked),
        timeout_ms=wait_ms,
        description=_timeout_message(locator, state),
        locator=locator,
    )


async def set_checkbox(
    session: BrowserSession, locator: Locator, wait_ms: int = DEFAULT_WAIT_MS
) -> bool:
    return await toggle_checkbox(session, locator, True, wait_ms)


async def unset_checkbox(
    session: BrowserSession, locator: Locator, wait_ms: int = DEFAULT_WAIT_MS
) -> bool:
    return await toggle_checkbox(session, locator, False, wait_ms)


async def select_option(
    session: BrowserSession,
    dropdown_locator: Locator,
    option_text: str,
    wait_ms: int = DEFAULT_WAIT_MS,
) -> bool:
    """Open the dropdown and pick the option whose text contains *option_text*.

    Native ``<select>`` elements get the option selected; custom dropdowns get
    the option clicked. The dropdown is clicked open once per call and again
    only if it reports ``aria-expanded="false"``. A missing option ends in
    ``PollTimeoutError``.
    """
    return await poll(
        partial(_option_selected, session, dropdown_locator, option_text, {}),
        timeout_ms=wait_ms,
        description=(
            f"Timed out waiting for option '{option_text}' in element with "
            f"{dropdown_locator} to be selectable"
        ),
        locator=dropdown_locator,
    )


# ---- page state ----


async def delete_local_storage(session: BrowserSession) -> None:
    """Empty ``window.localStorage`` unless the page has no origin."""
    url = await session.current_url()
    if url.startswith("data:") or url == "about:blank":
        return
    await session.execute_script("() => window.localStorage.clear()")


async def clear_cookies_and_delete_local_storage(session: BrowserSession) -> None:
    await session.delete_all_cookies()
    await delete_local_storage(session)


async def scroll_up(session: BrowserSession, wait_ms: int = 2_000) -> None:
    """Press Page Up once, then sleep *wait_ms*."""
    await session.press_key("PageUp")
    await asyncio.sleep(wait_ms / 1000)


async def scroll_down(session: BrowserSession, wait_ms: int = 2_000) -> None:
    """Press Page Down once, then sleep *wait_ms*."""
    await session.press_key("PageDown")
    await asyncio.sleep(wait_ms / 1000)


async def mouse_move_to(session: BrowserSession, locator: Locator) -> bool:
    """Hover over the element; ``False`` if it is missing or cannot be hovered."""
    element: Any = await session.find(locator)
    if element is None:
        return False
    try:
        await element.hover()
    except Exception as exc:
        logger.debug("Could not move mouse to %s: %s", locator, exc)
        return False
    return True
