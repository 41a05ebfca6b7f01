"""Condition poller: retry an async predicate until it holds or time runs out.

A predicate is a zero-argument coroutine function returning a
:data:`~e2ekit.models.PollOutcome`. Most failures inside a predicate are
ordinary transient page state (an element not rendered yet, a click landing
on an overlay), so anything it raises counts as "not ready" and is retried.
Only configuration errors stop the poller early.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from e2ekit.exceptions import (
    ConfigurationError,
    PollTimeoutError,
    VerificationMismatchError,
)
from e2ekit.models import Locator, NotYetReady, PollError, PollOutcome, Success

logger = logging.getLogger(__name__)

DEFAULT_WAIT_MS = 10_000
DEFAULT_POLL_INTERVAL_MS = 250

Predicate = Callable[[], Awaitable[PollOutcome]]


async def _attempt(predicate: Predicate) -> PollOutcome:
    """Run one attempt, turning raised exceptions into outcomes."""
    try:
        return await predicate()
    except ConfigurationError as exc:
        return PollError(exc, recoverable=False)
    except VerificationMismatchError as exc:
        return NotYetReady(str(exc))
    except Exception as exc:
        return PollError(exc)


async def poll(
    predicate: Predicate,
    *,
    timeout_ms: int = DEFAULT_WAIT_MS,
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    description: str = "",
    locator: Locator | None = None,
) -> Any:
    """Await *predicate* every *interval_ms* until it returns ``Success``.

    Returns the ``Success`` payload. Raises :class:`PollTimeoutError` once
    *timeout_ms* has elapsed without success; the final attempt runs at the
    deadline, so a failure surfaces no later than the deadline plus one
    in-flight call. A non-recoverable :class:`PollError` re-raises its cause.
    """
    loop = asyncio.get_running_loop()
    started = loop.time()
    deadline = started + max(timeout_ms, 0) / 1000
    interval = max(interval_ms, 0) / 1000
    attempts = 0

    while True:
        attempts += 1
        outcome = await _attempt(predicate)
        if not isinstance(outcome, (Success, NotYetReady, PollError)):
            raise TypeError(
                f"Predicate must return Success, NotYetReady or PollError, got {outcome!r}"
            )

        if isinstance(outcome, Success):
            if attempts > 1:
                logger.debug(
                    "Condition met after %d attempt(s): %s", attempts, description or predicate
                )
            return outcome.value

        if isinstance(outcome, PollError):
            if not outcome.recoverable:
                raise outcome.cause
            logger.debug("Poll attempt %d raised %r — retrying.", attempts, outcome.cause)

        now = loop.time()
        if now >= deadline:
            raise PollTimeoutError(
                description or "Timed out waiting for condition",
                timeout_ms=timeout_ms,
                elapsed_ms=int((now - started) * 1000),
                locator=locator,
                attempts=attempts,
                last_outcome=outcome,
            )
        await asyncio.sleep(min(interval, deadline - now))


async def poll_until(
    predicate: Predicate,
    *,
    timeout_ms: int = DEFAULT_WAIT_MS,
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    description: str = "",
    locator: Locator | None = None,
) -> bool:
    """Like :func:`poll` but return ``False`` on timeout instead of raising."""
    try:
        await poll(
            predicate,
            timeout_ms=timeout_ms,
            interval_ms=interval_ms,
            description=description,
            locator=locator,
        )
    except PollTimeoutError as exc:
        logger.debug("%s", exc)
        return False
    return True
