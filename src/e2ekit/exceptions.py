"""Custom exception hierarchy for e2ekit."""

from __future__ import annotations

from typing import Any


class E2EKitError(Exception):
    """Base exception for all e2ekit errors."""


class PollTimeoutError(E2EKitError, TimeoutError):
    """Raised when a polled condition does not hold before its deadline."""

    def __init__(
        self,
        description: str,
        timeout_ms: int,
        elapsed_ms: int,
        locator: Any = None,
        attempts: int = 0,
        last_outcome: Any = None,
    ) -> None:
        self.description = description
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms
        self.locator = locator
        self.attempts = attempts
        self.last_outcome = last_outcome
        super().__init__(
            f"{description} (timeout {timeout_ms} ms, elapsed {elapsed_ms} ms, "
            f"{attempts} attempt(s))"
        )


class ConfigurationError(E2EKitError):
    """Raised when settings are invalid or missing."""


class UnsupportedConfigurationError(ConfigurationError):
    """Raised for an unknown browser, proxy mode or screen-size class."""


class VerificationMismatchError(E2EKitError):
    """Raised when a value read back from the page differs from the one written."""

    def __init__(self, expected: str, actual: str | None, secure: bool = False) -> None:
        self.expected = expected
        self.actual = actual
        if secure:
            super().__init__("Read-back value does not match the typed value.")
        else:
            super().__init__(f"Expected {expected!r}, read back {actual!r}.")


class BrowserLaunchError(E2EKitError):
    """Raised when the browser fails to start."""


class NavigationError(E2EKitError):
    """Raised when a page fails to load."""


class SessionNotOpenError(E2EKitError):
    """Raised when a browser session is used before ``open()``."""
