"""Wait, click and fill helpers plus a browser session manager for UI tests."""

from e2ekit import helpers
from e2ekit.browser.manager import BrowserManager
from e2ekit.exceptions import (
    E2EKitError,
    PollTimeoutError,
    UnsupportedConfigurationError,
)
from e2ekit.models import By, Locator, NotYetReady, PollError, Success
from e2ekit.polling import poll, poll_until
from e2ekit.settings import SessionSettings

__version__ = "0.1.0"

__all__ = [
    "BrowserManager",
    "By",
    "E2EKitError",
    "Locator",
    "NotYetReady",
    "PollError",
    "PollTimeoutError",
    "SessionSettings",
    "Success",
    "UnsupportedConfigurationError",
    "helpers",
    "poll",
    "poll_until",
    "__version__",
]
