"""Domain models for e2ekit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from e2ekit.exceptions import UnsupportedConfigurationError

_SELECTOR_PREFIXES: dict[str, str] = {
    "css": "css={value}",
    "xpath": "xpath={value}",
    "id": "id={value}",
    "name": 'css=[name="{value}"]',
    "text": "text={value}",
}


@dataclass(frozen=True)
class Locator:
    """Immutable strategy + value pair identifying an element on a page."""

    strategy: str
    value: str

    def __post_init__(self) -> None:
        if self.strategy not in _SELECTOR_PREFIXES:
            raise ValueError(
                f"Unknown locator strategy {self.strategy!r}; "
                f"expected one of {', '.join(sorted(_SELECTOR_PREFIXES))}."
            )

    def to_selector(self) -> str:
        """Render the Playwright selector string for this locator."""
        return _SELECTOR_PREFIXES[self.strategy].format(value=self.value)

    def __str__(self) -> str:
        return f"{self.strategy} of '{self.value}'"


class By:
    """Shorthand constructors: ``By.css("#content")``."""

    @staticmethod
    def css(value: str) -> Locator:
        return Locator("css", value)

    @staticmethod
    def xpath(value: str) -> Locator:
        return Locator("xpath", value)

    @staticmethod
    def id(value: str) -> Locator:
        return Locator("id", value)

    @staticmethod
    def name(value: str) -> Locator:
        return Locator("name", value)

    @staticmethod
    def text(value: str) -> Locator:
        return Locator("text", value)


# --- poll outcomes ---


@dataclass(frozen=True)
class Success:
    """The condition holds; ``value`` is handed back to the caller."""

    value: Any = True


@dataclass(frozen=True)
class NotYetReady:
    """The condition does not hold yet."""

    reason: str = ""


@dataclass(frozen=True)
class PollError:
    """An attempt raised; only non-recoverable errors stop the poller."""

    cause: BaseException
    recoverable: bool = True


PollOutcome = Union[Success, NotYetReady, PollError]


# --- viewport presets ---


@dataclass(frozen=True)
class ScreenSize:
    width: int
    height: int

    def as_viewport(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}


SCREEN_SIZES: dict[str, ScreenSize] = {
    "mobile": ScreenSize(400, 1000),
    "tablet": ScreenSize(1024, 1000),
    "desktop": ScreenSize(1440, 1000),
    "laptop": ScreenSize(1400, 790),
}

DEFAULT_SCREEN_SIZE = "desktop"


def resolve_screen_size(size_class: str) -> ScreenSize:
    """Return the viewport for *size_class* (case-insensitive)."""
    if isinstance(size_class, str):
        size = SCREEN_SIZES.get(size_class.strip().lower())
        if size is not None:
            return size
    raise UnsupportedConfigurationError(
        f"Unsupported screen size specified ({size_class}). "
        f"Supported values are {', '.join(SCREEN_SIZES)}."
    )


@dataclass(frozen=True)
class TestResult:
    """Outcome of a finished test, used to name its artifacts."""

    __test__ = False  # not a pytest test class

    title: str
    state: str = "passed"


@dataclass
class StepResult:
    """Outcome of one CLI check step."""

    name: str
    passed: bool
    detail: str = ""
    duration_ms: int = 0
