"""Session check runner — Open → Navigate → Wait → Screenshot → Report."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Awaitable

from e2ekit import helpers
from e2ekit.artifacts import take_screenshot
from e2ekit.browser.manager import BrowserManager
from e2ekit.exceptions import E2EKitError
from e2ekit.models import By, StepResult, TestResult
from e2ekit.polling import DEFAULT_WAIT_MS
from e2ekit.reporting.console import print_banner, print_check_report, print_step
from e2ekit.settings import SessionSettings

logger = logging.getLogger(__name__)


class SessionCheck:
    """Drives one browser session through a list of visibility checks."""

    def __init__(
        self,
        settings: SessionSettings,
        url: str,
        wait_for: tuple[str, ...] = (),
        absent: tuple[str, ...] = (),
        timeout_ms: int = DEFAULT_WAIT_MS,
        screenshot: bool = True,
        manager: BrowserManager | None = None,
    ) -> None:
        self._url = url
        self._wait_for = wait_for
        self._absent = absent
        self._timeout_ms = timeout_ms
        self._screenshot = screenshot
        self._manager = manager if manager is not None else BrowserManager(settings)
        self.steps: list[StepResult] = []
        self.screenshot_path: Path | None = None

    async def run(self) -> bool:
        """Execute every step; return ``True`` when all of them passed."""
        print_banner()
        await self._manager.open()
        try:
            session = self._manager.session
            if await self._step(f"navigate {self._url}", self._manager.navigate(self._url)):
                for css in self._wait_for:
                    await self._step(
                        f"displayed {css}",
                        helpers.wait_till_present_and_displayed(
                            session, By.css(css), self._timeout_ms
                        ),
                    )
                for css in self._absent:
                    await self._step(
                        f"absent {css}",
                        helpers.wait_till_not_present(session, By.css(css), self._timeout_ms),
                    )

            passed = all(step.passed for step in self.steps)
            if self._screenshot:
                result = TestResult(title=self._url, state="passed" if passed else "failed")
                self.screenshot_path = await take_screenshot(self._manager, result)

            print_check_report(
                self.steps, self._url, self._manager.session_id, self.screenshot_path
            )
        finally:
            await self._manager.close()
        return passed

    async def _step(self, name: str, action: Awaitable[object]) -> bool:
        started = time.monotonic()
        try:
            await action
        except E2EKitError as exc:
            step = StepResult(name, passed=False, detail=str(exc))
            logger.warning("Step failed: %s — %s", name, exc)
        else:
            step = StepResult(name, passed=True)
        step.duration_ms = int((time.monotonic() - started) * 1000)
        self.steps.append(step)
        print_step(step, len(self.steps))
        return step.passed
