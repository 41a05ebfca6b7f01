"""Tests for the session check runner and CLI (fake manager)."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from e2ekit.__main__ import cli
from e2ekit.check import SessionCheck
from e2ekit.exceptions import NavigationError
from e2ekit.models import By

from fakes import FakeElement, FakeSession


class FakeManager:
    def __init__(self, tmp_path, session: FakeSession) -> None:
        self.session = session
        self.session_id = "abc123"
        self.settings = SimpleNamespace(screenshots_dir=str(tmp_path / "shots"))
        self.screen_size_class = "desktop"
        self.open = AsyncMock()
        self.close = AsyncMock()
        self.navigate = AsyncMock()


def _runner(tmp_path, session, **kwargs) -> tuple[SessionCheck, FakeManager]:
    manager = FakeManager(tmp_path, session)
    check = SessionCheck(
        settings=None, url="https://example.test/", manager=manager, timeout_ms=50, **kwargs
    )
    return check, manager


def test_all_steps_pass(tmp_path):
    session = FakeSession()
    session.elements[By.css("#content")] = FakeElement()
    check, manager = _runner(tmp_path, session, wait_for=("#content",), absent=("#spinner",))

    assert asyncio.run(check.run()) is True
    assert [s.name for s in check.steps] == [
        "navigate https://example.test/",
        "displayed #content",
        "absent #spinner",
    ]
    assert check.screenshot_path is not None
    assert check.screenshot_path.name.startswith("passed-desktop-https-example-test-")
    manager.close.assert_awaited_once()


def test_failed_wait_marks_screenshot_failed(tmp_path):
    check, manager = _runner(tmp_path, FakeSession(), wait_for=("#missing",))

    assert asyncio.run(check.run()) is False
    assert check.steps[-1].passed is False
    assert "#missing" in check.steps[-1].detail
    assert check.screenshot_path.name.startswith("failed-")
    manager.close.assert_awaited_once()


def test_navigation_failure_skips_waits(tmp_path):
    check, manager = _runner(tmp_path, FakeSession(), wait_for=("#content",), screenshot=False)
    manager.navigate.side_effect = NavigationError("Failed to load")

    assert asyncio.run(check.run()) is False
    assert len(check.steps) == 1
    assert check.screenshot_path is None


def test_cli_sizes():
    result = CliRunner().invoke(cli, ["sizes"])
    assert result.exit_code == 0
    assert "laptop" in result.output


def test_cli_check_exit_codes(tmp_path):
    with patch("e2ekit.__main__.SessionCheck") as check_cls:
        check_cls.return_value.run = AsyncMock(return_value=False)
        result = CliRunner().invoke(
            cli,
            ["check", "https://example.test/", "--wait-for", "#content", "--size", "mobile",
             "--headless", "--config", str(tmp_path / "none.yaml")],
        )
    assert result.exit_code == 1
    settings = check_cls.call_args.args[0]
    assert settings.screen_size == "mobile"
    assert settings.headless is True
    assert check_cls.call_args.kwargs["wait_for"] == ("#content",)

    with patch("e2ekit.__main__.SessionCheck") as check_cls:
        check_cls.return_value.run = AsyncMock(return_value=True)
        result = CliRunner().invoke(
            cli, ["check", "https://example.test/", "--config", str(tmp_path / "none.yaml")]
        )
    assert result.exit_code == 0


def test_cli_check_reports_configuration_error(tmp_path):
    with patch("e2ekit.browser.manager.async_playwright") as starter:
        result = CliRunner().invoke(
            cli,
            ["check", "https://example.test/", "--size", "watch",
             "--config", str(tmp_path / "none.yaml")],
        )
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Unsupported screen size" in result.output
    assert "Traceback" not in result.output
    starter.assert_not_called()
