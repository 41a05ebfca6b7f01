"""Shared test fixtures."""

from __future__ import annotations

import pytest

from fakes import FakeSession


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer env vars from leaking into settings under test."""
    for var in ("E2EKIT_HEADLESS", "E2EKIT_SCREEN_SIZE", "E2EKIT_BROWSER", "CIRCLE_BUILD_NUM"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def session():
    return FakeSession()


@pytest.fixture()
def tmp_settings_yaml(tmp_path):
    """Write a minimal e2ekit.yaml and return its path."""
    content = """\
browser: "Firefox"
headless: true
screen_size: "Tablet"
proxy: "system"
base_url: "https://example.test/"
screenshots_dir: "{shots}"
remote:
  enabled: false
  username: "ci-bot"
  platform: "Windows 10"
""".format(shots=str(tmp_path / "shots"))
    p = tmp_path / "e2ekit.yaml"
    p.write_text(content)
    return p
