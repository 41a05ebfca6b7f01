"""Pydantic-based session settings loaded from YAML with env-var overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

_ENV_PREFIX = "E2EKIT_"
_DEFAULT_CONFIG_FILE = "e2ekit.yaml"

SAUCE_PRERUN_SCRIPT_URL = (
    "https://raw.githubusercontent.com/Automattic/wp-e2e-tests/master/fix-saucelabs-etc-hosts.sh"
)
SAUCE_PRERUN_WIN_SCRIPT_URL = (
    "https://raw.githubusercontent.com/Automattic/wp-e2e-tests/master/fix-saucelabs-etc-hosts.bat"
)


class RemoteGridSettings(BaseModel):
    """Credentials and capabilities for a remote grid / device cloud."""

    model_config = {"frozen": True}

    enabled: bool = False
    endpoint: str = ""  # WebSocket endpoint accepting a ``caps`` query parameter
    username: str = ""
    access_key: str = ""
    platform: str = "Linux"
    browser_version: str = "latest"
    capabilities: dict[str, Any] = Field(default_factory=dict)
    max_duration: int = 2700  # seconds
    prerun_script: str = SAUCE_PRERUN_SCRIPT_URL
    prerun_script_windows: str = SAUCE_PRERUN_WIN_SCRIPT_URL


class SessionSettings(BaseSettings):
    """Browser session configuration with YAML + env var support.

    Env vars are prefixed with ``E2EKIT_`` and use ``__`` for nesting.
    Example: ``E2EKIT_HEADLESS=1``, ``E2EKIT_REMOTE__USERNAME=ci-bot``.
    Values are resolved once; a session never sees later changes.
    """

    model_config = {
        "env_prefix": _ENV_PREFIX,
        "env_nested_delimiter": "__",
        "frozen": True,
    }

    # --- browser ---
    browser: str = "chrome"
    headless: bool = False
    slow_mo: int = 0  # ms between Playwright actions
    screen_size: str = ""  # empty -> desktop
    resize_browser_window: bool = True
    proxy: str = "direct"
    use_custom_ua: bool = True
    custom_user_agent: str = ""
    browser_log_level: str = "error"

    # --- timeouts ---
    implicit_wait_ms: int = 2_000
    page_load_timeout_ms: int = 60_000

    # --- target ---
    base_url: str = "https://automattic.com"

    # --- artifacts ---
    screenshots_dir: str = "screenshots"

    # --- remote grid ---
    remote: RemoteGridSettings = Field(default_factory=RemoteGridSettings)

    @field_validator("browser", "proxy", "screen_size", "browser_log_level")
    @classmethod
    def _normalise(cls, v: str) -> str:
        return v.strip().lower()

    # ---- factory ----

    @classmethod
    def from_yaml(cls, path: str | Path | None = None, **overrides: Any) -> "SessionSettings":
        """Load settings from a YAML file, then overlay env vars, then *overrides*.

        Env vars (``E2EKIT_*``) take priority over YAML values; explicit
        keyword *overrides* take priority over both.
        """
        if path is None:
            path = Path.cwd() / _DEFAULT_CONFIG_FILE
        path = Path(path)
        raw: dict[str, Any] = {}
        if path.exists():
            with open(path) as fh:
                raw = yaml.safe_load(fh) or {}

        # Let env vars override YAML: remove YAML keys that have an env override
        for key in list(raw.keys()):
            env_key = f"{_ENV_PREFIX}{key.upper()}"
            if env_key in os.environ:
                del raw[key]
            elif isinstance(raw[key], dict):
                raw[key] = {
                    sub: val
                    for sub, val in raw[key].items()
                    if f"{env_key}__{str(sub).upper()}" not in os.environ
                }

        raw.update(overrides)
        return cls(**raw)
