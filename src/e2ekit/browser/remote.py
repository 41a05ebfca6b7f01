"""Capability bags and endpoints for remote grids / device clouds."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

from e2ekit.exceptions import UnsupportedConfigurationError
from e2ekit.settings import RemoteGridSettings


def build_capabilities(
    remote: RemoteGridSettings,
    browser: str,
    size_class: str,
    build_number: str | None = None,
) -> dict[str, Any]:
    """Merge credentials, session name and pre-run hook into the capability bag."""
    if not remote.username or not remote.access_key:
        raise UnsupportedConfigurationError(
            "Remote grid requires both a username and an access key."
        )

    caps: dict[str, Any] = dict(remote.capabilities)
    caps.setdefault("browserName", browser)
    caps.setdefault("browserVersion", remote.browser_version)
    caps.setdefault("platform", remote.platform)
    caps["username"] = remote.username
    caps["accessKey"] = remote.access_key
    caps["name"] = f"{caps['browserName']} - [{size_class}]"
    if build_number:
        caps["name"] += f" - CI Build #{build_number}"
    caps["maxDuration"] = remote.max_duration

    if "windows" in str(caps["platform"]).lower():
        caps["prerun"] = {"executable": remote.prerun_script_windows}
    else:
        caps["prerun"] = {"executable": remote.prerun_script}

    return caps


def build_ws_endpoint(endpoint: str, caps: dict[str, Any]) -> str:
    """Append the JSON-encoded capability bag as the ``caps`` query parameter."""
    if not endpoint:
        raise UnsupportedConfigurationError("Remote grid is enabled but no endpoint is set.")
    separator = "&" if "?" in endpoint else "?"
    return f"{endpoint}{separator}caps={quote(json.dumps(caps, sort_keys=True))}"


def redact_endpoint(url: str) -> str:
    """Strip the query string so credentials never reach the logs."""
    return url.split("?", 1)[0]
