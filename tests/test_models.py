"""Tests for locators and screen-size presets."""

from __future__ import annotations

import pytest

from e2ekit.exceptions import UnsupportedConfigurationError
from e2ekit.models import By, Locator, ScreenSize, resolve_screen_size


def test_locators_are_value_objects():
    assert By.css("#content") == Locator("css", "#content")
    assert hash(By.css("#content")) == hash(Locator("css", "#content"))
    assert str(By.css("#content")) == "css of '#content'"


@pytest.mark.parametrize(
    "locator, selector",
    [
        (By.css("#content"), "css=#content"),
        (By.xpath("//div"), "xpath=//div"),
        (By.id("submit"), "id=submit"),
        (By.name("username"), 'css=[name="username"]'),
        (By.text("Log in"), "text=Log in"),
    ],
)
def test_to_selector(locator, selector):
    assert locator.to_selector() == selector


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError):
        Locator("link text", "Home")


@pytest.mark.parametrize(
    "name, size",
    [
        ("mobile", ScreenSize(400, 1000)),
        ("tablet", ScreenSize(1024, 1000)),
        ("Desktop", ScreenSize(1440, 1000)),
        ("LAPTOP", ScreenSize(1400, 790)),
    ],
)
def test_resolve_screen_size(name, size):
    assert resolve_screen_size(name) == size


@pytest.mark.parametrize("name", ["watch", "", None])
def test_unsupported_screen_size(name):
    with pytest.raises(UnsupportedConfigurationError, match="Unsupported screen size"):
        resolve_screen_size(name)
