"""Entry point: ``python -m e2ekit``."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from e2ekit.check import SessionCheck
from e2ekit.exceptions import E2EKitError
from e2ekit.polling import DEFAULT_WAIT_MS
from e2ekit.reporting.console import print_error, print_screen_sizes
from e2ekit.settings import SessionSettings


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    # Quiet noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log poll retries and browser console.")
def cli(verbose: bool) -> None:
    """Browser session helpers for end-to-end tests."""
    _configure_logging(verbose)


@cli.command()
@click.argument("url")
@click.option("--wait-for", "wait_for", multiple=True, help="CSS selector that must be displayed.")
@click.option("--absent", multiple=True, help="CSS selector that must be missing or hidden.")
@click.option("--browser", default=None, help="chrome or firefox.")
@click.option("--size", "screen_size", default=None, help="mobile, tablet, desktop or laptop.")
@click.option("--headless/--headed", default=None, help="Override the headless setting.")
@click.option("--timeout", "timeout_ms", default=DEFAULT_WAIT_MS, show_default=True, type=int)
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False))
@click.option("--screenshot/--no-screenshot", default=True, show_default=True)
def check(
    url: str,
    wait_for: tuple[str, ...],
    absent: tuple[str, ...],
    browser: str | None,
    screen_size: str | None,
    headless: bool | None,
    timeout_ms: int,
    config_path: str | None,
    screenshot: bool,
) -> None:
    """Open URL, wait for selectors and capture a screenshot."""
    overrides = {
        key: value
        for key, value in (
            ("browser", browser),
            ("screen_size", screen_size),
            ("headless", headless),
        )
        if value is not None
    }
    settings = SessionSettings.from_yaml(config_path, **overrides)
    runner = SessionCheck(
        settings,
        url,
        wait_for=wait_for,
        absent=absent,
        timeout_ms=timeout_ms,
        screenshot=screenshot,
    )
    try:
        passed = asyncio.run(runner.run())
    except KeyboardInterrupt:
        logging.info("Interrupted by user.")
        sys.exit(130)
    except E2EKitError as exc:
        print_error(str(exc))
        sys.exit(1)
    if not passed:
        sys.exit(1)


@cli.command()
def sizes() -> None:
    """List the viewport size classes."""
    print_screen_sizes()


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
