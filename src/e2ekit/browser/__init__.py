"""Browser session lifecycle and the Playwright-backed session handle."""
