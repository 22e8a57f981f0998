"""Playwright launcher for a Chromium profile with the wallet extension loaded."""

from __future__ import annotations

import logging
import tempfile
from contextlib import AsyncExitStack

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from wallet_e2e_tester.configuration.runtime_settings import BrowserSettings

from .session_handle import BrowserSession, BrowserSessionError

logger = logging.getLogger(__name__)


async def open_browser_session(settings: BrowserSettings) -> BrowserSession:
    """Launch a persistent Chromium context with the extension and return its first page."""
    extension_path = settings.extension_path
    if extension_path is None:
        raise BrowserSessionError(
            "Wallet extension path is not configured "
            "(set METAMASK_EXTENSION_PATH or browser.extension_path)."
        )
    if not extension_path.is_dir():
        raise BrowserSessionError(f"Wallet extension directory not found: {extension_path}")

    resources = AsyncExitStack()
    try:
        profile_dir = resources.enter_context(tempfile.TemporaryDirectory(prefix="wallet-e2e-"))
        playwright = await resources.enter_async_context(async_playwright())
        launch_options: dict[str, object] = {
            "headless": settings.headless,
            "slow_mo": settings.slow_mo_ms,
            "args": [
                f"--disable-extensions-except={extension_path}",
                f"--load-extension={extension_path}",
            ],
        }
        if settings.headless:
            launch_options["channel"] = "chromium"
        context = await playwright.chromium.launch_persistent_context(
            profile_dir, **launch_options
        )
        resources.push_async_callback(context.close)
        page = context.pages[0] if context.pages else await context.new_page()
    except PlaywrightError as exc:
        await resources.aclose()
        raise BrowserSessionError(f"Failed to launch browser: {exc}") from exc
    except BaseException:
        await resources.aclose()
        raise
    logger.info("Launched Chromium with wallet extension from %s", extension_path)
    return BrowserSession(page, resources=resources)
