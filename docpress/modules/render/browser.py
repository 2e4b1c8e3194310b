"""
Shared Chromium handle.

One browser process is launched lazily on first use and reused by every
request for the lifetime of the service. Concurrent first callers share a
single in-flight launch.
"""

import asyncio
from enum import Enum
from typing import Awaitable, Callable

from playwright.async_api import Browser, Playwright, async_playwright

from docpress.config import Settings, get_settings
from docpress.shared.logging import get_logger

logger = get_logger(__name__)

Launcher = Callable[[], Awaitable[Browser]]


class BackendState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LAUNCHING = "launching"
    READY = "ready"


class BrowserHandle:
    """Lazily launched, process-wide Chromium instance."""

    def __init__(
        self,
        settings: Settings | None = None,
        launcher: Launcher | None = None,
    ):
        self.settings = settings or get_settings()
        self._launcher = launcher or self._launch_chromium
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._launch_task: asyncio.Task[Browser] | None = None

    @property
    def state(self) -> BackendState:
        if self._browser is not None:
            return BackendState.READY
        if self._launch_task is not None:
            return BackendState.LAUNCHING
        return BackendState.UNINITIALIZED

    async def acquire(self) -> Browser:
        """
        Return the shared browser, launching it on first use.

        Callers arriving while a launch is in flight await that same launch.
        A failed launch is reported to all of its awaiters and forgotten,
        so the next call starts a new attempt.
        """
        if self._browser is not None:
            return self._browser

        if self._launch_task is None:
            logger.info("Launching rendering backend")
            self._launch_task = asyncio.ensure_future(self._launch())

        task = self._launch_task
        try:
            # Shielded so a cancelled waiter does not cancel the launch for the others
            return await asyncio.shield(task)
        except Exception:
            if self._launch_task is task and task.done():
                self._launch_task = None
            raise

    async def _launch(self) -> Browser:
        browser = await self._launcher()
        self._browser = browser
        self._launch_task = None
        logger.info("Rendering backend ready")
        return browser

    async def _launch_chromium(self) -> Browser:
        self._playwright = await async_playwright().start()
        try:
            return await self._playwright.chromium.launch(
                headless=self.settings.browser_headless,
                args=self.settings.browser_args,
            )
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

    async def aclose(self) -> None:
        """Shut the browser down. Only used when the service stops."""
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()
        logger.info("Rendering backend stopped")


_handle: BrowserHandle | None = None


def get_browser_handle() -> BrowserHandle:
    """Get the process-wide browser handle."""
    global _handle
    if _handle is None:
        _handle = BrowserHandle()
    return _handle


def reset_browser_handle(handle: BrowserHandle | None = None) -> None:
    """Replace (or forget) the process-wide handle."""
    global _handle
    _handle = handle
