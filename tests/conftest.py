"""Shared fixtures. Playwright is always faked; no browser is launched."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from docpress.app import build_app
from docpress.config import Settings, init_settings, reset_settings
from docpress.modules.render.browser import BrowserHandle, reset_browser_handle
from docpress.modules.render.router import get_service
from docpress.modules.render.service import ConversionService

PDF_BYTES = b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<<>>\nendobj\n%%EOF\n"


class CountingLauncher:
    """Stand-in for the Chromium launcher that records how often it ran."""

    def __init__(self, browser, delay: float = 0.01, error: Exception | None = None):
        self.browser = browser
        self.delay = delay
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.browser


@pytest.fixture(autouse=True)
def _isolate_singletons():
    reset_settings()
    reset_browser_handle()
    yield
    reset_settings()
    reset_browser_handle()


@pytest.fixture
def settings() -> Settings:
    return init_settings(Settings(_env_file=None))


@pytest.fixture
def fake_page() -> AsyncMock:
    page = AsyncMock()
    page.pdf = AsyncMock(return_value=PDF_BYTES)
    return page


@pytest.fixture
def fake_browser(fake_page) -> AsyncMock:
    browser = AsyncMock()
    browser.new_page = AsyncMock(return_value=fake_page)
    return browser


@pytest.fixture
def launcher(fake_browser) -> CountingLauncher:
    return CountingLauncher(fake_browser)


@pytest.fixture
def handle(settings, launcher) -> BrowserHandle:
    handle = BrowserHandle(settings=settings, launcher=launcher)
    reset_browser_handle(handle)
    return handle


@pytest.fixture
def service(settings, handle) -> ConversionService:
    return ConversionService(handle=handle, settings=settings)


@pytest.fixture
def client(settings, handle) -> TestClient:
    """Test client whose conversion service uses the fake browser."""
    app = build_app(settings)
    app.dependency_overrides[get_service] = lambda: ConversionService(
        handle=handle, settings=settings
    )
    return TestClient(app)
