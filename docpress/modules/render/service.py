"""Conversion service - HTML/Markdown to PDF using Playwright."""

import asyncio

from playwright.async_api import Browser, Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from docpress.config import Settings, get_settings
from docpress.shared.errors import (
    BackendUnavailableError,
    RenderFailureError,
    RenderTimeoutError,
    ValidationError,
)
from docpress.shared.logging import get_logger

from .browser import BrowserHandle, get_browser_handle
from .markdown import MarkdownPreprocessor
from .options import PageOptionsResolver, ResolvedRenderOptions
from .sanitizer import sanitize_html
from .schemas import ConversionRequest, RenderedDocument

logger = get_logger(__name__)


VIEWPORT = {"width": 1920, "height": 1080}

# Navigation and inline loads wait for network idle, up to this long
CONTENT_TIMEOUT_MS = 10_000
SETTLE_STATE = "networkidle"

# Web font loading gets the same budget
FONTS_READY_SCRIPT = "document.fonts.ready.then(() => true)"
FONTS_TIMEOUT_S = CONTENT_TIMEOUT_MS / 1000


def is_url_source(source: str) -> bool:
    return source.startswith("http")


class ConversionService:
    """Render HTML sources (or Markdown, via preprocessing) to PDF."""

    def __init__(
        self,
        handle: BrowserHandle | None = None,
        resolver: PageOptionsResolver | None = None,
        preprocessor: MarkdownPreprocessor | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.handle = handle or get_browser_handle()
        self.resolver = resolver or PageOptionsResolver(strict=self.settings.strict_page_format)
        self.preprocessor = preprocessor or MarkdownPreprocessor()

    async def convert(self, request: ConversionRequest) -> RenderedDocument:
        """
        Render an HTML request to PDF.

        Args:
            request: Validated conversion request; ``source`` is a URL or inline HTML

        Returns:
            RenderedDocument with PDF bytes and the response filename/disposition

        Raises:
            ValidationError: source missing
            BackendUnavailableError: Chromium could not be launched
            RenderTimeoutError: content did not settle within CONTENT_TIMEOUT_MS
            RenderFailureError: Playwright failed while rendering
        """
        self._require_source(request)

        if self.settings.sanitize_html_source and not is_url_source(request.source):
            request = request.model_copy(update={"source": sanitize_html(request.source)})

        return await self._convert(request)

    async def convert_markdown(self, request: ConversionRequest) -> RenderedDocument:
        """Render a Markdown request; the sanitized HTML goes down the HTML path."""
        self._require_source(request)

        html = self.preprocessor.to_html(request.source)
        # Generated HTML is always loaded as content, never navigated to
        return await self._convert(request.model_copy(update={"source": html}), inline=True)

    @staticmethod
    def _require_source(request: ConversionRequest) -> None:
        if not request.source:
            raise ValidationError.for_field("source", "source must not be empty")

    async def _convert(self, request: ConversionRequest, inline: bool = False) -> RenderedDocument:
        options = self.resolver.resolve(request)
        pdf_bytes = await self.render(request.source, options, inline=inline)
        return RenderedDocument.build(
            pdf_bytes,
            filename=request.filename,
            response_type=request.response_type,
        )

    async def render(
        self,
        source: str,
        options: ResolvedRenderOptions,
        inline: bool = False,
    ) -> bytes:
        """
        Load ``source`` into a fresh page and print it to PDF bytes.

        A source starting with ``http`` is navigated to unless ``inline`` is set.
        """
        browser = await self._acquire_browser()
        page = await self._open_page(browser)

        try:
            try:
                await self._load_source(page, source, inline)
            except PlaywrightTimeoutError as e:
                logger.error(f"Content did not settle within {CONTENT_TIMEOUT_MS}ms")
                raise RenderTimeoutError(
                    f"Content did not reach network idle within {CONTENT_TIMEOUT_MS}ms",
                    details={"timeout_ms": CONTENT_TIMEOUT_MS},
                ) from e

            await self._wait_for_fonts(page)
            pdf_bytes = await page.pdf(**options.to_pdf_kwargs())

        except PlaywrightError as e:
            logger.error(f"PDF render failed: {e}")
            raise RenderFailureError(f"Rendering failed: {e}") from e

        finally:
            await self._close_page(page)

        logger.info(f"Generated PDF: {len(pdf_bytes)} bytes")
        return pdf_bytes

    async def _acquire_browser(self) -> Browser:
        try:
            return await self.handle.acquire()
        except Exception as e:
            logger.exception("Rendering backend failed to launch")
            raise BackendUnavailableError(f"Rendering backend unavailable: {e}") from e

    async def _open_page(self, browser: Browser) -> Page:
        try:
            page = await browser.new_page()
        except PlaywrightError as e:
            raise RenderFailureError(f"Could not open page: {e}") from e

        try:
            await page.set_viewport_size(VIEWPORT)
        except PlaywrightError as e:
            await self._close_page(page)
            raise RenderFailureError(f"Could not size page: {e}") from e
        return page

    async def _load_source(self, page: Page, source: str, inline: bool = False) -> None:
        if not inline and is_url_source(source):
            logger.info(f"Rendering URL {source}")
            await page.goto(source, wait_until=SETTLE_STATE, timeout=CONTENT_TIMEOUT_MS)
        else:
            logger.info(f"Rendering inline markup ({len(source)} chars)")
            await page.set_content(source, wait_until=SETTLE_STATE, timeout=CONTENT_TIMEOUT_MS)

    async def _wait_for_fonts(self, page: Page) -> None:
        try:
            await asyncio.wait_for(page.evaluate(FONTS_READY_SCRIPT), timeout=FONTS_TIMEOUT_S)
        except asyncio.TimeoutError as e:
            logger.error(f"Web fonts did not load within {FONTS_TIMEOUT_S}s")
            raise RenderTimeoutError(
                f"Web fonts did not load within {FONTS_TIMEOUT_S}s",
                details={"timeout_ms": CONTENT_TIMEOUT_MS},
            ) from e

    async def _close_page(self, page: Page) -> None:
        try:
            await page.close()
        except PlaywrightError as e:
            # Close failures are logged only
            logger.warning(f"Failed to close page: {e}")
