"""Render module - HTML and Markdown to PDF rendering using Playwright."""

from .browser import BrowserHandle, get_browser_handle
from .markdown import MarkdownPreprocessor
from .options import PageOptionsResolver, ResolvedRenderOptions
from .router import router
from .schemas import ConversionRequest, RenderedDocument
from .service import ConversionService

__all__ = [
    "router",
    "BrowserHandle",
    "get_browser_handle",
    "ConversionRequest",
    "ConversionService",
    "MarkdownPreprocessor",
    "PageOptionsResolver",
    "RenderedDocument",
    "ResolvedRenderOptions",
]
