"""
Page options resolution.

Maps a validated ConversionRequest onto the concrete keyword arguments
passed to Playwright's ``page.pdf()``.
"""

from dataclasses import dataclass, field
from typing import Any

from .formats import is_custom_size
from .schemas import ConversionRequest, MarginValue

MARGIN_SIDES = ("top", "bottom", "left", "right")


@dataclass(frozen=True)
class ResolvedRenderOptions:
    """Concrete rendering parameters for one request."""

    margin: dict[str, MarginValue] = field(
        default_factory=lambda: {side: 0 for side in MARGIN_SIDES}
    )
    format: str | None = None
    width: str | None = None
    height: str | None = None
    landscape: bool = False
    scale: float = 1
    display_header_footer: bool = False
    header_template: str = ""
    footer_template: str = ""

    def to_pdf_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``Page.pdf``."""
        kwargs: dict[str, Any] = {
            "margin": dict(self.margin),
            "print_background": True,
            "landscape": self.landscape,
            "scale": self.scale,
            "display_header_footer": self.display_header_footer,
            "header_template": self.header_template,
            "footer_template": self.footer_template,
        }
        # Playwright gives format priority over width/height
        if self.width is not None and self.height is not None:
            kwargs["width"] = self.width
            kwargs["height"] = self.height
        elif self.format:
            kwargs["format"] = self.format
        return kwargs


class PageOptionsResolver:
    """Translate a ConversionRequest into ResolvedRenderOptions."""

    def __init__(self, strict: bool = False):
        self.strict = strict

    def resolve(self, request: ConversionRequest) -> ResolvedRenderOptions:
        width = height = None
        page_format = None

        if request.format:
            fmt = request.format.lower()
            if is_custom_size(fmt, strict=self.strict):
                width, height = fmt.split("x")
            else:
                page_format = fmt

        header = request.header or ""
        footer = request.footer or ""

        return ResolvedRenderOptions(
            margin=self._resolve_margin(request),
            format=page_format,
            width=width,
            height=height,
            landscape=request.landscape is True,
            scale=request.scale or 1,
            display_header_footer=bool(header or footer),
            header_template=header,
            footer_template=footer,
        )

    @staticmethod
    def _resolve_margin(request: ConversionRequest) -> dict[str, MarginValue]:
        supplied = request.margin.model_dump(exclude_none=True) if request.margin else {}
        return {side: supplied.get(side, 0) for side in MARGIN_SIDES}
