"""Render module routes."""

from fastapi import APIRouter, Depends, Response

from docpress.shared.logging import get_logger

from .schemas import ConversionRequest, RenderedDocument
from .service import ConversionService

logger = get_logger(__name__)
router = APIRouter(prefix="/v1/convert", tags=["convert"])


def get_service() -> ConversionService:
    """Dependency injection for service."""
    return ConversionService()


def _pdf_response(document: RenderedDocument) -> Response:
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": document.content_disposition,
            "Content-Length": str(len(document.content)),
        },
    )


@router.post("/html/pdf")
async def html_to_pdf(
    request: ConversionRequest,
    service: ConversionService = Depends(get_service),
) -> Response:
    """
    Render HTML to PDF.

    ``source`` is either a URL (navigated to) or inline HTML (loaded directly).
    Returns the PDF as binary content with a Content-Disposition header.
    """
    document = await service.convert(request)
    return _pdf_response(document)


@router.post("/md/pdf")
async def markdown_to_pdf(
    request: ConversionRequest,
    service: ConversionService = Depends(get_service),
) -> Response:
    """Render Markdown to PDF. The Markdown is converted to sanitized HTML first."""
    document = await service.convert_markdown(request)
    return _pdf_response(document)
