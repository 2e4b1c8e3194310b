"""Markdown to sanitized HTML."""

from markdown_it import MarkdownIt

from docpress.shared.logging import get_logger

from .sanitizer import sanitize_html

logger = get_logger(__name__)


def _build_markdown_parser() -> MarkdownIt:
    # CommonMark plus the GFM table/strikethrough extensions; raw HTML is
    # passed through here and handled by the sanitizer.
    return MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])


class MarkdownPreprocessor:
    """Convert untrusted Markdown into HTML that is safe to render."""

    def __init__(self) -> None:
        self._parser = _build_markdown_parser()

    def to_html(self, markdown: str) -> str:
        """
        Render Markdown to HTML and sanitize the result.

        Sanitization always runs; Markdown input is treated as untrusted.
        """
        rendered = self._parser.render(markdown)
        sanitized = sanitize_html(rendered)
        logger.debug(f"Markdown rendered: {len(markdown)} chars in, {len(sanitized)} chars out")
        return sanitized
