"""DocPress - HTML and Markdown to PDF conversion service."""

__version__ = "0.1.0"
