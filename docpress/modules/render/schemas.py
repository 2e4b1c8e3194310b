"""Render module schemas."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docpress.config import get_settings

from .formats import NAMED_PAGE_SIZES, is_valid_format

PDF_MEDIA_TYPE = "application/pdf"
DEFAULT_FILENAME = "Document"
DEFAULT_DISPOSITION = "attachment"

ResponseType = Literal["inline", "attachment"]
MarginValue = int | float | str


class Margin(BaseModel):
    """Page margins; numbers are pixels, strings may carry a CSS unit."""

    model_config = ConfigDict(extra="forbid")

    top: MarginValue | None = None
    bottom: MarginValue | None = None
    left: MarginValue | None = None
    right: MarginValue | None = None


class ConversionRequest(BaseModel):
    """Request to convert an HTML (or Markdown) source into a PDF."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(
        ...,
        min_length=1,
        description="URL to navigate to (starts with 'http') or inline markup",
    )
    margin: Margin | None = Field(default=None, description="Page margins")
    landscape: bool | None = Field(default=None, description="Landscape orientation")
    format: str | None = Field(
        default=None,
        description=f"Paper size ({', '.join(NAMED_PAGE_SIZES)}) or custom WxH, e.g. 8ix11i",
    )
    scale: float | None = Field(default=None, gt=0, description="Rendering scale")
    header: str | None = Field(default=None, description="Header HTML template")
    footer: str | None = Field(default=None, description="Footer HTML template")

    # Response shaping
    response_type: ResponseType | None = Field(
        default=None,
        alias="responseType",
        description="Content-Disposition type: inline or attachment",
    )
    filename: str | None = Field(default=None, description="Suggested download filename")

    @field_validator("format")
    @classmethod
    def check_format(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if not is_valid_format(value, strict=get_settings().strict_page_format):
            raise ValueError(
                "format must be a named paper size or a custom size like '<n><unit>x<n><unit>'"
            )
        return value.lower()

    @field_validator("landscape", mode="before")
    @classmethod
    def check_landscape(cls, value: object) -> object:
        # Boolean-like strings and numbers are accepted, but only a JSON true selects landscape
        if value is None or isinstance(value, bool):
            return value
        if isinstance(value, (str, int)) and str(value).lower() in ("true", "false", "1", "0"):
            return False
        raise ValueError("landscape must be a boolean")

    @field_validator("filename")
    @classmethod
    def check_filename(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if "\r" in value or "\n" in value:
            raise ValueError("filename must not contain line breaks")
        try:
            value.encode("latin-1")
        except UnicodeEncodeError:
            raise ValueError("filename must only contain Latin-1 characters") from None
        return value


@dataclass(frozen=True)
class RenderedDocument:
    """PDF bytes plus how the caller should present them."""

    content: bytes
    filename: str = f"{DEFAULT_FILENAME}.pdf"
    disposition: ResponseType = DEFAULT_DISPOSITION
    media_type: str = PDF_MEDIA_TYPE

    @classmethod
    def build(
        cls,
        content: bytes,
        filename: str | None = None,
        response_type: ResponseType | None = None,
    ) -> "RenderedDocument":
        name = filename or DEFAULT_FILENAME
        if not name.lower().endswith(".pdf"):
            name = f"{name}.pdf"
        return cls(
            content=content,
            filename=name,
            disposition=response_type or DEFAULT_DISPOSITION,
        )

    @property
    def content_disposition(self) -> str:
        return f"{self.disposition}; filename={self.filename}"
