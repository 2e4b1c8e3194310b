"""Tests for request validation and page option resolution."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from docpress.config import Settings, init_settings
from docpress.modules.render.formats import NAMED_PAGE_SIZES, is_custom_size, is_valid_format
from docpress.modules.render.options import PageOptionsResolver, ResolvedRenderOptions
from docpress.modules.render.schemas import ConversionRequest


@pytest.fixture
def resolver(settings) -> PageOptionsResolver:
    return PageOptionsResolver()


class TestConversionRequest:
    """Schema-level validation."""

    def test_source_is_required(self, settings) -> None:
        with pytest.raises(PydanticValidationError):
            ConversionRequest.model_validate({})

    def test_source_must_not_be_empty(self, settings) -> None:
        with pytest.raises(PydanticValidationError):
            ConversionRequest.model_validate({"source": ""})

    @pytest.mark.parametrize("fmt", ["A4", "Letter", "LEDGER", "a0", "a6"])
    def test_named_format_is_lowercased(self, settings, fmt: str) -> None:
        req = ConversionRequest.model_validate({"source": "<p>x</p>", "format": fmt})
        assert req.format == fmt.lower()

    def test_unknown_format_rejected(self, settings) -> None:
        with pytest.raises(PydanticValidationError):
            ConversionRequest.model_validate({"source": "<p>x</p>", "format": "a7"})

    def test_scale_must_be_positive(self, settings) -> None:
        with pytest.raises(PydanticValidationError):
            ConversionRequest.model_validate({"source": "<p>x</p>", "scale": 0})

    def test_unknown_margin_side_rejected(self, settings) -> None:
        with pytest.raises(PydanticValidationError):
            ConversionRequest.model_validate({"source": "<p>x</p>", "margin": {"middle": 1}})

    def test_response_type_alias(self, settings) -> None:
        req = ConversionRequest.model_validate({"source": "x", "responseType": "inline"})
        assert req.response_type == "inline"

    def test_response_type_rejects_other_values(self, settings) -> None:
        with pytest.raises(PydanticValidationError):
            ConversionRequest.model_validate({"source": "x", "responseType": "download"})

    @pytest.mark.parametrize("value", ["true", "True", "1", 1, "false", 0])
    def test_landscape_boolean_like_values_stay_portrait(self, settings, value) -> None:
        req = ConversionRequest.model_validate({"source": "x", "landscape": value})
        assert req.landscape is False

    def test_landscape_true_selects_landscape(self, settings) -> None:
        req = ConversionRequest.model_validate({"source": "x", "landscape": True})
        assert req.landscape is True

    @pytest.mark.parametrize("value", ["yes", "sideways", 2, 1.5, [True]])
    def test_landscape_rejects_non_boolean_values(self, settings, value) -> None:
        with pytest.raises(PydanticValidationError):
            ConversionRequest.model_validate({"source": "x", "landscape": value})

    @pytest.mark.parametrize("filename", ["report\r\nX-Injected: 1", "a\nb", "\u043e\u0442\u0447\u0451\u0442"])
    def test_filename_must_fit_header(self, settings, filename: str) -> None:
        with pytest.raises(PydanticValidationError):
            ConversionRequest.model_validate({"source": "x", "filename": filename})

    def test_latin1_filename_accepted(self, settings) -> None:
        req = ConversionRequest.model_validate({"source": "x", "filename": "r\u00e9sum\u00e9"})
        assert req.filename == "r\u00e9sum\u00e9"


class TestFormatGrammar:
    """The custom WxH grammar, legacy and strict."""

    def test_named_sizes(self) -> None:
        assert NAMED_PAGE_SIZES == (
            "letter", "legal", "tabloid", "ledger",
            "a0", "a1", "a2", "a3", "a4", "a5", "a6",
        )

    @pytest.mark.parametrize("fmt", ["8ix11i", "10cx20m", "3nx4c", "1|x2|"])
    def test_legacy_matches_single_unit_character(self, fmt: str) -> None:
        assert is_custom_size(fmt)

    @pytest.mark.parametrize("fmt", ["8inx11in", "10cmx20cm", "8.5ix11i", "8x11", "8px11p"])
    def test_legacy_rejects_literal_units(self, fmt: str) -> None:
        assert not is_custom_size(fmt)

    @pytest.mark.parametrize("fmt", ["8inx11in", "10cmx20cm", "8inx20cm"])
    def test_strict_matches_literal_units(self, fmt: str) -> None:
        assert is_custom_size(fmt, strict=True)

    @pytest.mark.parametrize("fmt", ["8ix11i", "8|x11|", "8mmx11mm"])
    def test_strict_rejects_single_characters(self, fmt: str) -> None:
        assert not is_custom_size(fmt, strict=True)

    @pytest.mark.parametrize("fmt", ["8ix11i\n", "8ix11i\r\n", " 8ix11i", "8ix11i "])
    def test_surrounding_whitespace_rejected(self, fmt: str) -> None:
        assert not is_custom_size(fmt)
        assert not is_valid_format(fmt)

    def test_trailing_newline_rejected_in_request(self, settings) -> None:
        with pytest.raises(PydanticValidationError):
            ConversionRequest.model_validate({"source": "x", "format": "8ix11i\n"})

    def test_is_valid_format_is_case_insensitive(self) -> None:
        assert is_valid_format("TABLOID")
        assert is_valid_format("8IX11I")
        assert is_valid_format("8INX11IN", strict=True)

    def test_strict_mode_applies_to_request_validation(self) -> None:
        init_settings(Settings(_env_file=None, strict_page_format=True))
        req = ConversionRequest.model_validate({"source": "x", "format": "8inx11in"})
        assert req.format == "8inx11in"
        with pytest.raises(PydanticValidationError):
            ConversionRequest.model_validate({"source": "x", "format": "8ix11i"})


class TestPageOptionsResolver:
    """Resolution of request fields into render options."""

    def test_defaults(self, resolver: PageOptionsResolver) -> None:
        options = resolver.resolve(ConversionRequest(source="<p>x</p>"))

        assert options == ResolvedRenderOptions()
        assert options.margin == {"top": 0, "bottom": 0, "left": 0, "right": 0}
        assert options.format is None
        assert options.width is None and options.height is None
        assert options.landscape is False
        assert options.scale == 1
        assert options.display_header_footer is False
        assert options.header_template == ""
        assert options.footer_template == ""

    def test_only_top_margin_supplied(self, resolver: PageOptionsResolver) -> None:
        req = ConversionRequest.model_validate({"source": "x", "margin": {"top": "1in"}})
        options = resolver.resolve(req)
        assert options.margin == {"top": "1in", "bottom": 0, "left": 0, "right": 0}

    def test_numeric_margins_pass_through(self, resolver: PageOptionsResolver) -> None:
        req = ConversionRequest.model_validate(
            {"source": "x", "margin": {"top": 10, "bottom": 20.5, "left": "2cm", "right": 0}}
        )
        assert resolver.resolve(req).margin == {
            "top": 10, "bottom": 20.5, "left": "2cm", "right": 0,
        }

    def test_named_format(self, resolver: PageOptionsResolver) -> None:
        options = resolver.resolve(ConversionRequest(source="x", format="A4"))
        assert options.format == "a4"
        assert options.width is None and options.height is None

    def test_custom_format_splits_into_width_and_height(
        self, resolver: PageOptionsResolver
    ) -> None:
        options = resolver.resolve(ConversionRequest(source="x", format="8IX11I"))
        assert options.format is None
        assert options.width == "8i"
        assert options.height == "11i"

    def test_strict_resolver_splits_literal_units(self) -> None:
        req = ConversionRequest.model_construct(source="x", format="8inx11in")
        options = PageOptionsResolver(strict=True).resolve(req)
        assert (options.width, options.height) == ("8in", "11in")

    @pytest.mark.parametrize("value,expected", [(True, True), (False, False), (None, False)])
    def test_landscape(self, resolver: PageOptionsResolver, value, expected) -> None:
        options = resolver.resolve(ConversionRequest(source="x", landscape=value))
        assert options.landscape is expected

    def test_scale(self, resolver: PageOptionsResolver) -> None:
        assert resolver.resolve(ConversionRequest(source="x", scale=1.5)).scale == 1.5

    def test_header_only_enables_header_footer(self, resolver: PageOptionsResolver) -> None:
        options = resolver.resolve(ConversionRequest(source="x", header="<span>H</span>"))
        assert options.display_header_footer is True
        assert options.header_template == "<span>H</span>"
        assert options.footer_template == ""

    def test_empty_templates_do_not_enable_header_footer(
        self, resolver: PageOptionsResolver
    ) -> None:
        options = resolver.resolve(ConversionRequest(source="x", header="", footer=""))
        assert options.display_header_footer is False

    def test_resolve_does_not_mutate_request(self, resolver: PageOptionsResolver) -> None:
        req = ConversionRequest.model_validate(
            {"source": "x", "margin": {"top": 5}, "format": "a4", "footer": "f"}
        )
        before = req.model_dump()
        resolver.resolve(req)
        assert req.model_dump() == before


class TestPdfKwargs:
    """Mapping of resolved options onto Page.pdf keyword arguments."""

    def test_named_format_kwargs(self) -> None:
        kwargs = ResolvedRenderOptions(format="legal", landscape=True).to_pdf_kwargs()

        assert kwargs["format"] == "legal"
        assert "width" not in kwargs and "height" not in kwargs
        assert kwargs["print_background"] is True
        assert kwargs["landscape"] is True
        assert kwargs["scale"] == 1

    def test_custom_size_kwargs_omit_format(self) -> None:
        kwargs = ResolvedRenderOptions(width="8i", height="11i").to_pdf_kwargs()
        assert kwargs["width"] == "8i"
        assert kwargs["height"] == "11i"
        assert "format" not in kwargs

    def test_no_format_uses_backend_default(self) -> None:
        kwargs = ResolvedRenderOptions().to_pdf_kwargs()
        assert "format" not in kwargs
        assert kwargs["margin"] == {"top": 0, "bottom": 0, "left": 0, "right": 0}

    def test_header_footer_kwargs(self) -> None:
        kwargs = ResolvedRenderOptions(
            display_header_footer=True, header_template="h", footer_template="f"
        ).to_pdf_kwargs()
        assert kwargs["display_header_footer"] is True
        assert kwargs["header_template"] == "h"
        assert kwargs["footer_template"] == "f"
