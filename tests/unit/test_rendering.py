"""Unit tests for HTML rendering and PDF conversion helpers."""

from decimal import Decimal
from pathlib import Path

import pytest

from appdoc.applications import LegalEntity, Review
from appdoc.documents import (
    ActivatedApplicationViewModel,
    DefaultTemplatePathProvider,
    HeaderOptions,
    HeaderRepeat,
    InReviewApplicationViewModel,
    JinjaViewGenerator,
    PageNumbers,
    PdfGenerator,
    PdfOptions,
    PendingApplicationViewModel,
    RenderedPdf,
    ViewGenerator,
    WeasyPrintPdfGenerator,
    bundled_template_root,
)
from appdoc.documents.rendering import (
    apply_header,
    format_money,
    page_stylesheet,
    template_path_from_reference,
)
from appdoc.utils.exceptions import RenderingError

COMMON = {
    "reference_number": "APP-42",
    "state": "Pending",
    "full_name": "Thandi Nkosi",
    "applied_on": "2024-03-14",
    "support_email": "support@example.com",
    "signature": "Client Services",
}


def bundled(template_name: str) -> str:
    return bundled_template_root() + DefaultTemplatePathProvider().get(template_name)


class TestFormatMoney:
    """Tests for the money filter."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("13.5"), "13.50"),
            (Decimal("257.0625"), "257.06"),
            (Decimal("0.005"), "0.01"),
            (Decimal("1234567.891"), "1,234,567.89"),
            (0, "0.00"),
            (None, ""),
        ],
    )
    def test_formats(self, value, expected):
        assert format_money(value) == expected


class TestTemplatePathFromReference:
    """Tests for template reference parsing."""

    def test_plain_path(self):
        assert template_path_from_reference("/srv/t/a.html") == Path("/srv/t/a.html")

    def test_file_uri(self):
        assert template_path_from_reference("file:///srv/t/a.html") == Path("/srv/t/a.html")


class TestJinjaViewGenerator:
    """Tests for JinjaViewGenerator against the bundled templates."""

    def test_satisfies_protocol(self):
        assert isinstance(JinjaViewGenerator(), ViewGenerator)

    def test_renders_pending(self):
        view_model = PendingApplicationViewModel(**COMMON)

        html = JinjaViewGenerator().generate_from_path(bundled("PendingApplication"), view_model)

        assert "APP-42" in html
        assert "Thandi Nkosi" in html
        assert "14 March 2024" in html
        assert "support@example.com" in html
        assert "Portfolio" not in html

    def test_renders_activated_with_rounded_total(self):
        view_model = ActivatedApplicationViewModel(
            **{**COMMON, "state": "Activated"},
            portfolio_funds=(),
            portfolio_total_amount=Decimal("257.0625"),
        )

        html = JinjaViewGenerator().generate_from_path(bundled("ActivatedApplication"), view_model)

        assert "257.06" in html
        assert "257.0625" not in html
        assert "No funds" in html

    def test_renders_in_review_with_legal_entity(self):
        view_model = InReviewApplicationViewModel(
            **{**COMMON, "state": "In Review"},
            legal_entity=LegalEntity(name="Nkosi Family Trust", registration_number="IT1234/2019"),
            in_review_information=Review(reason="Address update needed"),
            in_review_message="Your application has been placed in review pending checks.",
        )

        html = JinjaViewGenerator().generate_from_path(bundled("InReviewApplication"), view_model)

        assert "Nkosi Family Trust" in html
        assert "IT1234/2019" in html
        assert "placed in review pending checks." in html

    def test_in_review_without_legal_entity(self):
        view_model = InReviewApplicationViewModel(
            **{**COMMON, "state": "In Review"},
            in_review_information=Review(reason="Flagged"),
            in_review_message="Your application has been placed in review.",
        )

        html = JinjaViewGenerator().generate_from_path(bundled("InReviewApplication"), view_model)

        assert "Legal entity" not in html

    def test_escapes_values(self):
        view_model = PendingApplicationViewModel(**{**COMMON, "full_name": "<script>x</script>"})

        html = JinjaViewGenerator().generate_from_path(bundled("PendingApplication"), view_model)

        assert "<script>x</script>" not in html
        assert "&lt;script&gt;" in html

    def test_missing_template_raises_rendering_error(self, tmp_path):
        view_model = PendingApplicationViewModel(**COMMON)

        with pytest.raises(RenderingError) as exc_info:
            JinjaViewGenerator().generate_from_path(str(tmp_path / "missing.html"), view_model)

        assert exc_info.value.details["stage"] == "html"

    def test_undefined_variable_raises_rendering_error(self, tmp_path):
        (tmp_path / "broken.html").write_text("{{ model.portfolio_total_amount }}")
        view_model = PendingApplicationViewModel(**COMMON)

        with pytest.raises(RenderingError):
            JinjaViewGenerator().generate_from_path(str(tmp_path / "broken.html"), view_model)


class TestPageStylesheet:
    """Tests for page CSS generation."""

    def test_numeric_page_numbers(self):
        css = page_stylesheet(PdfOptions())

        assert "counter(page)" in css
        assert "running(" not in css

    def test_no_page_numbers(self):
        css = page_stylesheet(PdfOptions(page_numbers=PageNumbers.NONE))

        assert css == ""

    def test_repeating_header(self):
        options = PdfOptions(header_options=HeaderOptions(header_repeat=HeaderRepeat.ALL_PAGES))

        css = page_stylesheet(options)

        assert "element(appdocHeader)" in css
        assert "position: running(appdocHeader)" in css


class TestApplyHeader:
    """Tests for header insertion."""

    def test_first_page_header_after_body(self):
        html = apply_header('<html><body class="x"><p>a</p></body></html>', HeaderOptions(header_html="<h>H</h>"))

        assert html == '<html><body class="x"><h>H</h><p>a</p></body></html>'

    def test_header_prepended_without_body(self):
        assert apply_header("<p>a</p>", HeaderOptions(header_html="<h>H</h>")) == "<h>H</h><p>a</p>"

    def test_repeating_header_wrapped(self):
        options = HeaderOptions(header_repeat=HeaderRepeat.ALL_PAGES, header_html="<h>H</h>")

        html = apply_header("<body></body>", options)

        assert '<div class="appdoc-running-header"><h>H</h></div>' in html

    def test_empty_header_leaves_html(self):
        assert apply_header("<body></body>", HeaderOptions(header_html="")) == "<body></body>"


class TestRenderedPdf:
    """Tests for RenderedPdf."""

    def test_to_bytes(self):
        assert RenderedPdf(content=b"%PDF").to_bytes() == b"%PDF"


class TestWeasyPrintPdfGenerator:
    """Tests for WeasyPrintPdfGenerator (requires the pdf extra)."""

    def test_satisfies_protocol(self):
        assert isinstance(WeasyPrintPdfGenerator(), PdfGenerator)

    def test_produces_pdf(self):
        pytest.importorskip("weasyprint")

        document = WeasyPrintPdfGenerator().generate_from_html(
            "<html><body><p>Hello</p></body></html>", PdfOptions()
        )

        assert document.to_bytes().startswith(b"%PDF")
