"""HTML rendering and PDF conversion.

The assembler hands a RenderRequest to two collaborators:

- a ViewGenerator that turns template reference + view model into HTML
- a PdfGenerator that turns HTML + PdfOptions into a PDF document

Jinja2 and WeasyPrint implementations are provided. Both are
presentation-only: view models are passed through verbatim and rounding
of monetary values happens here, in the ``money`` template filter.
"""

import re
import time
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import urlparse
from urllib.request import url2pathname

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from appdoc.core.logging import get_logger, log_collaborator_call
from appdoc.documents.types import HeaderOptions, HeaderRepeat, PageNumbers, PdfOptions, ViewModel
from appdoc.utils.exceptions import RenderingError

logger = get_logger(__name__)

CENT = Decimal("0.01")
BODY_TAG = re.compile(r"<body[^>]*>", re.IGNORECASE)

# =============================================================================
# Protocols
# =============================================================================


@runtime_checkable
class ViewGenerator(Protocol):
    """Interface for rendering a template with a view model."""

    def generate_from_path(self, template_reference: str, view_model: ViewModel) -> str:
        """Render the template at template_reference to HTML."""
        ...


@runtime_checkable
class PdfDocument(Protocol):
    """A converted PDF document."""

    def to_bytes(self) -> bytes: ...


@runtime_checkable
class PdfGenerator(Protocol):
    """Interface for converting HTML into a PDF document."""

    def generate_from_html(self, html: str, options: PdfOptions) -> PdfDocument:
        """Convert HTML to PDF using the given layout options."""
        ...


# =============================================================================
# Jinja2 view generator
# =============================================================================


def format_money(value: Decimal | int | float | None) -> str:
    """Round to cents and group thousands, e.g. 12345.675 -> "12,345.68"."""
    if value is None:
        return ""
    amount = Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{amount:,.2f}"


def template_path_from_reference(template_reference: str) -> Path:
    """Convert a template reference (path or file:// URI) to a filesystem path."""
    parsed = urlparse(template_reference)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    return Path(template_reference)


class JinjaViewGenerator:
    """Renders Jinja2 templates from the filesystem.

    Templates receive the view model as ``model``. Undefined variables are
    errors rather than empty strings.
    """

    def __init__(self, autoescape: bool = True) -> None:
        self.autoescape = autoescape

    def generate_from_path(self, template_reference: str, view_model: ViewModel) -> str:
        """Render the template at template_reference with the view model.

        Raises:
            RenderingError: If the template cannot be loaded or rendered.
        """
        path = template_path_from_reference(template_reference)
        start = time.perf_counter()

        try:
            env = self._environment(path.parent)
            html = env.get_template(path.name).render(model=view_model)
        except TemplateError as e:
            log_collaborator_call(
                logger,
                collaborator="jinja2",
                operation="render",
                duration_ms=(time.perf_counter() - start) * 1000,
                success=False,
                template_reference=template_reference,
            )
            raise RenderingError("html", f"{type(e).__name__}: {e}") from e

        log_collaborator_call(
            logger,
            collaborator="jinja2",
            operation="render",
            duration_ms=(time.perf_counter() - start) * 1000,
            success=True,
            template_reference=template_reference,
        )
        return html

    def _environment(self, root: Path) -> Environment:
        env = Environment(
            loader=FileSystemLoader(root),
            undefined=StrictUndefined,
            autoescape=self.autoescape,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["money"] = format_money
        return env


# =============================================================================
# WeasyPrint PDF generator
# =============================================================================


@dataclass(frozen=True)
class RenderedPdf:
    """PDF bytes produced by a PdfGenerator."""

    content: bytes

    def to_bytes(self) -> bytes:
        return self.content


def page_stylesheet(options: PdfOptions) -> str:
    """CSS @page rules implementing page numbering and header repetition."""
    rules: list[str] = []

    if options.page_numbers == PageNumbers.NUMERIC:
        rules.append("@bottom-center { content: counter(page); }")

    if options.header_options.header_repeat == HeaderRepeat.ALL_PAGES:
        rules.append("@top-center { content: element(appdocHeader); }")

    css = "@page { " + " ".join(rules) + " }" if rules else ""
    if options.header_options.header_repeat == HeaderRepeat.ALL_PAGES:
        css += "\n.appdoc-running-header { position: running(appdocHeader); }"
    return css


def apply_header(html: str, header_options: HeaderOptions) -> str:
    """Insert the header fragment at the start of the document body.

    A first-page-only header is placed in normal flow, so it appears once.
    A repeating header is placed in a running element picked up by
    ``page_stylesheet``.
    """
    if not header_options.header_html:
        return html

    if header_options.header_repeat == HeaderRepeat.ALL_PAGES:
        fragment = f'<div class="appdoc-running-header">{header_options.header_html}</div>'
    else:
        fragment = header_options.header_html

    match = BODY_TAG.search(html)
    if match is None:
        return fragment + html
    return html[: match.end()] + fragment + html[match.end() :]


class WeasyPrintPdfGenerator:
    """Converts HTML to PDF with WeasyPrint.

    Requires the ``pdf`` extra. WeasyPrint is imported on first use so the
    rest of the package does not need its native dependencies.

    Attributes:
        base_url: Base URL for resolving relative links (stylesheets, images).
    """

    def __init__(self, base_url: str | None = None) -> None:
        self.base_url = base_url

    def generate_from_html(self, html: str, options: PdfOptions) -> RenderedPdf:
        """Convert HTML to PDF.

        Raises:
            RenderingError: If WeasyPrint fails to produce a document.
        """
        from weasyprint import CSS, HTML

        start = time.perf_counter()
        document_html = apply_header(html, options.header_options)
        stylesheets = [CSS(string=page_stylesheet(options))]

        try:
            content = HTML(string=document_html, base_url=self.base_url).write_pdf(
                stylesheets=stylesheets
            )
        except Exception as e:
            log_collaborator_call(
                logger,
                collaborator="weasyprint",
                operation="write_pdf",
                duration_ms=(time.perf_counter() - start) * 1000,
                success=False,
            )
            raise RenderingError("pdf", str(e)) from e

        log_collaborator_call(
            logger,
            collaborator="weasyprint",
            operation="write_pdf",
            duration_ms=(time.perf_counter() - start) * 1000,
            success=True,
            size_bytes=len(content),
        )
        return RenderedPdf(content=content)
