"""PDF generation for application summary documents.

This module provides the ApplicationDocumentGenerator that:
1. Asks the DocumentAssembler for a render request
2. Renders the selected template to HTML
3. Converts the HTML to PDF
4. Returns the document bytes with checksum and metadata

"No document" outcomes from the assembler are returned unchanged.
Renderer and converter failures propagate unchanged.
"""

import hashlib
from uuid import UUID

from appdoc.applications.repository import ApplicationRepository
from appdoc.config.settings import DocumentConfig, Settings, get_settings, load_document_config
from appdoc import __version__
from appdoc.core.logging import LogContext, get_logger, log_exception
from appdoc.documents.assembler import DocumentAssembler
from appdoc.documents.rendering import (
    JinjaViewGenerator,
    PdfGenerator,
    ViewGenerator,
    WeasyPrintPdfGenerator,
)
from appdoc.documents.template_paths import TemplatePathProvider, bundled_template_root
from appdoc.documents.types import (
    ApplicationNotFound,
    GeneratedDocument,
    NoDocument,
    RenderRequest,
    UnsupportedState,
)
from appdoc.observability.metrics import (
    get_metrics_manager,
    observe_document_generation,
    record_document_outcome,
    record_document_size,
)
from appdoc.utils.exceptions import ConfigurationError

logger = get_logger(__name__)


class ApplicationDocumentGenerator:
    """Generates PDF summaries of investment product applications.

    Example:
        ```python
        generator = create_document_generator(repository)

        # base_uri defaults to TEMPLATE_BASE_URI, else the bundled templates
        result = generator.generate(application_id)
        if isinstance(result, GeneratedDocument):
            response_body = result.content
        else:
            # ApplicationNotFound or UnsupportedState
            show_message(result.reason)
        ```

    Attributes:
        assembler: Builds render requests.
        view_generator: Renders HTML.
        pdf_generator: Converts HTML to PDF.
        default_base_uri: Template root used when generate() is not given one.
    """

    def __init__(
        self,
        assembler: DocumentAssembler,
        view_generator: ViewGenerator,
        pdf_generator: PdfGenerator,
        default_base_uri: str | None = None,
    ) -> None:
        """Initialize the generator.

        Raises:
            ConfigurationError: If any collaborator is missing.
        """
        for name, value in (
            ("assembler", assembler),
            ("view_generator", view_generator),
            ("pdf_generator", pdf_generator),
        ):
            if value is None:
                raise ConfigurationError(f"ApplicationDocumentGenerator requires {name}")

        self.assembler = assembler
        self.view_generator = view_generator
        self.pdf_generator = pdf_generator
        self.default_base_uri = default_base_uri

    def generate(
        self, application_id: UUID, base_uri: str | None = None
    ) -> GeneratedDocument | NoDocument:
        """Generate the PDF summary for an application.

        Args:
            application_id: Application to summarize.
            base_uri: Template root the template path is appended to.
                Defaults to default_base_uri.

        Returns:
            GeneratedDocument, or ApplicationNotFound / UnsupportedState when
            there is legitimately no document.

        Raises:
            ConfigurationError: If no template root is given or configured.
        """
        base_uri = base_uri or self.default_base_uri
        if not base_uri:
            raise ConfigurationError(
                "No template base URI: pass base_uri or set TEMPLATE_BASE_URI"
            )

        with LogContext(application_id=str(application_id)):
            try:
                result = self.assembler.build(application_id, base_uri)

                if isinstance(result, ApplicationNotFound):
                    record_document_outcome(outcome="not_found", state="unknown")
                    return result
                if isinstance(result, UnsupportedState):
                    record_document_outcome(outcome="unsupported", state=result.state.value)
                    return result

                return self._render(result)
            except Exception as e:
                log_exception(logger, e, base_uri=base_uri)
                raise

    def _render(self, request: RenderRequest) -> GeneratedDocument:
        logger.info(
            "Generating document",
            template=request.template.value,
            template_reference=request.template_reference,
        )

        with observe_document_generation(template=request.template.value) as timing:
            html = self.view_generator.generate_from_path(
                request.template_reference, request.view_model
            )
            content = self.pdf_generator.generate_from_html(html, request.options).to_bytes()

        document = GeneratedDocument(
            application_id=request.application_id,
            state=request.state,
            template=request.template,
            template_reference=request.template_reference,
            content=content,
            checksum=hashlib.sha256(content).hexdigest(),
            size_bytes=len(content),
        )

        record_document_outcome(outcome="generated", state=request.state.value)
        record_document_size(template=request.template.value, size_bytes=len(content))

        logger.info(
            "Document generated",
            template=request.template.value,
            size_bytes=document.size_bytes,
            duration_ms=round(timing["duration_seconds"] * 1000, 2),
        )
        return document


def create_document_generator(
    repository: ApplicationRepository,
    template_paths: TemplatePathProvider | None = None,
    config: DocumentConfig | None = None,
    view_generator: ViewGenerator | None = None,
    pdf_generator: PdfGenerator | None = None,
    settings: Settings | None = None,
) -> ApplicationDocumentGenerator:
    """Factory function to create a document generator.

    Args:
        repository: Application lookup.
        template_paths: Optional template resolver (bundled templates by default).
        config: Optional document configuration (loaded from settings by default).
        view_generator: Optional HTML renderer (Jinja2 by default).
        pdf_generator: Optional PDF converter (WeasyPrint by default).
        settings: Settings for document configuration, template root and
            service metadata (global settings by default).

    Returns:
        Configured ApplicationDocumentGenerator instance.

    Raises:
        ConfigurationError: If the document configuration is missing or invalid.
    """
    settings = settings or get_settings()
    if config is None:
        config = load_document_config(settings)

    default_base_uri = settings.template_base_uri
    if default_base_uri is None and template_paths is None:
        default_base_uri = bundled_template_root()

    get_metrics_manager().initialize(
        service_version=__version__,
        environment=settings.environment,
    )

    assembler = DocumentAssembler(
        repository=repository,
        template_paths=template_paths,
        config=config,
    )
    return ApplicationDocumentGenerator(
        assembler=assembler,
        view_generator=view_generator or JinjaViewGenerator(),
        pdf_generator=pdf_generator or WeasyPrintPdfGenerator(),
        default_base_uri=default_base_uri,
    )
