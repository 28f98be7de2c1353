"""Application summary documents.

This module selects the document variant for an application's state,
assembles the view model, and renders it to PDF.

Example:
    ```python
    from appdoc.applications import InMemoryApplicationRepository
    from appdoc.documents import (
        GeneratedDocument,
        bundled_template_root,
        create_document_generator,
    )

    generator = create_document_generator(InMemoryApplicationRepository([application]))
    result = generator.generate(application.id, bundled_template_root())

    if isinstance(result, GeneratedDocument):
        print(f"{result.template.value}: {result.size_bytes} bytes")
    else:
        print(result.reason)
    ```
"""

from appdoc.documents.assembler import (
    DocumentAssembler,
    build_review_message,
    calculate_portfolio_total,
    flatten_funds,
)
from appdoc.documents.generator import ApplicationDocumentGenerator, create_document_generator
from appdoc.documents.rendering import (
    JinjaViewGenerator,
    PdfDocument,
    PdfGenerator,
    RenderedPdf,
    ViewGenerator,
    WeasyPrintPdfGenerator,
)
from appdoc.documents.template_paths import (
    DefaultTemplatePathProvider,
    TemplatePathProvider,
    bundled_template_root,
)
from appdoc.documents.types import (
    PDF_HEADER,
    ActivatedApplicationViewModel,
    ApplicationNotFound,
    ApplicationViewModel,
    AssemblyResult,
    DocumentTemplate,
    GeneratedDocument,
    HeaderOptions,
    HeaderRepeat,
    InReviewApplicationViewModel,
    NoDocument,
    PageNumbers,
    PdfOptions,
    PendingApplicationViewModel,
    RenderRequest,
    UnsupportedState,
    ViewModel,
)

__all__ = [
    # Main classes
    "ApplicationDocumentGenerator",
    "DocumentAssembler",
    # Collaborators
    "DefaultTemplatePathProvider",
    "JinjaViewGenerator",
    "PdfDocument",
    "PdfGenerator",
    "RenderedPdf",
    "TemplatePathProvider",
    "ViewGenerator",
    "WeasyPrintPdfGenerator",
    # View models
    "ActivatedApplicationViewModel",
    "ApplicationViewModel",
    "InReviewApplicationViewModel",
    "PendingApplicationViewModel",
    "ViewModel",
    # Options
    "HeaderOptions",
    "HeaderRepeat",
    "PageNumbers",
    "PdfOptions",
    "PDF_HEADER",
    # Outcomes
    "ApplicationNotFound",
    "AssemblyResult",
    "GeneratedDocument",
    "NoDocument",
    "RenderRequest",
    "UnsupportedState",
    # Enums
    "DocumentTemplate",
    # Functions
    "build_review_message",
    "bundled_template_root",
    "calculate_portfolio_total",
    "create_document_generator",
    "flatten_funds",
]
