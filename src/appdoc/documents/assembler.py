"""Document assembly for application summaries.

This module provides the DocumentAssembler that:
1. Resolves an application by id
2. Selects the template for the application's state
3. Builds the state-specific view model (portfolio totals, review messaging)
4. Returns a render request, or an explicit "no document" outcome

Not-found and unsupported-state outcomes are returned, never raised.
Configuration and collaborator failures propagate to the caller.
"""

from collections.abc import Callable, Iterable
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Decimal, localcontext
from typing import Any
from uuid import UUID

from appdoc.applications.repository import ApplicationRepository
from appdoc.applications.types import Application, ApplicationState, Fund, Review
from appdoc.config.settings import DocumentConfig, load_document_config
from appdoc.core.logging import get_logger
from appdoc.documents.template_paths import DefaultTemplatePathProvider, TemplatePathProvider
from appdoc.documents.types import (
    PDF_HEADER,
    ActivatedApplicationViewModel,
    ApplicationNotFound,
    AssemblyResult,
    DocumentTemplate,
    HeaderOptions,
    HeaderRepeat,
    InReviewApplicationViewModel,
    PageNumbers,
    PdfOptions,
    PendingApplicationViewModel,
    RenderRequest,
    UnsupportedState,
    ViewModel,
)
from appdoc.utils.exceptions import ApplicationDataError, ConfigurationError

logger = get_logger(__name__)

IN_REVIEW_PREFIX = "Your application has been placed in review"

# First match wins; matching is case-insensitive
REVIEW_REASON_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("address", " pending outstanding address verification for FICA purposes."),
    ("bank", " pending outstanding bank account verification."),
)
DEFAULT_REVIEW_SUFFIX = " because of suspicious account behaviour. Please contact support ASAP."

DOCUMENT_PDF_OPTIONS = PdfOptions(
    page_numbers=PageNumbers.NUMERIC,
    header_options=HeaderOptions(
        header_repeat=HeaderRepeat.FIRST_PAGE_ONLY,
        header_html=PDF_HEADER,
    ),
)


# =============================================================================
# Derived values
# =============================================================================


def flatten_funds(application: Application) -> tuple[Fund, ...]:
    """All funds across all products, in product order then fund order."""
    return tuple(fund for product in application.products for fund in product.funds)


def calculate_portfolio_total(funds: Iterable[Fund], tax_rate: Decimal) -> Decimal:
    """Sum of (amount - fees) * tax_rate over funds, without rounding.

    Only exact operations are used, so an unbounded context keeps every digit.
    """
    with localcontext(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN):
        return sum(((fund.amount - fund.fees) * tax_rate for fund in funds), Decimal("0"))


def build_review_message(review: Review) -> str:
    """Applicant-facing explanation for why an application is in review."""
    reason = (review.reason or "").casefold()
    for keyword, suffix in REVIEW_REASON_SUFFIXES:
        if keyword in reason:
            return IN_REVIEW_PREFIX + suffix
    return IN_REVIEW_PREFIX + DEFAULT_REVIEW_SUFFIX


# =============================================================================
# Document Assembler
# =============================================================================


class DocumentAssembler:
    """Selects the template and builds the view model for an application.

    Example:
        ```python
        assembler = DocumentAssembler(
            repository=InMemoryApplicationRepository([application]),
            template_paths=DefaultTemplatePathProvider(),
            config=DocumentConfig(
                support_email="support@example.com",
                signature="Client Services",
                tax_rate=Decimal("0.15"),
            ),
        )

        result = assembler.build(application.id, "/srv/templates/")
        if isinstance(result, RenderRequest):
            html = view_generator.generate_from_path(
                result.template_reference, result.view_model
            )
        ```

    Attributes:
        repository: Application lookup.
        template_paths: Logical template name resolver.
        config: Support contact, signature and tax rate.
    """

    def __init__(
        self,
        repository: ApplicationRepository,
        template_paths: TemplatePathProvider | None = None,
        config: DocumentConfig | None = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            repository: Application lookup.
            template_paths: Template resolver. Uses bundled templates if not provided.
            config: Document configuration. Loaded from settings if not provided.

        Raises:
            ConfigurationError: If the repository is missing or the
                configuration cannot be loaded.
        """
        if repository is None:
            raise ConfigurationError("DocumentAssembler requires an application repository")

        self.repository = repository
        self.template_paths = template_paths or DefaultTemplatePathProvider()
        self.config = config or load_document_config()

        self._builders: dict[
            ApplicationState,
            tuple[DocumentTemplate, Callable[[Application], ViewModel]],
        ] = {
            ApplicationState.PENDING: (
                DocumentTemplate.PENDING_APPLICATION,
                self._build_pending,
            ),
            ApplicationState.ACTIVATED: (
                DocumentTemplate.ACTIVATED_APPLICATION,
                self._build_activated,
            ),
            ApplicationState.IN_REVIEW: (
                DocumentTemplate.IN_REVIEW_APPLICATION,
                self._build_in_review,
            ),
        }

    def build(self, application_id: UUID, base_uri: str) -> AssemblyResult:
        """Build the render request for an application.

        Args:
            application_id: Application to summarize.
            base_uri: Root the template path is appended to. A single
                trailing "/" is stripped before joining.

        Returns:
            RenderRequest, ApplicationNotFound or UnsupportedState.

        Raises:
            ApplicationDataError: If the application data is inconsistent.
            TemplateNotFoundError: If the template path cannot be resolved.
        """
        application = self.repository.find_by_id(application_id)
        if application is None:
            logger.warning(
                f"No application found for id {application_id}",
                application_id=str(application_id),
            )
            return ApplicationNotFound(application_id=application_id)

        entry = self._builders.get(application.state)
        if entry is None:
            logger.warning(
                f"The application is in state {application.state.value} "
                "and no valid document can be generated for it.",
                application_id=str(application_id),
                state=application.state.value,
            )
            return UnsupportedState(application_id=application_id, state=application.state)

        template, build_view_model = entry
        view_model = build_view_model(application)
        template_reference = self._template_reference(base_uri, template)

        logger.debug(
            "Render request assembled",
            application_id=str(application_id),
            state=application.state.value,
            template=template.value,
        )

        return RenderRequest(
            application_id=application_id,
            state=application.state,
            template=template,
            template_reference=template_reference,
            view_model=view_model,
            options=DOCUMENT_PDF_OPTIONS,
        )

    def _template_reference(self, base_uri: str, template: DocumentTemplate) -> str:
        base = base_uri[:-1] if base_uri.endswith("/") else base_uri
        return base + self.template_paths.get(template.value)

    def _common_fields(self, application: Application) -> dict[str, Any]:
        return {
            "reference_number": application.reference_number,
            "state": application.state.description,
            "full_name": application.person.full_name,
            "applied_on": application.date,
            "support_email": self.config.support_email,
            "signature": self.config.signature,
        }

    def _build_pending(self, application: Application) -> PendingApplicationViewModel:
        return PendingApplicationViewModel(**self._common_fields(application))

    def _build_activated(self, application: Application) -> ActivatedApplicationViewModel:
        funds = flatten_funds(application)
        return ActivatedApplicationViewModel(
            **self._common_fields(application),
            portfolio_funds=funds,
            portfolio_total_amount=calculate_portfolio_total(funds, self.config.tax_rate),
        )

    def _build_in_review(self, application: Application) -> InReviewApplicationViewModel:
        review = application.current_review
        if review is None:
            raise ApplicationDataError(
                f"Application {application.id} is in review but has no current review",
                application_id=application.id,
            )

        funds = flatten_funds(application)
        return InReviewApplicationViewModel(
            **self._common_fields(application),
            portfolio_funds=funds,
            portfolio_total_amount=calculate_portfolio_total(funds, self.config.tax_rate),
            legal_entity=application.legal_entity if application.is_legal_entity else None,
            in_review_information=review,
            in_review_message=build_review_message(review),
        )
