"""Core types for application document generation.

This module defines the view models handed to templates, the PDF layout
options, and the outcome types returned by the assembler and generator.
"""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from appdoc.applications.types import ApplicationState, Fund, LegalEntity, Review

# =============================================================================
# Template Names
# =============================================================================


class DocumentTemplate(str, Enum):
    """Logical template names resolved by the template path provider."""

    PENDING_APPLICATION = "PendingApplication"
    ACTIVATED_APPLICATION = "ActivatedApplication"
    IN_REVIEW_APPLICATION = "InReviewApplication"


# =============================================================================
# PDF Options
# =============================================================================


class PageNumbers(str, Enum):
    """Page numbering style."""

    NONE = "none"
    NUMERIC = "numeric"


class HeaderRepeat(str, Enum):
    """Which pages carry the header fragment."""

    FIRST_PAGE_ONLY = "first_page_only"
    ALL_PAGES = "all_pages"


PDF_HEADER = (
    '<div class="document-header">'
    '<span class="document-header__title">Application Summary</span>'
    "</div>"
)


class HeaderOptions(BaseModel):
    """Header configuration for PDF conversion."""

    model_config = ConfigDict(frozen=True)

    header_repeat: HeaderRepeat = HeaderRepeat.FIRST_PAGE_ONLY
    header_html: str = PDF_HEADER


class PdfOptions(BaseModel):
    """Layout options handed to the PDF converter."""

    model_config = ConfigDict(frozen=True)

    page_numbers: PageNumbers = PageNumbers.NUMERIC
    header_options: HeaderOptions = Field(default_factory=HeaderOptions)


# =============================================================================
# View Models
# =============================================================================


class ApplicationViewModel(BaseModel):
    """Fields shared by every application document."""

    model_config = ConfigDict(frozen=True)

    reference_number: str
    state: str
    full_name: str
    applied_on: date
    support_email: str
    signature: str


class PendingApplicationViewModel(ApplicationViewModel):
    """View model for applications awaiting activation."""

    kind: Literal["pending"] = "pending"


class ActivatedApplicationViewModel(ApplicationViewModel):
    """View model for activated applications.

    Attributes:
        portfolio_funds: Funds across all products, in product then fund order.
        portfolio_total_amount: Post-fee, post-tax portfolio value (unrounded).
    """

    kind: Literal["activated"] = "activated"
    portfolio_funds: tuple[Fund, ...] = ()
    portfolio_total_amount: Decimal = Decimal("0")


class InReviewApplicationViewModel(ApplicationViewModel):
    """View model for applications held in review.

    Attributes:
        portfolio_funds: Funds across all products, in product then fund order.
        portfolio_total_amount: Post-fee, post-tax portfolio value (unrounded).
        legal_entity: Legal entity details, None unless the application is
            flagged as made for a legal entity.
        in_review_information: The review the application is held in.
        in_review_message: Applicant-facing explanation of the review.
    """

    kind: Literal["in_review"] = "in_review"
    portfolio_funds: tuple[Fund, ...] = ()
    portfolio_total_amount: Decimal = Decimal("0")
    legal_entity: LegalEntity | None = None
    in_review_information: Review
    in_review_message: str = Field(min_length=1)


ViewModel = PendingApplicationViewModel | ActivatedApplicationViewModel | InReviewApplicationViewModel


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True)
class RenderRequest:
    """Everything the renderer and PDF converter need for one document.

    Attributes:
        application_id: Application the document summarizes.
        state: Application state the template was selected for.
        template: Logical template that was selected.
        template_reference: base URI joined with the resolved template path.
        view_model: The state-specific view model.
        options: PDF layout options.
    """

    application_id: UUID
    state: ApplicationState
    template: DocumentTemplate
    template_reference: str
    view_model: ViewModel
    options: PdfOptions = field(default_factory=PdfOptions)


@dataclass(frozen=True)
class ApplicationNotFound:
    """No application exists for the requested id."""

    application_id: UUID

    @property
    def reason(self) -> str:
        return f"No application found for id {self.application_id}"


@dataclass(frozen=True)
class UnsupportedState:
    """The application exists but its state has no document."""

    application_id: UUID
    state: ApplicationState

    @property
    def reason(self) -> str:
        return (
            f"The application is in state {self.state.value} "
            "and no valid document can be generated for it."
        )


NoDocument = ApplicationNotFound | UnsupportedState
AssemblyResult = RenderRequest | ApplicationNotFound | UnsupportedState


@dataclass(frozen=True)
class GeneratedDocument:
    """A rendered application document with its metadata.

    Attributes:
        application_id: Application the document summarizes.
        state: Application state at generation time.
        template: Logical template used.
        template_reference: Full template reference that was rendered.
        content: PDF bytes.
        checksum: SHA-256 hex digest of content.
        size_bytes: Length of content.
        generated_at: Generation timestamp (UTC).
    """

    application_id: UUID
    state: ApplicationState
    template: DocumentTemplate
    template_reference: str
    content: bytes
    checksum: str
    size_bytes: int
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, str | int]:
        """Convert metadata to dictionary (without content bytes)."""
        return {
            "application_id": str(self.application_id),
            "state": self.state.value,
            "template": self.template.value,
            "template_reference": self.template_reference,
            "checksum": self.checksum,
            "size_bytes": self.size_bytes,
            "generated_at": self.generated_at.isoformat(),
        }
