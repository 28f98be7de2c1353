"""Domain types for investment product applications.

These models mirror the records returned by the application store.
They are read-only inputs to document generation: every model is frozen
and collections are tuples.
"""

from datetime import date as date_type
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class ApplicationState(str, Enum):
    """Lifecycle state of an application.

    Only PENDING, ACTIVATED and IN_REVIEW have a summary document.
    """

    PENDING = "pending"
    ACTIVATED = "activated"
    IN_REVIEW = "in_review"
    CLOSED = "closed"
    DECLINED = "declined"

    @property
    def description(self) -> str:
        """Human-readable label shown on documents."""
        return _STATE_DESCRIPTIONS[self]


_STATE_DESCRIPTIONS: dict[ApplicationState, str] = {
    ApplicationState.PENDING: "Pending",
    ApplicationState.ACTIVATED: "Activated",
    ApplicationState.IN_REVIEW: "In Review",
    ApplicationState.CLOSED: "Closed",
    ApplicationState.DECLINED: "Declined",
}


# =============================================================================
# Models
# =============================================================================


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Fund(_Frozen):
    """A fund holding within a product.

    Attributes:
        fund_id: Fund identifier.
        name: Fund display name.
        amount: Invested amount.
        fees: Fees charged against the amount.
    """

    fund_id: str
    name: str = ""
    amount: Decimal = Field(ge=0)
    fees: Decimal = Field(default=Decimal("0"), ge=0)


class Product(_Frozen):
    """An investment product made up of funds."""

    name: str = ""
    funds: tuple[Fund, ...] = ()


class Person(_Frozen):
    """The natural person who submitted the application."""

    first_name: str
    surname: str

    @property
    def full_name(self) -> str:
        return self.first_name + " " + self.surname


class LegalEntity(_Frozen):
    """Company or trust the application is made on behalf of."""

    name: str
    registration_number: str | None = None


class Review(_Frozen):
    """The review an application is currently held in."""

    reason: str


class Application(_Frozen):
    """An application for investment products.

    Attributes:
        id: Application identifier.
        state: Lifecycle state.
        reference_number: Reference quoted to the applicant.
        person: Applicant.
        date: Date the application was submitted.
        products: Products applied for, in application order.
        is_legal_entity: Whether the application is made for a legal entity.
        legal_entity: Legal entity details, if any.
        current_review: Review details while the application is in review.
    """

    id: UUID
    state: ApplicationState
    reference_number: str
    person: Person
    date: date_type
    products: tuple[Product, ...] = ()
    is_legal_entity: bool = False
    legal_entity: LegalEntity | None = None
    current_review: Review | None = None
