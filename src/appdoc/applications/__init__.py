"""Investment product applications: domain types and lookup."""

from appdoc.applications.repository import ApplicationRepository, InMemoryApplicationRepository
from appdoc.applications.types import (
    Application,
    ApplicationState,
    Fund,
    LegalEntity,
    Person,
    Product,
    Review,
)

__all__ = [
    "Application",
    "ApplicationRepository",
    "ApplicationState",
    "Fund",
    "InMemoryApplicationRepository",
    "LegalEntity",
    "Person",
    "Product",
    "Review",
]
