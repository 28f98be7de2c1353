"""Application lookup.

The document generator only needs to resolve a single application by id.
Stores implement the ApplicationRepository protocol; an in-memory
implementation is provided for tests and local wiring.

Usage:
    from appdoc.applications.repository import InMemoryApplicationRepository

    repo = InMemoryApplicationRepository([application])
    found = repo.find_by_id(application.id)
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable
from uuid import UUID

from appdoc.applications.types import Application
from appdoc.utils.exceptions import DuplicateApplicationError


@runtime_checkable
class ApplicationRepository(Protocol):
    """Interface for resolving applications by identifier."""

    def find_by_id(self, application_id: UUID) -> Application | None:
        """Find the application with the given id.

        Args:
            application_id: Application identifier.

        Returns:
            The application, or None if no application matches.

        Raises:
            DuplicateApplicationError: If more than one application matches.
        """
        ...


class InMemoryApplicationRepository:
    """Application repository backed by a list.

    Applications are kept in insertion order and never deduplicated, so a
    store holding two records with the same id reports the integrity
    violation on lookup instead of hiding it.
    """

    def __init__(self, applications: Iterable[Application] = ()) -> None:
        self._applications: list[Application] = list(applications)

    def add(self, application: Application) -> None:
        """Add an application to the store."""
        self._applications.append(application)

    def find_by_id(self, application_id: UUID) -> Application | None:
        matches = [app for app in self._applications if app.id == application_id]
        if len(matches) > 1:
            raise DuplicateApplicationError(application_id, len(matches))
        return matches[0] if matches else None

    def __len__(self) -> int:
        return len(self._applications)
