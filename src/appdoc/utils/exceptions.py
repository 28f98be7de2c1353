"""Custom exceptions for appdoc."""

from typing import Any


class AppDocError(Exception):
    """Base exception for all appdoc errors."""

    pass


class ConfigurationError(AppDocError):
    """Error in configuration or settings."""

    pass


class ApplicationDataError(AppDocError):
    """Application data violates an invariant the document depends on.

    Attributes:
        application_id: The application whose data is inconsistent.
    """

    def __init__(self, message: str, application_id: Any = None):
        super().__init__(message)
        self.application_id = application_id


class DuplicateApplicationError(ApplicationDataError):
    """More than one application matched a single identifier."""

    def __init__(self, application_id: Any, count: int):
        super().__init__(
            f"Expected at most one application for id {application_id}, found {count}",
            application_id=application_id,
        )
        self.count = count


class CollaboratorError(AppDocError):
    """Base exception for failures raised by document collaborators.

    Attributes:
        message: Human-readable description.
        code: Stable error code.
        details: Additional structured details.
    """

    def __init__(
        self,
        message: str,
        code: str = "COLLABORATOR_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class TemplateNotFoundError(CollaboratorError):
    """Error when a logical template name has no registered path."""

    def __init__(self, template_name: str) -> None:
        super().__init__(
            message=f"No template registered for name: {template_name}",
            code="TEMPLATE_NOT_FOUND",
            details={"template_name": template_name},
        )


class RenderingError(CollaboratorError):
    """Error when rendering HTML or converting it to PDF."""

    def __init__(self, stage: str, reason: str) -> None:
        super().__init__(
            message=f"Failed to render {stage}: {reason}",
            code="RENDERING_ERROR",
            details={"stage": stage, "reason": reason},
        )
