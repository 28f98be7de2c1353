"""Utility modules for appdoc."""

from appdoc.utils.exceptions import (
    AppDocError,
    ApplicationDataError,
    CollaboratorError,
    ConfigurationError,
    DuplicateApplicationError,
    RenderingError,
    TemplateNotFoundError,
)

__all__ = [
    "AppDocError",
    "ApplicationDataError",
    "CollaboratorError",
    "ConfigurationError",
    "DuplicateApplicationError",
    "RenderingError",
    "TemplateNotFoundError",
]
