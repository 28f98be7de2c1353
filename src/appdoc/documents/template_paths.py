"""Template path resolution.

Maps logical template names to paths relative to a template root. The
assembler joins the root (base URI) and the path by plain concatenation,
so every path starts with a separator.

Usage:
    from appdoc.documents.template_paths import DefaultTemplatePathProvider

    provider = DefaultTemplatePathProvider()
    provider.get("ActivatedApplication")  # "/activated_application.html.jinja"
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from appdoc.documents.types import DocumentTemplate
from appdoc.utils.exceptions import TemplateNotFoundError

BUNDLED_TEMPLATE_ROOT = Path(__file__).parent / "templates"

DEFAULT_TEMPLATE_PATHS: dict[str, str] = {
    DocumentTemplate.PENDING_APPLICATION.value: "/pending_application.html.jinja",
    DocumentTemplate.ACTIVATED_APPLICATION.value: "/activated_application.html.jinja",
    DocumentTemplate.IN_REVIEW_APPLICATION.value: "/in_review_application.html.jinja",
}


@runtime_checkable
class TemplatePathProvider(Protocol):
    """Interface for resolving logical template names."""

    def get(self, name: str) -> str:
        """Return the path for a logical template name."""
        ...


class DefaultTemplatePathProvider:
    """Resolves template names from a fixed mapping.

    Attributes:
        paths: Logical name to path mapping.
    """

    def __init__(self, paths: Mapping[str, str] | None = None) -> None:
        self.paths = dict(paths) if paths is not None else dict(DEFAULT_TEMPLATE_PATHS)

    def get(self, name: str) -> str:
        """Return the path for a logical template name.

        Raises:
            TemplateNotFoundError: If the name is not registered.
        """
        try:
            return self.paths[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None

    def has_template(self, name: str) -> bool:
        return name in self.paths


def bundled_template_root() -> str:
    """Base URI of the templates shipped with the package."""
    return str(BUNDLED_TEMPLATE_ROOT)
