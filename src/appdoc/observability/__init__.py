"""Observability module for appdoc.

Usage:
    from appdoc.observability import observe_document_generation, record_document_outcome

    with observe_document_generation(template="ActivatedApplication"):
        html = view_generator.generate_from_path(reference, view_model)

    record_document_outcome(outcome="generated", state="activated")
"""

from appdoc.observability.metrics import (
    DOCUMENT_GENERATION_DURATION,
    DOCUMENT_OUTCOMES,
    DOCUMENT_SIZE_BYTES,
    MetricsConfig,
    MetricsManager,
    create_metrics_manager,
    get_metrics,
    get_metrics_manager,
    observe_document_generation,
    record_document_outcome,
    record_document_size,
)

__all__ = [
    "DOCUMENT_GENERATION_DURATION",
    "DOCUMENT_OUTCOMES",
    "DOCUMENT_SIZE_BYTES",
    "MetricsConfig",
    "MetricsManager",
    "create_metrics_manager",
    "get_metrics",
    "get_metrics_manager",
    "observe_document_generation",
    "record_document_outcome",
    "record_document_size",
]
