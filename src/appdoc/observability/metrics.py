"""Prometheus metrics for appdoc observability.

This module provides Prometheus metrics for monitoring:
- Document outcomes (generated, not found, unsupported state)
- Generation duration per template (render + PDF conversion)
- Generated document sizes
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    generate_latest,
)

from appdoc.config.settings import Settings, get_settings

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = [
    "MetricsConfig",
    "MetricsManager",
    "DOCUMENT_OUTCOMES",
    "DOCUMENT_GENERATION_DURATION",
    "DOCUMENT_SIZE_BYTES",
    "observe_document_generation",
    "record_document_outcome",
    "record_document_size",
    "get_metrics",
    "get_metrics_manager",
    "create_metrics_manager",
]


@dataclass
class MetricsConfig:
    """Configuration for Prometheus metrics.

    Attributes:
        enabled: Whether metrics collection is enabled.
        histogram_buckets: Histogram buckets for generation latency.
    """

    enabled: bool = True
    histogram_buckets: tuple[float, ...] = (
        0.01,
        0.025,
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.5,
        5.0,
        10.0,
        30.0,
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> MetricsConfig:
        """Create configuration from application settings."""
        return cls(enabled=settings.metrics_enabled)


# Metric names are fixed at import
METRIC_PREFIX = "appdoc"
_config = MetricsConfig()

# ============================================================================
# Document Metrics
# ============================================================================

DOCUMENT_OUTCOMES = Counter(
    f"{METRIC_PREFIX}_document_outcomes_total",
    "Document requests by outcome",
    ["outcome", "state"],
)

DOCUMENT_GENERATION_DURATION = Histogram(
    f"{METRIC_PREFIX}_document_generation_duration_seconds",
    "Time to render and convert an application document",
    ["template", "status"],
    buckets=_config.histogram_buckets,
)

DOCUMENT_SIZE_BYTES = Histogram(
    f"{METRIC_PREFIX}_document_size_bytes",
    "Size of generated application documents",
    ["template"],
    buckets=(1_000, 10_000, 50_000, 100_000, 250_000, 500_000, 1_000_000, 5_000_000),
)

# Service info
SERVICE_INFO = Info(
    f"{METRIC_PREFIX}_service",
    "Service information",
)


class MetricsManager:
    """Manages Prometheus metrics configuration and export.

    This class handles:
    - Metrics configuration and initialization
    - Custom registry support for testing
    - Metrics export
    """

    def __init__(
        self,
        config: MetricsConfig | None = None,
        registry: CollectorRegistry | None = None,
    ) -> None:
        """Initialize the metrics manager.

        Args:
            config: Metrics configuration.
            registry: Optional custom registry for testing.
        """
        self.config = config or MetricsConfig()
        self.registry = registry or REGISTRY
        self._initialized = False

    def initialize(
        self,
        service_name: str = "appdoc",
        service_version: str = "0.1.0",
        environment: str = "development",
    ) -> None:
        """Initialize metrics with service information.

        Args:
            service_name: Name of the service.
            service_version: Version of the service.
            environment: Deployment environment.
        """
        if self._initialized or not self.config.enabled:
            return

        SERVICE_INFO.info(
            {
                "name": service_name,
                "version": service_version,
                "environment": environment,
            }
        )

        self._initialized = True

    def get_metrics(self) -> bytes:
        """Generate metrics output in Prometheus format.

        Returns:
            Prometheus metrics as bytes.
        """
        return generate_latest(self.registry)


# Global metrics manager
_metrics_manager: MetricsManager | None = None


def get_metrics_manager() -> MetricsManager:
    """Get the global metrics manager instance."""
    global _metrics_manager
    if _metrics_manager is None:
        _metrics_manager = MetricsManager(MetricsConfig.from_settings(get_settings()))
    return _metrics_manager


def create_metrics_manager(
    config: MetricsConfig | None = None,
    registry: CollectorRegistry | None = None,
) -> MetricsManager:
    """Create and register a new metrics manager.

    Args:
        config: Optional metrics configuration.
        registry: Optional custom registry.

    Returns:
        The configured MetricsManager instance.
    """
    global _metrics_manager
    _metrics_manager = MetricsManager(config, registry)
    return _metrics_manager


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return get_metrics_manager().get_metrics()


# ============================================================================
# Convenience Functions for Recording Metrics
# ============================================================================


def _enabled() -> bool:
    return get_metrics_manager().config.enabled


def record_document_outcome(outcome: str, state: str) -> None:
    """Record the outcome of a document request.

    Args:
        outcome: One of "generated", "not_found", "unsupported".
        state: Application state value, or "unknown" when not found.
    """
    if not _enabled():
        return
    DOCUMENT_OUTCOMES.labels(outcome=outcome, state=state).inc()


def record_document_size(template: str, size_bytes: int) -> None:
    """Record the size of a generated document."""
    if not _enabled():
        return
    DOCUMENT_SIZE_BYTES.labels(template=template).observe(size_bytes)


@contextmanager
def observe_document_generation(template: str) -> Generator[dict[str, Any], None, None]:
    """Context manager for observing render and conversion duration.

    Args:
        template: Logical template name.

    Yields:
        Context dict; status is set to "error" if the block raises.
    """
    context: dict[str, Any] = {"status": "success"}
    start_time = time.perf_counter()

    try:
        yield context
    except Exception:
        context["status"] = "error"
        raise
    finally:
        duration = time.perf_counter() - start_time
        context["duration_seconds"] = duration
        if _enabled():
            DOCUMENT_GENERATION_DURATION.labels(
                template=template, status=context["status"]
            ).observe(duration)
