"""Pytest fixtures for appdoc tests."""

from collections.abc import Callable, Generator
from datetime import date
from decimal import Decimal
from typing import Any
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
import structlog

from appdoc.applications import (
    Application,
    ApplicationState,
    Fund,
    InMemoryApplicationRepository,
    LegalEntity,
    Person,
    Product,
    Review,
)
from appdoc.config.settings import DocumentConfig, Settings, get_settings
from appdoc.documents import DefaultTemplatePathProvider, DocumentAssembler, RenderedPdf
from appdoc.observability import metrics


# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    This ensures tests that modify structlog global state
    don't affect other tests.
    """
    yield
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Drop cached settings so environment changes are picked up."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def reset_metrics_manager() -> Generator[None, None, None]:
    """Restore the global metrics manager after a test replaces it."""
    metrics._metrics_manager = None
    yield
    metrics._metrics_manager = None


# =============================================================================
# Configuration fixtures
# =============================================================================


@pytest.fixture
def document_config() -> DocumentConfig:
    """Document configuration with a 15% tax rate."""
    return DocumentConfig(
        support_email="support@example.com",
        signature="Client Services\nExample Investments",
        tax_rate=Decimal("0.15"),
    )


@pytest.fixture
def test_settings() -> Settings:
    """Settings with every document value populated."""
    return Settings(
        environment="test",
        log_level="DEBUG",
        support_email="support@example.com",
        signature="Client Services",
        tax_rate=Decimal("0.15"),
        template_base_uri="/srv/templates/",
    )


# =============================================================================
# Application fixtures
# =============================================================================


@pytest.fixture
def make_application() -> Callable[..., Application]:
    """Factory for applications with sensible defaults."""

    def _make(**overrides: Any) -> Application:
        fields: dict[str, Any] = {
            "id": uuid4(),
            "state": ApplicationState.PENDING,
            "reference_number": "APP-000123",
            "person": Person(first_name="Thandi", surname="Nkosi"),
            "date": date(2024, 3, 14),
            "products": (),
        }
        fields.update(overrides)
        return Application(**fields)

    return _make


@pytest.fixture
def sample_products() -> tuple[Product, ...]:
    """Two products holding three funds."""
    return (
        Product(
            name="Retirement Annuity",
            funds=(
                Fund(fund_id="F-001", name="Balanced Fund", amount=Decimal("1000.00"), fees=Decimal("25.50")),
                Fund(fund_id="F-002", name="Equity Fund", amount=Decimal("500.00"), fees=Decimal("10.00")),
            ),
        ),
        Product(
            name="Tax-Free Savings",
            funds=(
                Fund(fund_id="F-003", name="Money Market", amount=Decimal("250.00"), fees=Decimal("0.75")),
            ),
        ),
    )


@pytest.fixture
def pending_application(make_application) -> Application:
    return make_application(state=ApplicationState.PENDING)


@pytest.fixture
def activated_application(make_application, sample_products) -> Application:
    return make_application(state=ApplicationState.ACTIVATED, products=sample_products)


@pytest.fixture
def in_review_application(make_application, sample_products) -> Application:
    return make_application(
        state=ApplicationState.IN_REVIEW,
        products=sample_products,
        is_legal_entity=True,
        legal_entity=LegalEntity(name="Nkosi Family Trust", registration_number="IT1234/2019"),
        current_review=Review(reason="Address update needed"),
    )


@pytest.fixture
def repository(
    pending_application, activated_application, in_review_application
) -> InMemoryApplicationRepository:
    return InMemoryApplicationRepository(
        [pending_application, activated_application, in_review_application]
    )


@pytest.fixture
def assembler(repository, document_config) -> DocumentAssembler:
    return DocumentAssembler(
        repository=repository,
        template_paths=DefaultTemplatePathProvider(),
        config=document_config,
    )


# =============================================================================
# Collaborator fakes
# =============================================================================


@pytest.fixture
def view_generator() -> MagicMock:
    """View generator returning a fixed HTML page."""
    generator = MagicMock()
    generator.generate_from_path.return_value = "<html><body>document</body></html>"
    return generator


@pytest.fixture
def pdf_generator() -> MagicMock:
    """PDF generator returning fixed bytes."""
    generator = MagicMock()
    generator.generate_from_html.return_value = RenderedPdf(content=b"%PDF-1.7\ntest\n%%EOF")
    return generator
