"""
Pytest fixtures for the property-management core test suite.

Provides:
- Structured logging configuration and log capture
- In-memory SQLite sessions for kernel persistence tests
- Base-parameter and contract builders
"""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from property_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from property_kernel.domain.base_parameters import BaseParameters
from property_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from property_kernel.services.base_parameters_service import InMemoryBaseParametersSource


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture property_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            calculator.compute_index_adjustment(payment, contract)
            logs = captured_logs()
            assert any(r["message"] == "index_adjustment_computed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("property_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Fresh in-memory SQLite database per test."""
    init_engine_from_url("sqlite://")
    create_tables()
    s = get_session()
    yield s
    s.close()
    drop_tables()
    reset_engine()


# =============================================================================
# Domain builders
# =============================================================================


def make_parameters(
    cpi: str = "110",
    usd: str = "3.85",
    is_active: bool = True,
    name: str = "main",
) -> BaseParameters:
    return BaseParameters(
        consumer_price_index=Decimal(cpi),
        currency_rates={"usd": Decimal(usd), "eur": Decimal("4.0")},
        is_active=is_active,
        name=name,
        cpi_base_year=2024,
        vat_percentage=Decimal("17"),
        last_update=date(2024, 1, 1),
    )


@pytest.fixture
def active_parameters() -> BaseParameters:
    return make_parameters()


@pytest.fixture
def parameters_source(active_parameters) -> InMemoryBaseParametersSource:
    return InMemoryBaseParametersSource([make_parameters(is_active=False, name="old"), active_parameters])


@pytest.fixture
def empty_source() -> InMemoryBaseParametersSource:
    return InMemoryBaseParametersSource([make_parameters(is_active=False)])


@pytest.fixture
def parameters_factory():
    """Builder for BaseParameters with overridable CPI, USD rate and active flag."""
    return make_parameters
