"""Tests for property_kernel.logging_config: JSON lines, context fields, setup."""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from property_kernel.exceptions import MissingCurrencyRateError, NoActiveBaseParametersError
from property_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def stream():
    """Configure the kernel tree with a JSON handler writing to a buffer."""
    buffer = StringIO()
    configure_logging(handler=logging.StreamHandler(buffer), level=logging.DEBUG)
    return buffer


def _records(buffer: StringIO) -> list[dict]:
    return [json.loads(line) for line in buffer.getvalue().splitlines() if line]


class _Opaque:
    def __str__(self):
        return "opaque-value"


class TestStructuredFormatter:
    """One JSON object per record."""

    def test_header_fields(self, stream):
        get_logger("engines.indexation").info("index_adjustment_computed")

        record = _records(stream)[0]
        assert record["level"] == "INFO"
        assert record["message"] == "index_adjustment_computed"
        assert record["logger"] == "property_kernel.engines.indexation"
        assert "ts" in record

    def test_context_and_extras_merged(self, stream):
        LogContext.set(contract_id="c-456", payment_id="p-1")
        get_logger("test").info("computed", extra={"indexation_kind": "dollar"})

        record = _records(stream)[0]
        assert record["contract_id"] == "c-456"
        assert record["payment_id"] == "p-1"
        assert record["indexation_kind"] == "dollar"
        assert "correlation_id" not in record

    def test_typed_values(self, stream):
        uid = uuid4()
        get_logger("test").info(
            "typed_values",
            extra={"record_uuid": uid, "adjustment": Decimal("100.00"), "as_of": date(2024, 4, 1)},
        )

        record = _records(stream)[0]
        assert record["record_uuid"] == str(uid)
        assert record["adjustment"] == "100.00"
        assert record["as_of"] == "2024-04-01"

    def test_sets_rendered_as_sorted_lists(self, stream):
        get_logger("test").info(
            "attrs",
            extra={"attributes": frozenset({"b", "a"}), "kinds": {"tenant", "contract"}},
        )

        record = _records(stream)[0]
        assert record["attributes"] == ["a", "b"]
        assert record["kinds"] == ["contract", "tenant"]

    def test_unknown_objects_fall_back_to_str(self, stream):
        get_logger("test").info("opaque", extra={"thing": _Opaque()})

        assert _records(stream)[0]["thing"] == "opaque-value"

    def test_kernel_exception_fields(self, stream):
        try:
            raise NoActiveBaseParametersError(records_seen=3)
        except NoActiveBaseParametersError:
            get_logger("test").error("parameters_error", exc_info=True)

        record = _records(stream)[0]
        assert record["exc_type"] == "NoActiveBaseParametersError"
        assert record["exc_code"] == "NO_ACTIVE_BASE_PARAMETERS"
        assert record["exc_records_seen"] == 3
        assert "traceback" in record

    def test_exception_attributes_use_exc_prefix(self, stream):
        try:
            raise MissingCurrencyRateError("usd", "rec-1")
        except MissingCurrencyRateError:
            get_logger("test").warning("rate_missing", exc_info=True)

        record = _records(stream)[0]
        assert record["exc_currency"] == "usd"
        assert record["exc_record_id"] == "rec-1"

    def test_plain_exception_has_no_code(self, stream):
        try:
            raise ValueError("boom")
        except ValueError:
            get_logger("test").error("failed", exc_info=True)

        record = _records(stream)[0]
        assert record["exc_message"] == "boom"
        assert "exc_code" not in record


class TestLogContext:
    def test_bind_restores_previous_values(self):
        LogContext.set(correlation_id="outer")
        with LogContext.bind(correlation_id="inner", entity_type="tenant"):
            assert LogContext.get_all() == {"correlation_id": "inner", "entity_type": "tenant"}
        assert LogContext.get_all() == {"correlation_id": "outer"}

    def test_bind_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(payment_id="p-9"):
                raise RuntimeError("inside")
        assert "payment_id" not in LogContext.get_all()

    def test_none_leaves_field_untouched(self):
        LogContext.set(actor_id="a-1")
        LogContext.set(actor_id=None, entity_id="e-1")
        assert LogContext.get_all() == {"actor_id": "a-1", "entity_id": "e-1"}

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError):
            LogContext.set(building_id="b-1")


class TestConfigureLogging:
    def test_second_call_is_noop(self):
        first = logging.StreamHandler(StringIO())
        second = logging.StreamHandler(StringIO())
        configure_logging(handler=first)
        configure_logging(handler=second)

        tree = logging.getLogger("property_kernel")
        structured = [h for h in tree.handlers if isinstance(h.formatter, StructuredFormatter)]
        assert structured == [first]
        assert second not in tree.handlers

    def test_reset_removes_handler(self):
        handler = logging.StreamHandler(StringIO())
        configure_logging(handler=handler)
        reset_logging()

        assert handler not in logging.getLogger("property_kernel").handlers
