"""
BaseParametersService -- active base-parameter lookup and maintenance.

Responsibility:
    Resolves the single active base-parameter record from a listing source
    (``get_active_base_parameters``) and maintains records in the database
    (``BaseParametersService``): create, update values, activate.

Invariants enforced:
    - No silent defaults: when no listed record is active the lookup raises
      ``NoActiveBaseParametersError``.  Callers decide how to degrade.
    - Single active record: ``activate`` deactivates every other record in
      the same flush.

Failure modes:
    - NoActiveBaseParametersError from ``get_active_base_parameters``.
    - BaseParametersNotFoundError from ``activate``/``update_values`` for an
      unknown record ID.
    - Any error raised by the listing source is logged and re-raised.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from sqlalchemy import update

from property_kernel.activity_log import log_entity_created, log_entity_updated
from property_kernel.domain.base_parameters import EUR, USD, BaseParameters
from property_kernel.domain.values import as_decimal
from property_kernel.exceptions import (
    BaseParametersNotFoundError,
    NoActiveBaseParametersError,
)
from property_kernel.logging_config import get_logger
from property_kernel.models.base_parameters import BaseParametersRecord
from property_kernel.services.base import BaseService

logger = get_logger("services.base_parameters")


class BaseParametersSource(Protocol):
    """The listing call that returns every base-parameter record."""

    def list_parameters(self) -> Sequence[BaseParameters]: ...


class InMemoryBaseParametersSource:
    """Listing source over a fixed sequence of records."""

    def __init__(self, records: Sequence[BaseParameters] = ()):
        self._records = list(records)

    def list_parameters(self) -> Sequence[BaseParameters]:
        return list(self._records)

    def add(self, params: BaseParameters) -> None:
        self._records.append(params)


def get_active_base_parameters(source: BaseParametersSource) -> BaseParameters:
    """
    Return the first listed record marked active.

    Raises:
        NoActiveBaseParametersError: if no listed record is active.
    """
    try:
        records = source.list_parameters()
        active = next((p for p in records if p.is_active), None)
        if active is None:
            raise NoActiveBaseParametersError(records_seen=len(records))
    except Exception:
        logger.error("base_parameters_fetch_failed", exc_info=True)
        raise

    logger.debug(
        "base_parameters_resolved",
        extra={
            "record_id": active.record_id,
            "consumer_price_index": active.consumer_price_index,
        },
    )
    return active


class BaseParametersService(BaseService[BaseParametersRecord]):
    """
    Write side for base-parameter records.

    Contract:
        Flushes within the caller's transaction; never commits.
    """

    def create(self, params: BaseParameters) -> BaseParameters:
        """Persist ``params``; when it is active, every other record is deactivated."""
        record = BaseParametersRecord.from_domain(params)
        self.session.add(record)
        self.session.flush()
        if record.is_active:
            self._deactivate_others(record.id)
        log_entity_created(
            "base_parameters",
            str(record.id),
            {"name": record.name, "is_active": record.is_active},
        )
        return record.to_domain()

    def activate(self, record_id: UUID | str) -> BaseParameters:
        record = self._load(record_id)
        record.is_active = True
        self._deactivate_others(record.id)
        self.session.flush()
        log_entity_updated("base_parameters", str(record.id), {"is_active": True})
        return record.to_domain()

    def update_values(
        self,
        record_id: UUID | str,
        *,
        as_of: date,
        consumer_price_index: Decimal | None = None,
        usd_rate: Decimal | None = None,
        eur_rate: Decimal | None = None,
        vat_percentage: Decimal | None = None,
    ) -> BaseParameters:
        """Overwrite the given values and stamp ``last_update`` with ``as_of``."""
        record = self._load(record_id)
        changes: dict[str, str] = {}
        if consumer_price_index is not None:
            record.cpi_value = as_decimal(consumer_price_index, "consumer_price_index")
            changes["consumer_price_index"] = str(record.cpi_value)
        if usd_rate is not None:
            record.usd_rate = as_decimal(usd_rate, USD)
            changes[USD] = str(record.usd_rate)
        if eur_rate is not None:
            record.eur_rate = as_decimal(eur_rate, EUR)
            changes[EUR] = str(record.eur_rate)
        if vat_percentage is not None:
            record.vat_percentage = as_decimal(vat_percentage, "vat_percentage")
            changes["vat_percentage"] = str(record.vat_percentage)
        record.last_update = as_of
        self.session.flush()
        log_entity_updated("base_parameters", str(record.id), changes)
        return record.to_domain()

    def _load(self, record_id: UUID | str) -> BaseParametersRecord:
        key = record_id if isinstance(record_id, UUID) else UUID(str(record_id))
        record = self.session.get(BaseParametersRecord, key)
        if record is None:
            raise BaseParametersNotFoundError(str(record_id))
        return record

    def _deactivate_others(self, record_id: UUID) -> None:
        self.session.execute(
            update(BaseParametersRecord)
            .where(BaseParametersRecord.id != record_id)
            .values(is_active=False)
        )
