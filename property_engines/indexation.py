"""
property_engines.indexation -- Rent indexation adjustment for a payment.

Responsibility:
    Compute the monetary adjustment owed on a rent payment under the
    governing contract's indexation policy:

    - consumer_price_index: amount * (current CPI - base CPI) / base CPI
    - dollar:               amount * (current USD - base USD) / base USD
    - custom:               amount * (annual rate / 12) * months since start

Architecture position:
    Engines -- calculation layer.  The CPI and dollar branches read the
    active base parameters through a ``BaseParametersSource``; that lookup
    is the only I/O.  The custom branch is pure.

Invariants enforced:
    - Decimal-only arithmetic; results are rounded to cents, half away
      from zero.
    - An adjustment already settled (``index_details.is_index_paid``) is
      never charged again: 0 for every branch.
    - Unknown or ``none`` kinds yield 0, never an error.
    - A base index that was never recorded defaults to the current value,
      giving a zero adjustment.

Failure modes:
    - No active base parameters, or an active record without a USD rate
      (``NoActiveBaseParametersError``, ``MissingCurrencyRateError``) is caught,
      logged as ``index_adjustment_base_parameters_unavailable`` and the
      adjustment degrades to 0 so payment processing is not blocked.

Usage:
    from property_engines.indexation import IndexationCalculator

    calculator = IndexationCalculator(BaseParametersSelector(session))
    adjustment = calculator.compute_index_adjustment(payment, contract)
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from property_engines.tracer import traced_engine
from property_kernel.domain.contracts import Contract, IndexationType, Payment
from property_kernel.domain.values import as_decimal, round_money
from property_kernel.exceptions import BaseParametersError
from property_kernel.logging_config import get_logger
from property_kernel.services.base_parameters_service import (
    BaseParametersSource,
    get_active_base_parameters,
)

logger = get_logger("engines.indexation")

ZERO = Decimal("0.00")
MONTHS_PER_YEAR = Decimal("12")

_KNOWN_KINDS = frozenset(k.value for k in IndexationType)


def months_between(start: date, end: date) -> int:
    """Calendar months from ``start`` to ``end``, ignoring day-of-month.

    Negative when ``end`` falls in an earlier month than ``start``.
    """
    return (end.year - start.year) * 12 + (end.month - start.month)


def relative_change_adjustment(
    amount: Decimal,
    current: Decimal,
    base: Decimal | None,
) -> Decimal:
    """
    ``amount`` scaled by the relative change from ``base`` to ``current``.

    An unset (or zero) base defaults to ``current``.
    """
    if not base:
        base = current
    if not base:
        return ZERO
    return round_money(amount * (current - base) / base)


def custom_rate_adjustment(
    amount: Decimal,
    annual_rate: Decimal | None,
    months: int,
) -> Decimal:
    rate = annual_rate if annual_rate is not None else Decimal("0")
    return round_money(amount * (rate / MONTHS_PER_YEAR) * months)


class IndexationCalculator:
    """
    Indexation adjustment calculator.

    Contract:
        ``compute_index_adjustment`` is a function of the payment, the
        contract and the active base parameters at call time.  It never
        raises for missing parameters; see module failure modes.
    Non-goals:
        - Does not mark the index as paid; settlement belongs to the
          payment workflow.
        - Does not apply the adjustment to the rent amount.
    """

    def __init__(self, parameters_source: BaseParametersSource):
        self._source = parameters_source

    @traced_engine("indexation", "1.0", fingerprint_fields=("payment", "contract"))
    def compute_index_adjustment(
        self,
        payment: Payment | None,
        contract: Contract | None,
    ) -> Decimal:
        if contract is None or payment is None or payment.date is None:
            return ZERO

        policy = contract.indexation
        if policy is None or policy.kind == IndexationType.NONE.value:
            return ZERO

        if policy.kind not in _KNOWN_KINDS:
            logger.debug(
                "index_adjustment_unknown_kind",
                extra={"indexation_kind": policy.kind},
            )
            return ZERO

        if payment.is_index_paid:
            return ZERO

        amount = as_decimal(payment.amount, "amount")

        if policy.kind == IndexationType.CUSTOM.value:
            months = months_between(contract.start_date, payment.date)
            return custom_rate_adjustment(amount, policy.custom_rate, months)

        try:
            params = get_active_base_parameters(self._source)
            if policy.kind == IndexationType.CONSUMER_PRICE_INDEX.value:
                current = params.consumer_price_index
            else:
                current = params.usd_rate
        except BaseParametersError as exc:
            logger.warning(
                "index_adjustment_base_parameters_unavailable",
                extra={
                    "error_code": exc.code,
                    "indexation_kind": policy.kind,
                    "payment_id": payment.payment_id,
                },
            )
            return ZERO

        adjustment = relative_change_adjustment(amount, current, policy.base_index)
        logger.info(
            "index_adjustment_computed",
            extra={
                "indexation_kind": policy.kind,
                "current_value": current,
                "base_value": policy.base_index,
                "adjustment": adjustment,
            },
        )
        return adjustment


def compute_index_adjustment(
    payment: Payment | None,
    contract: Contract | None,
    parameters_source: BaseParametersSource,
) -> Decimal:
    """Functional form of ``IndexationCalculator.compute_index_adjustment``."""
    return IndexationCalculator(parameters_source).compute_index_adjustment(payment, contract)
