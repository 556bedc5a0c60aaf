"""
property_engines.derived_fields -- Values derived from contracts and payments.

Responsibility:
    Tenant rent shares, recurring additional charges, payment status,
    payment schedule helpers and owner income split.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Engines never read the
    clock: every date-sensitive function takes ``as_of`` explicitly.

Invariants enforced:
    - Decimal-only arithmetic.
    - Owner income is rounded to whole currency units, half away from zero.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from property_kernel.domain.contracts import (
    AdditionalCharge,
    ChargeFrequency,
    Contract,
    ContractStatus,
    Payment,
    PaymentStatus,
)
from property_kernel.domain.values import WHOLE, as_decimal, round_money
from property_kernel.logging_config import get_logger

logger = get_logger("engines.derived_fields")

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class OwnerShare:
    owner_id: str
    share_percentage: Decimal | None = None


@dataclass(frozen=True)
class OwnerIncome:
    owner_id: str
    share_percentage: Decimal
    monthly_income: Decimal


def tenant_share_amount(monthly_rent: Decimal, share_percentage: Decimal | None = None) -> Decimal:
    """Part of ``monthly_rent`` owed by a tenant holding ``share_percentage`` (default 100)."""
    share = share_percentage if share_percentage else HUNDRED
    return as_decimal(monthly_rent, "monthly_rent") * share / HUNDRED


def charge_applies(charge: AdditionalCharge, payment_date: date | None) -> bool:
    """
    Whether a recurring charge is billed in the month of ``payment_date``.

    Months are counted from zero (January = 0): bi-monthly charges fall on
    even months, quarterly on January/April/July/October, yearly on
    January.  A missing frequency or date, or an unknown frequency, applies.
    """
    if not charge.frequency or payment_date is None:
        return True

    month_index = payment_date.month - 1
    if charge.frequency == ChargeFrequency.MONTHLY.value:
        return True
    if charge.frequency == ChargeFrequency.BI_MONTHLY.value:
        return month_index % 2 == 0
    if charge.frequency == ChargeFrequency.QUARTERLY.value:
        return month_index % 3 == 0
    if charge.frequency == ChargeFrequency.YEARLY.value:
        return month_index == 0
    return True


def additional_charges(payment: Payment, contract: Contract) -> Decimal:
    """Sum of the contract's rent-included charges billed on the payment date."""
    return sum(
        (
            charge.amount
            for charge in contract.additional_payments
            if charge.included_in_rent and charge_applies(charge, payment.date)
        ),
        Decimal("0"),
    )


def payment_amount(payment: Payment, contract: Contract) -> Decimal:
    """Tenant share of the monthly rent plus applicable charges, rounded to whole units."""
    base = tenant_share_amount(contract.monthly_rent, contract.tenant_share(payment.tenant_id))
    return round_money(base + additional_charges(payment, contract), WHOLE)


def payment_status(payment: Payment, contract: Contract, as_of: date) -> PaymentStatus:
    """
    Status of ``payment`` under ``contract`` as of ``as_of``.

    Precedence: an inactive contract cancels, then paid, then late when the
    due date has passed, otherwise pending.
    """
    if contract.status != ContractStatus.ACTIVE.value:
        return PaymentStatus.CANCELLED
    if payment.status == PaymentStatus.PAID.value:
        return PaymentStatus.PAID
    if payment.due_date is not None and payment.due_date < as_of:
        return PaymentStatus.LATE
    return PaymentStatus.PENDING


def refresh_payment_status(payment: Payment, as_of: date) -> Payment:
    """
    Re-evaluate late/pending for a bulk status sweep.

    Paid, cancelled and virtual payments are returned unchanged.
    """
    if payment.is_virtual:
        return payment
    if payment.status in (PaymentStatus.PAID.value, PaymentStatus.CANCELLED.value):
        return payment

    new_status = PaymentStatus.PENDING.value
    if payment.due_date is not None and payment.due_date < as_of:
        new_status = PaymentStatus.LATE.value

    if new_status == payment.status:
        return payment

    logger.info(
        "payment_status_changed",
        extra={
            "payment_id": payment.payment_id,
            "old_status": payment.status,
            "new_status": new_status,
        },
    )
    return replace(payment, status=new_status)


def total_required_payments(contract: Contract) -> int:
    """Number of monthly payments from start to end month, inclusive."""
    if contract.end_date is None:
        return 0
    months = (
        (contract.end_date.year - contract.start_date.year) * 12
        + (contract.end_date.month - contract.start_date.month)
        + 1
    )
    return max(0, months)


def _on_day(year: int, month: int, day: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def _add_month(value: date, day: int) -> date:
    year, month = (value.year + 1, 1) if value.month == 12 else (value.year, value.month + 1)
    return _on_day(year, month, day)


def next_payment_date(
    contract: Contract,
    as_of: date,
    last_payment_date: date | None = None,
) -> date:
    """
    Next rent due date.

    Takes the contract's payment day (default 1) in the month of the last
    payment, or of the contract start, and moves it one month forward when
    it is already before ``as_of``.  Days past the end of a short month are
    clamped to its last day.
    """
    payment_day = 1
    if contract.payment_terms is not None and contract.payment_terms.payment_day:
        payment_day = contract.payment_terms.payment_day

    anchor = last_payment_date or contract.start_date
    candidate = _on_day(anchor.year, anchor.month, payment_day)
    if candidate < as_of:
        candidate = _add_month(candidate, payment_day)
    return candidate


def property_ownership(monthly_rent: Decimal, owners: list[OwnerShare]) -> list[OwnerIncome]:
    """
    Split ``monthly_rent`` between owners.

    Owners without a recorded share get an equal split of the whole.
    """
    if not owners:
        return []

    rent = as_decimal(monthly_rent, "monthly_rent")
    equal_share = HUNDRED / len(owners)
    result = []
    for owner in owners:
        share = owner.share_percentage if owner.share_percentage else equal_share
        result.append(
            OwnerIncome(
                owner_id=owner.owner_id,
                share_percentage=share,
                monthly_income=round_money(rent * share / HUNDRED, WHOLE),
            )
        )
    return result
