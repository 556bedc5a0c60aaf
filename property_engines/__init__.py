"""
Module: property_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the calculation
    engines.  Canonical import surface for callers.

Architecture position:
    Engines -- calculation layer above ``property_kernel``.

Invariants enforced:
    - Engines NEVER call ``datetime.now()`` or ``date.today()``.  Dates are
      passed in as explicit parameters.
    - Decimal-only arithmetic: all monetary amounts use ``Decimal``.

Usage:
    from property_engines.indexation import IndexationCalculator
    from property_engines.derived_fields import payment_status
    from property_engines.contract_changes import detect_contract_changes
"""

from property_engines.contract_changes import (
    FieldChange,
    detect_contract_changes,
    should_update_payments,
    should_update_reminders,
)
from property_engines.derived_fields import (
    OwnerIncome,
    OwnerShare,
    additional_charges,
    charge_applies,
    next_payment_date,
    payment_amount,
    payment_status,
    property_ownership,
    refresh_payment_status,
    tenant_share_amount,
    total_required_payments,
)
from property_engines.indexation import (
    IndexationCalculator,
    compute_index_adjustment,
    custom_rate_adjustment,
    months_between,
    relative_change_adjustment,
)
from property_engines.tracer import traced_engine

__all__ = [
    "FieldChange",
    "IndexationCalculator",
    "OwnerIncome",
    "OwnerShare",
    "additional_charges",
    "charge_applies",
    "compute_index_adjustment",
    "custom_rate_adjustment",
    "detect_contract_changes",
    "months_between",
    "next_payment_date",
    "payment_amount",
    "payment_status",
    "property_ownership",
    "refresh_payment_status",
    "relative_change_adjustment",
    "should_update_payments",
    "should_update_reminders",
    "tenant_share_amount",
    "total_required_payments",
    "traced_engine",
]
