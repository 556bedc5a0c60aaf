"""
property_engines.contract_changes -- Which contract edits ripple into dependents.

When a contract is saved, dependent payments and reminders only need to be
recomputed if a field they derive from changed.  ``detect_contract_changes``
reports those fields; the ``should_update_*`` predicates decide which
dependents are affected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from property_kernel.domain.contracts import Contract

RELEVANT_FIELDS: tuple[str, ...] = (
    "monthly_rent",
    "start_date",
    "end_date",
    "payment_terms",
    "indexation",
    "status",
)

PAYMENT_FIELDS = frozenset({"monthly_rent", "payment_terms", "indexation", "status"})
REMINDER_FIELDS = frozenset({"end_date", "status"})


@dataclass(frozen=True)
class FieldChange:
    old: Any
    new: Any


def detect_contract_changes(new: Contract, old: Contract | None) -> dict[str, FieldChange]:
    """Relevant fields whose value differs between ``old`` and ``new``.

    Empty for a newly created contract (``old`` is None).
    """
    if old is None:
        return {}

    changes: dict[str, FieldChange] = {}
    for name in RELEVANT_FIELDS:
        before = getattr(old, name)
        after = getattr(new, name)
        if before != after:
            changes[name] = FieldChange(old=before, new=after)
    return changes


def should_update_payments(changes: dict[str, FieldChange]) -> bool:
    return not PAYMENT_FIELDS.isdisjoint(changes)


def should_update_reminders(changes: dict[str, FieldChange]) -> bool:
    return not REMINDER_FIELDS.isdisjoint(changes)
