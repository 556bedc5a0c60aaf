"""
Pure domain layer.

Immutable value objects with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- Time/clock
"""

from property_kernel.domain.base_parameters import (
    BaseParameters,
    default_base_parameters,
)
from property_kernel.domain.contracts import (
    AdditionalCharge,
    ChargeFrequency,
    Contract,
    ContractStatus,
    IndexationPolicy,
    IndexationType,
    IndexDetails,
    Payment,
    PaymentStatus,
    PaymentTerms,
    TenantShare,
)
from property_kernel.domain.values import as_decimal, round_money

__all__ = [
    "AdditionalCharge",
    "BaseParameters",
    "ChargeFrequency",
    "Contract",
    "ContractStatus",
    "IndexDetails",
    "IndexationPolicy",
    "IndexationType",
    "Payment",
    "PaymentStatus",
    "PaymentTerms",
    "TenantShare",
    "as_decimal",
    "default_base_parameters",
    "round_money",
]
