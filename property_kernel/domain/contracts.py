"""
Contract and payment value objects.

Immutable snapshots of the fields the calculation engines read from a
lease contract and its payments.  Monetary fields are coerced to Decimal
at construction; floats never survive past ``__post_init__``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from property_kernel.domain.values import as_decimal, as_optional_decimal
from property_kernel.exceptions import InvalidIndexationError


class IndexationType(str, Enum):
    """How a contract's rent follows an external reference."""

    NONE = "none"
    CONSUMER_PRICE_INDEX = "consumer_price_index"
    DOLLAR = "dollar"
    CUSTOM = "custom"


class ContractStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    EXPIRED = "expired"
    TERMINATED = "terminated"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    LATE = "late"
    CANCELLED = "cancelled"


class ChargeFrequency(str, Enum):
    MONTHLY = "monthly"
    BI_MONTHLY = "bi_monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class IndexationPolicy:
    """
    Indexation terms of a contract.

    ``kind`` is kept as a plain string so records carrying a kind this
    version does not know still load; engines treat unknown kinds as
    ``none``.  ``custom_rate`` is an annual fraction (0.03 = 3%).
    """

    kind: str = IndexationType.NONE.value
    base_index: Decimal | None = None
    custom_rate: Decimal | None = None

    def __post_init__(self) -> None:
        if isinstance(self.kind, IndexationType):
            object.__setattr__(self, "kind", self.kind.value)
        base_index = as_optional_decimal(self.base_index, "base_index")
        custom_rate = as_optional_decimal(self.custom_rate, "custom_rate")
        if base_index is not None and base_index < 0:
            raise InvalidIndexationError("base_index", str(base_index))
        if custom_rate is not None and custom_rate < 0:
            raise InvalidIndexationError("custom_rate", str(custom_rate))
        object.__setattr__(self, "base_index", base_index)
        object.__setattr__(self, "custom_rate", custom_rate)


@dataclass(frozen=True)
class IndexDetails:
    """Settlement state of the index component of a payment."""

    is_index_paid: bool = False
    index_amount: Decimal | None = None


@dataclass(frozen=True)
class PaymentTerms:
    payment_day: int = 1


@dataclass(frozen=True)
class TenantShare:
    tenant_id: str
    share_percentage: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "share_percentage",
            as_optional_decimal(self.share_percentage, "share_percentage"),
        )


@dataclass(frozen=True)
class AdditionalCharge:
    """A recurring charge attached to a contract (committee fee, parking, ...)."""

    name: str
    amount: Decimal = Decimal("0")
    frequency: str | None = ChargeFrequency.MONTHLY.value
    included_in_rent: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.frequency, ChargeFrequency):
            object.__setattr__(self, "frequency", self.frequency.value)
        object.__setattr__(self, "amount", as_decimal(self.amount, "amount"))


@dataclass(frozen=True)
class Contract:
    """Lease contract snapshot."""

    start_date: date
    end_date: date | None = None
    monthly_rent: Decimal = Decimal("0")
    status: str = ContractStatus.ACTIVE.value
    indexation: IndexationPolicy | None = None
    payment_terms: PaymentTerms | None = None
    tenants: tuple[TenantShare, ...] = ()
    additional_payments: tuple[AdditionalCharge, ...] = ()
    contract_id: str | None = None
    property_id: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.status, ContractStatus):
            object.__setattr__(self, "status", self.status.value)
        object.__setattr__(self, "monthly_rent", as_decimal(self.monthly_rent, "monthly_rent"))
        object.__setattr__(self, "tenants", tuple(self.tenants))
        object.__setattr__(self, "additional_payments", tuple(self.additional_payments))

    def tenant_share(self, tenant_id: str | None) -> Decimal | None:
        """Share percentage of ``tenant_id``, or None when not listed."""
        for tenant in self.tenants:
            if tenant.tenant_id == tenant_id:
                return tenant.share_percentage
        return None


@dataclass(frozen=True)
class Payment:
    """Rent payment snapshot."""

    date: date | None
    amount: Decimal = Decimal("0")
    due_date: date | None = None
    status: str = PaymentStatus.PENDING.value
    index_details: IndexDetails | None = None
    is_virtual: bool = False
    payment_id: str | None = None
    contract_id: str | None = None
    tenant_id: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.status, PaymentStatus):
            object.__setattr__(self, "status", self.status.value)
        object.__setattr__(self, "amount", as_decimal(self.amount, "amount"))

    @property
    def is_index_paid(self) -> bool:
        return bool(self.index_details and self.index_details.is_index_paid)
