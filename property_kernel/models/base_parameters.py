"""
Module: property_kernel.models.base_parameters
Responsibility: ORM persistence for base-parameter records (consumer price
    index, currency rates, VAT) that drive rent indexation.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/ value objects only.

Invariants enforced:
    - Index values and rates are Numeric, never float.
    - At most one record is expected to be active; BaseParametersService
      deactivates the others when activating a record.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from property_kernel.db.base import TrackedBase
from property_kernel.domain.base_parameters import EUR, USD, BaseParameters


class BaseParametersRecord(TrackedBase):
    """
    One base-parameter record.

    Non-goals:
        - Does not keep a history of index values; each update overwrites
          the current value.
    """

    __tablename__ = "base_parameters"

    __table_args__ = (
        Index("idx_base_parameters_active", "is_active"),
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    cpi_value: Mapped[Decimal] = mapped_column(Numeric(38, 9), nullable=False)

    cpi_base_year: Mapped[int | None] = mapped_column(Integer, nullable=True)

    usd_rate: Mapped[Decimal] = mapped_column(Numeric(38, 9), nullable=False)

    eur_rate: Mapped[Decimal | None] = mapped_column(Numeric(38, 9), nullable=True)

    vat_percentage: Mapped[Decimal | None] = mapped_column(Numeric(9, 4), nullable=True)

    last_update: Mapped[date | None] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        return f"<BaseParametersRecord {self.name!r} active={self.is_active} cpi={self.cpi_value}>"

    def to_domain(self) -> BaseParameters:
        rates = {USD: self.usd_rate}
        if self.eur_rate is not None:
            rates[EUR] = self.eur_rate
        return BaseParameters(
            consumer_price_index=self.cpi_value,
            currency_rates=rates,
            is_active=self.is_active,
            name=self.name,
            cpi_base_year=self.cpi_base_year,
            vat_percentage=self.vat_percentage,
            last_update=self.last_update,
            record_id=str(self.id) if self.id is not None else None,
        )

    @classmethod
    def from_domain(cls, params: BaseParameters) -> "BaseParametersRecord":
        return cls(
            name=params.name,
            is_active=params.is_active,
            cpi_value=params.consumer_price_index,
            cpi_base_year=params.cpi_base_year,
            usd_rate=params.usd_rate,
            eur_rate=params.currency_rates.get(EUR),
            vat_percentage=params.vat_percentage,
            last_update=params.last_update,
        )
