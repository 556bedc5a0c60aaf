"""
Base parameters -- the process-wide reference values used by indexation.

One record is "active" at a time.  It carries the current consumer price
index and the current currency exchange rates (at minimum USD), plus the
VAT percentage shown next to them on the parameters screen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from property_kernel.domain.values import as_decimal, as_optional_decimal
from property_kernel.exceptions import MissingCurrencyRateError

USD = "usd"
EUR = "eur"


@dataclass(frozen=True)
class BaseParameters:
    """
    Immutable snapshot of one base-parameter record.

    Currency codes in ``currency_rates`` are normalized to lower case.
    """

    consumer_price_index: Decimal
    currency_rates: Mapping[str, Decimal] = field(default_factory=dict)
    is_active: bool = False
    name: str = ""
    cpi_base_year: int | None = None
    vat_percentage: Decimal | None = None
    last_update: date | None = None
    record_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "consumer_price_index",
            as_decimal(self.consumer_price_index, "consumer_price_index"),
        )
        object.__setattr__(
            self,
            "currency_rates",
            {
                code.lower(): as_decimal(rate, f"currency_rates.{code}")
                for code, rate in self.currency_rates.items()
            },
        )
        object.__setattr__(
            self,
            "vat_percentage",
            as_optional_decimal(self.vat_percentage, "vat_percentage"),
        )

    def rate(self, currency: str) -> Decimal:
        """
        Current rate for ``currency``.

        Raises:
            MissingCurrencyRateError: if the record carries no rate for
                the currency.
        """
        code = currency.lower()
        if code not in self.currency_rates:
            raise MissingCurrencyRateError(code, self.record_id)
        return self.currency_rates[code]

    @property
    def usd_rate(self) -> Decimal:
        return self.rate(USD)

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> BaseParameters:
        """
        Build from the nested listing shape::

            {"is_active": true,
             "consumer_price_index": {"value": 104.2, "base_year": 2024},
             "currency_rates": {"usd": 3.6, "eur": 4.0},
             "vat": {"percentage": 17}}
        """
        cpi = data.get("consumer_price_index") or {}
        rates = {
            code: value
            for code, value in (data.get("currency_rates") or {}).items()
            if code != "last_update" and value is not None
        }
        vat = data.get("vat") or {}
        last_update = cpi.get("last_update")
        if isinstance(last_update, str):
            last_update = date.fromisoformat(last_update)
        record_id = data.get("id")
        return cls(
            consumer_price_index=cpi["value"],
            currency_rates=rates,
            is_active=bool(data.get("is_active", False)),
            name=data.get("name", ""),
            cpi_base_year=cpi.get("base_year"),
            vat_percentage=vat.get("percentage"),
            last_update=last_update,
            record_id=str(record_id) if record_id is not None else None,
        )


def default_base_parameters(as_of: date) -> BaseParameters:
    """Parameters installed when no record exists yet."""
    return BaseParameters(
        name="main parameters",
        is_active=True,
        consumer_price_index=Decimal("100"),
        cpi_base_year=as_of.year,
        currency_rates={USD: Decimal("3.6"), EUR: Decimal("4.0")},
        vat_percentage=Decimal("17"),
        last_update=as_of,
    )
