from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.validators import optional_non_negative_decimal
from ..core.exceptions import ValidationError

# field name -> (XML element, camelCase alias accepted from the admin UI)
CHECK_MONEY_FIELDS = {
    "gross_wages": ("GrossWages", "grossWages"),
    "federal_tax": ("FederalTax", "federalTax"),
    "fica": ("FICA", "fica"),
    "state_tax": ("StateTax", "stateTax"),
    "sdi": ("SDI", "sdi"),
    "savings": ("Savings", "savings"),
    "net_total": ("NetTotal", "netTotal"),
}


@dataclass(frozen=True)
class CheckInformation:
    """Payroll check fields echoed into the DIR submission."""

    check_number: str
    gross_wages: Optional[Decimal] = None
    federal_tax: Optional[Decimal] = None
    fica: Optional[Decimal] = None
    state_tax: Optional[Decimal] = None
    sdi: Optional[Decimal] = None
    savings: Optional[Decimal] = None
    net_total: Optional[Decimal] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> Optional["CheckInformation"]:
        """Build from request JSON; returns None when no check field was filled in."""
        if not data:
            return None
        if not isinstance(data, Mapping):
            raise ValidationError("Check information must be an object")

        def pick(name: str, alias: str) -> Any:
            value = data.get(name)
            return data.get(alias) if value is None else value

        check_number = pick("check_number", "checkNumber")
        money = {
            name: optional_non_negative_decimal(pick(name, alias), element)
            for name, (element, alias) in CHECK_MONEY_FIELDS.items()
        }

        number = str(check_number).strip() if check_number is not None else ""
        if not number and all(v is None for v in money.values()):
            return None
        if not number:
            raise ValidationError("Check number is required when check information is supplied")
        return cls(check_number=number, **money)

    def money_items(self):
        for f in fields(self):
            if f.name in CHECK_MONEY_FIELDS:
                yield CHECK_MONEY_FIELDS[f.name][0], getattr(self, f.name)
