# models.py
# Structured result of one folio statement:
#   ExtractedData -> [PropertySection] -> [LineItem]
# Monetary fields are canonical decimal strings ("1291.84") or None.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


@dataclass
class LineItem:
    description: str
    included_tax: Optional[str] = None
    money_out: Optional[str] = None
    money_in: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "includedTax": self.included_tax,
            "moneyOut": self.money_out,
            "moneyIn": self.money_in,
        }


@dataclass
class PropertySection:
    property_name: str
    line_items: List[LineItem] = field(default_factory=list)
    subtotal_money_out: Optional[str] = None
    subtotal_money_in: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "propertyName": self.property_name,
            "lineItems": [item.to_dict() for item in self.line_items],
            "subtotalMoneyOut": self.subtotal_money_out,
            "subtotalMoneyIn": self.subtotal_money_in,
        }


@dataclass(frozen=True)
class StatementPeriod:
    # raw date strings, kept verbatim
    date_from: Optional[str] = None
    date_to: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"from": self.date_from, "to": self.date_to}


@dataclass(frozen=True)
class ExtractedData:
    agency_name: Optional[str] = None
    folio_number: Optional[str] = None
    statement_period: StatementPeriod = field(default_factory=StatementPeriod)
    properties: List[PropertySection] = field(default_factory=list)
    total_money_in: Optional[str] = None
    total_money_out: Optional[str] = None
    raw_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Downstream shape (stable camelCase keys, as rendered by the UI and correction form)."""
        return {
            "agencyName": self.agency_name,
            "folioNumber": self.folio_number,
            "statementPeriod": self.statement_period.to_dict(),
            "properties": [p.to_dict() for p in self.properties],
            "totalMoneyIn": self.total_money_in,
            "totalMoneyOut": self.total_money_out,
            "rawText": self.raw_text,
        }
