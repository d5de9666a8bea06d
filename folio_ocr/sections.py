# sections.py
# Accumulator threaded through the line scan: header fields, the ordered
# property sections, the "current property" pointer and document totals.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, List

from folio_ocr.constants import UNCATEGORIZED
from folio_ocr.models import PropertySection, ExtractedData, StatementPeriod

logger = logging.getLogger(__name__)


@dataclass
class ScanState:
    agency_name: Optional[str] = None
    folio_number: Optional[str] = None
    period_from: Optional[str] = None
    period_to: Optional[str] = None
    sections: List[PropertySection] = field(default_factory=list)
    current: Optional[PropertySection] = None
    total_money_in: Optional[str] = None
    total_money_out: Optional[str] = None

    # -- header fields: first value wins --

    def set_agency(self, value: Optional[str]) -> None:
        if value and not self.agency_name:
            self.agency_name = value

    def set_folio(self, value: Optional[str]) -> None:
        if value and not self.folio_number:
            self.folio_number = value

    def set_period_from(self, value: Optional[str]) -> None:
        if value and not self.period_from:
            self.period_from = value

    def set_period_to(self, value: Optional[str]) -> None:
        if value and not self.period_to:
            self.period_to = value

    # -- sections --

    def section(self, name: str) -> PropertySection:
        """Get-or-create by display name (never duplicates)."""
        for sec in self.sections:
            if sec.property_name == name:
                return sec
        sec = PropertySection(property_name=name)
        self.sections.append(sec)
        logger.debug("New property section: %r", name)
        return sec

    def enter_property(self, name: str) -> PropertySection:
        self.current = self.section(name)
        return self.current

    def active_section(self) -> PropertySection:
        """Current section, lazily falling back to the Uncategorized bucket."""
        if self.current is None:
            self.current = self.section(UNCATEGORIZED)
        return self.current

    # -- finish --

    def backfill(self) -> None:
        """A single-property folio is fully described by its document totals."""
        if len(self.sections) != 1:
            return
        sec = self.sections[0]
        if not sec.subtotal_money_in and self.total_money_in:
            sec.subtotal_money_in = self.total_money_in
        if not sec.subtotal_money_out and self.total_money_out:
            sec.subtotal_money_out = self.total_money_out

    def to_extracted(self, raw_text: str) -> ExtractedData:
        return ExtractedData(
            agency_name=self.agency_name,
            folio_number=self.folio_number,
            statement_period=StatementPeriod(date_from=self.period_from, date_to=self.period_to),
            properties=self.sections,
            total_money_in=self.total_money_in,
            total_money_out=self.total_money_out,
            raw_text=raw_text,
        )


def scan_lines(text: str, step, state: ScanState) -> ScanState:
    """
    Fold `step(state, index, line) -> state` over the raw lines, top to bottom,
    then backfill. Indices count raw lines (blank ones included).
    """
    for index, raw in enumerate((text or "").splitlines()):
        line = raw.strip()
        if not line:
            continue
        state = step(state, index, line)
    state.backfill()
    return state
