# horizon.py
# Horizon Housing Realty owner statements.
# - Header: "Folio: OWN05518", "From: 1/07/2023", "To: 30/06/2024" (numeric dates only)
# - Property blocks open on a known property, or an address after "Property:" / "Purchase"
# - Table columns: [Account] [Included Tax] [Money Out] [Money In]

from __future__ import annotations

from typing import Optional

from folio_ocr.amounts import find_amounts, clean_amount
from folio_ocr.classify import (
    LineKind, classify_line, read_folio, read_labeled_date, match_property,
)
from folio_ocr.constants import HORIZON_AGENCY_NAME
from folio_ocr.items import extract_line_item, AGENCY_COLUMNS
from folio_ocr.lang import HORIZON_PROPERTY_MARKERS
from folio_ocr.models import ExtractedData
from folio_ocr.registry import PropertyRegistry
from folio_ocr.sections import ScanState, scan_lines
from folio_ocr.summary import reconcile_summary


NAME = "Horizon Housing"


def can_parse(text: str) -> bool:
    return "horizon housing" in (text or "").lower()


def _step(registry: Optional[PropertyRegistry]):
    def step(state: ScanState, index: int, line: str) -> ScanState:
        lower = line.lower()

        # ----------------------------
        # Header
        # ----------------------------
        state.set_folio(read_folio(line, lower, strict=True))
        state.set_period_from(read_labeled_date(line, "from", allow_text=False))
        state.set_period_to(read_labeled_date(line, "to", allow_text=False))

        # ----------------------------
        # Property context
        # ----------------------------
        name = match_property(line, lower, index, registry, HORIZON_PROPERTY_MARKERS)
        if name:
            state.enter_property(name)
            return state

        # ----------------------------
        # Summaries & line items
        # ----------------------------
        tokens = find_amounts(line)
        if not tokens:
            return state
        amounts = [clean_amount(t) for t in tokens]

        if classify_line(line, tokens) is LineKind.SUMMARY:
            if reconcile_summary(state, line, lower, amounts):
                return state

        extract_line_item(state, line, lower, amounts, columns=AGENCY_COLUMNS)
        return state

    return step


def parse_statement(text: str, registry: Optional[PropertyRegistry] = None) -> ExtractedData:
    state = ScanState(agency_name=HORIZON_AGENCY_NAME)
    state = scan_lines(text, _step(registry), state)
    return state.to_extracted(text)
