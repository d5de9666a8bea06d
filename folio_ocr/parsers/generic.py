# generic.py
# Fallback for any agency we have no dedicated rules for.
# - Agency name: first sensible line of the letterhead
# - Folio / reference, From: / To: / Settlement Date: (numeric or "21 July 2023")
# - Properties: known properties, marked addresses, or bare addresses past the letterhead
# - Line items: last amount is the amount, the one before it may be included tax

from __future__ import annotations

from typing import Optional

from folio_ocr.amounts import find_amounts, clean_amount
from folio_ocr.classify import (
    LineKind, classify_line, agency_candidate, read_folio, read_labeled_date,
    read_standalone_date, match_property,
)
from folio_ocr.items import extract_line_item, GENERIC_COLUMNS
from folio_ocr.lang import EXPLICIT_PROPERTY_MARKERS
from folio_ocr.models import ExtractedData
from folio_ocr.registry import PropertyRegistry
from folio_ocr.sections import ScanState, scan_lines
from folio_ocr.summary import reconcile_summary


NAME = "Generic Real Estate"


def can_parse(text: str) -> bool:
    return True


def _read_header(state: ScanState, index: int, line: str, lower: str) -> None:
    if not state.agency_name:
        state.set_agency(agency_candidate(line, index))

    state.set_folio(read_folio(line, lower))

    state.set_period_from(read_labeled_date(line, "from"))
    state.set_period_to(read_labeled_date(line, "to"))
    # settlement date closes the period when no "To:" was printed
    state.set_period_to(read_labeled_date(line, "settlement date"))
    # a lone "21 July 2023" is usually the invoice date
    state.set_period_from(read_standalone_date(line))


def _step(registry: Optional[PropertyRegistry]):
    def step(state: ScanState, index: int, line: str) -> ScanState:
        lower = line.lower()
        _read_header(state, index, line, lower)

        name = match_property(line, lower, index, registry, EXPLICIT_PROPERTY_MARKERS, implicit=True)
        if name:
            state.enter_property(name)
            return state

        tokens = find_amounts(line)
        if not tokens:
            return state
        amounts = [clean_amount(t) for t in tokens]

        if classify_line(line, tokens) is LineKind.SUMMARY:
            if reconcile_summary(state, line, lower, amounts):
                return state

        extract_line_item(state, line, lower, amounts, columns=GENERIC_COLUMNS)
        return state

    return step


def parse_statement(text: str, registry: Optional[PropertyRegistry] = None) -> ExtractedData:
    state = scan_lines(text, _step(registry), ScanState())
    return state.to_extracted(text)
