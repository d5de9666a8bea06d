# summary.py
# Subtotal / grand-total lines. Decides whether a summary line is a
# document-level folio summary or a property subtotal and routes its
# amounts accordingly.

from __future__ import annotations

import logging
from typing import List

from folio_ocr.amounts import add_amounts, is_balanced, same_amount
from folio_ocr.classify import has_summary_keyword, mentions_tax, is_global_summary
from folio_ocr.lang import SUMMARY_INCOME_RE
from folio_ocr.sections import ScanState

logger = logging.getLogger(__name__)


def reconcile_summary(state: ScanState, line: str, lower: str, amounts: List[str]) -> bool:
    """
    Apply a summary line to the scan state.
    `amounts` are canonical strings, left to right.
    Returns True if the line was consumed, False to treat it as a line item.
    """
    # 1) tax lines never feed a total
    if mentions_tax(lower):
        logger.debug("Skipping tax summary line: %r", line)
        return True

    # 2) in - out = balance  ->  authoritative folio summary
    # NOTE: a coincidental A - B = C row also lands here; tolerance is the only guard.
    if len(amounts) >= 3 and is_balanced(amounts[0], amounts[1], amounts[2]):
        state.total_money_in = amounts[0]
        state.total_money_out = amounts[1]
        logger.debug("Math-verified folio summary: in=%s out=%s", amounts[0], amounts[1])
        return True

    # 3) keyword summaries
    if not has_summary_keyword(lower):
        return False

    section = state.current
    is_global = is_global_summary(lower)

    if len(amounts) >= 2:
        money_in, money_out = amounts[-2], amounts[-1]
        if section is not None and not is_global:
            # subtotals may repeat across pages
            section.subtotal_money_in = add_amounts(section.subtotal_money_in, money_in)
            section.subtotal_money_out = add_amounts(section.subtotal_money_out, money_out)
            logger.debug("Subtotal for %r: in+=%s out+=%s", section.property_name, money_in, money_out)
        else:
            state.total_money_in = money_in
            state.total_money_out = money_out
            logger.debug("Document totals: in=%s out=%s", money_in, money_out)
        return True

    _apply_single_amount(state, lower, amounts[-1])
    return True


def _apply_single_amount(state: ScanState, lower: str, value: str) -> None:
    section = state.current
    is_income = bool(SUMMARY_INCOME_RE.search(lower))

    # a value we already know as a document total keeps that role
    if same_amount(value, state.total_money_in):
        if section is not None:
            section.subtotal_money_in = value
        else:
            state.total_money_in = value
        return
    if same_amount(value, state.total_money_out):
        if section is not None:
            section.subtotal_money_out = value
        else:
            state.total_money_out = value
        return

    if section is not None:
        if is_income:
            section.subtotal_money_in = value
        else:
            section.subtotal_money_out = value

    if section is None or "grand total" in lower:
        if is_income:
            state.total_money_in = value
        else:
            state.total_money_out = value
