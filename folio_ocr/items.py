# items.py
# Transaction lines -> LineItem. Amount roles depend on the column
# convention of the strategy in use.

from __future__ import annotations

import logging
from typing import List, Optional

from folio_ocr.amounts import strip_amounts, to_float
from folio_ocr.classify import find_address, has_alpha
from folio_ocr.lang import ITEM_INCOME_RE
from folio_ocr.models import LineItem
from folio_ocr.sections import ScanState

logger = logging.getLogger(__name__)

# Column conventions
AGENCY_COLUMNS = "agency"     # [desc] [tax] [out] [in]
GENERIC_COLUMNS = "generic"   # [desc] ... [tax?] [amount]


def is_income_line(lower: str) -> bool:
    return bool(ITEM_INCOME_RE.search(lower))


def assign_agency_columns(lower: str, amounts: List[str]) -> LineItem:
    item = LineItem(description="")
    if len(amounts) >= 3:
        item.included_tax, item.money_out, item.money_in = amounts[0], amounts[1], amounts[2]
    elif len(amounts) == 2:
        if is_income_line(lower):
            item.money_out, item.money_in = amounts[0], amounts[1]
        else:
            item.included_tax, item.money_out = amounts[0], amounts[1]
    elif is_income_line(lower):
        item.money_in = amounts[0]
    else:
        item.money_out = amounts[0]
    return item


def assign_generic_columns(lower: str, amounts: List[str]) -> LineItem:
    primary = amounts[-1]
    item = LineItem(description="")
    if len(amounts) > 1:
        # a tax column is always smaller than the amount it is included in
        tax, total = to_float(amounts[-2]), to_float(primary)
        if tax is not None and total is not None and tax < total:
            item.included_tax = amounts[-2]
    if is_income_line(lower):
        item.money_in = primary
    else:
        item.money_out = primary
    return item


def clean_description(line: str) -> str:
    return strip_amounts(line)


def extract_line_item(
    state: ScanState,
    line: str,
    lower: str,
    amounts: List[str],
    columns: str = GENERIC_COLUMNS,
) -> Optional[LineItem]:
    """Append the line's item to the right section; None if the line was noise."""
    if not amounts:
        return None
    description = clean_description(line)
    if not has_alpha(description):
        logger.debug("Dropping numeric-only line: %r", line)
        return None

    if columns == AGENCY_COLUMNS:
        item = assign_agency_columns(lower, amounts)
    else:
        item = assign_generic_columns(lower, amounts)
    item.description = description

    target = state.active_section()
    if columns == GENERIC_COLUMNS:
        # an address repeated inside the table belongs to that property
        address = find_address(description)
        if address:
            target = state.section(address)

    target.line_items.append(item)
    return item
