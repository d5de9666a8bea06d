# ledger.py
# Flatten an ExtractedData into ledger rows for the accounting import.

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import pandas as pd

from folio_ocr.amounts import to_float
from folio_ocr.lang import CATEGORY_KEYWORDS
from folio_ocr.models import ExtractedData, LineItem

LEDGER_COLUMNS = [
    "Property", "Description", "Category", "Type", "Included Tax", "Money In", "Money Out",
]


def categorise(description: str) -> str:
    low = (description or "").lower()
    for keyword, category in CATEGORY_KEYWORDS.items():
        if keyword in low:
            return category
    return "Uncategorized"


def classify_item(item: LineItem) -> Optional[Tuple[str, str]]:
    """('Income', amount) / ('Expense', amount) / None."""
    if item.money_in:
        return "Income", item.money_in
    if item.money_out:
        return "Expense", item.money_out
    return None


def to_ledger_frame(data: ExtractedData) -> pd.DataFrame:
    rows = []
    for section in data.properties:
        for item in section.line_items:
            kind = classify_item(item)
            rows.append({
                "Property": section.property_name,
                "Description": item.description,
                "Category": categorise(item.description),
                "Type": kind[0] if kind else None,
                "Included Tax": to_float(item.included_tax),
                "Money In": to_float(item.money_in),
                "Money Out": to_float(item.money_out),
            })
    df = pd.DataFrame(rows, columns=LEDGER_COLUMNS)
    for col in ("Included Tax", "Money In", "Money Out"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def write_ledger_csv(data: ExtractedData, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_ledger_frame(data).to_csv(path, index=False, float_format="%.2f")
    return path
