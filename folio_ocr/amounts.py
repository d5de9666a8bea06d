# amounts.py
# Monetary tokens in OCR lines.
# A token counts as money only if it is
#   - '$'-prefixed (decimals optional): $200, $ 1,291.84
#   - or symbol-free with exactly two decimals: 1291.84, 14,680.00
# Bare integers (years, phone numbers, ABNs) never qualify.

from __future__ import annotations

import re
from typing import Optional, List

from folio_ocr.constants import ABS_TOL

AMOUNT_RE = re.compile(
    r"""
    (?:
        \$\s*\d[\d,]*(?:\.\d{2})?(?!\.?\d)   # $-prefixed, decimals optional
      |
        (?<![\d.])\d[\d,]*\.\d{2}(?!\.?\d)   # no symbol: exactly two decimals
    )
    """,
    re.VERBOSE,
)

_CLEAN_RE = re.compile(r"[$,\s]")


def find_amounts(line: str) -> List[str]:
    """Raw monetary tokens, left to right."""
    if not line:
        return []
    return [m.group(0) for m in AMOUNT_RE.finditer(line)]


def clean_amount(token: str) -> str:
    """'$1,291.84' -> '1291.84' (drops the symbol, thousands separators and whitespace)."""
    return _CLEAN_RE.sub("", token or "")


def find_clean_amounts(line: str) -> List[str]:
    return [clean_amount(t) for t in find_amounts(line)]


def to_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def add_amounts(existing: Optional[str], value: str) -> str:
    """Accumulate onto an optional running amount; sums are rendered with two decimals."""
    if not existing:
        return value
    a, b = to_float(existing), to_float(value)
    if a is None or b is None:
        return value
    return f"{a + b:.2f}"


def same_amount(a: Optional[str], b: Optional[str]) -> bool:
    fa, fb = to_float(a), to_float(b)
    return fa is not None and fb is not None and fa == fb


def is_balanced(money_in: str, money_out: str, balance: str, tol: float = ABS_TOL) -> bool:
    """in - out == balance, within tolerance (absorbs OCR rounding noise)."""
    a, b, c = to_float(money_in), to_float(money_out), to_float(balance)
    if a is None or b is None or c is None:
        return False
    return abs(a - b - c) < tol


def strip_amounts(line: str) -> str:
    """Remove every monetary token and collapse whitespace."""
    return " ".join(AMOUNT_RE.sub("", line or "").split())
