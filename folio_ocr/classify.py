# classify.py
# Structural role of a single statement line, decided before any amount
# is given a meaning: header field, property marker, agency name,
# summary, transaction or noise.

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, List, Iterable

from folio_ocr.amounts import find_amounts
from folio_ocr.constants import AGENCY_NAME_WINDOW, EARLY_ADDRESS_WINDOW
from folio_ocr.lang import (
    SUMMARY_KEYWORDS, GLOBAL_SUMMARY_KEYWORDS, TAX_KEYWORDS, FOLIO_LABELS,
    CONTACT_MARKERS, STREET_TYPES, MONTH_NAMES,
)
from folio_ocr.registry import PropertyRegistry


# ----------------------------
# Regexes
# ----------------------------

# street type must be a whole word: "interest" is not "St", "forward" is not "Rd"
ADDRESS_RE = re.compile(r"\d+[\w\s]+\b(?:" + "|".join(STREET_TYPES) + r")\b", re.IGNORECASE)

DATE_NUM = r"\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}"
DATE_NUM_LOOSE = DATE_NUM + r"|\d{6,8}"          # "1072023" = 1/07/2023
DATE_TEXT = r"\d{1,2}\s+(?:" + "|".join(MONTH_NAMES) + r")\s+\d{2,4}"

STANDALONE_DATE_RE = re.compile(
    r"^(\d{1,2}\s+(?:" + "|".join(MONTH_NAMES) + r")\s+\d{4})$", re.IGNORECASE
)
ALPHA_RE = re.compile(r"[A-Za-z]")


class LineKind(Enum):
    NOISE = "noise"              # blank / no letters and no amounts
    TEXT = "text"                # words, no amounts
    SUMMARY = "summary"          # keyword or >= 3 amounts
    TRANSACTION = "transaction"  # anything else carrying amounts


# ----------------------------
# Keyword helpers
# ----------------------------

def _contains_any(lower: str, words: Iterable[str]) -> bool:
    return any(w in lower for w in words)


def _has_marker(lower: str, markers: Iterable[str]) -> bool:
    # markers must start a word: "re:" is not "signature:"
    return any(re.search(r"(?<![a-z])" + re.escape(m), lower) for m in markers)


def has_alpha(text: str) -> bool:
    return bool(ALPHA_RE.search(text or ""))


def has_summary_keyword(lower: str) -> bool:
    return _contains_any(lower, SUMMARY_KEYWORDS)


def mentions_tax(lower: str) -> bool:
    return _contains_any(lower, TAX_KEYWORDS)


def is_global_summary(lower: str) -> bool:
    """Document-level wording; a line starting with 'total' counts unless it is about tax."""
    if _contains_any(lower, GLOBAL_SUMMARY_KEYWORDS):
        return True
    return lower.startswith("total") and not mentions_tax(lower)


def classify_line(line: str, amounts: Optional[List[str]] = None) -> LineKind:
    text = (line or "").strip()
    if not text:
        return LineKind.NOISE
    if amounts is None:
        amounts = find_amounts(text)
    if not amounts:
        return LineKind.TEXT if has_alpha(text) else LineKind.NOISE
    if has_summary_keyword(text.lower()) or len(amounts) >= 3:
        return LineKind.SUMMARY
    return LineKind.TRANSACTION


# ----------------------------
# Header fields
# ----------------------------

def read_folio(line: str, lower: str, strict: bool = False) -> Optional[str]:
    """
    strict=True  -> only 'Folio:' labels, value is everything after the label
    strict=False -> folio / fol: / reference / ref:, value is the text after the first ':' or '#'
    """
    if strict:
        if "folio:" not in lower:
            return None
        parts = re.split(r"folio:?", line, maxsplit=1, flags=re.IGNORECASE)
    else:
        if not _contains_any(lower, FOLIO_LABELS):
            return None
        parts = re.split(r"[:#]", line)
    if len(parts) < 2:
        return None
    return parts[1].strip() or None


def read_labeled_date(line: str, label: str, allow_text: bool = True) -> Optional[str]:
    """'From: 1/07/2023' -> '1/07/2023' (verbatim; never normalised)."""
    if f"{label}:" not in line.lower():
        return None
    numeric = DATE_NUM_LOOSE if allow_text else DATE_NUM
    m = re.search(rf"{label}:?\s*({numeric})", line, re.IGNORECASE)
    if m:
        return m.group(1)
    if allow_text:
        m = re.search(rf"{label}:?\s*({DATE_TEXT})", line, re.IGNORECASE)
        if m:
            return m.group(1)
    return None


def read_standalone_date(line: str) -> Optional[str]:
    m = STANDALONE_DATE_RE.match(line.strip())
    return m.group(1) if m else None


def agency_candidate(line: str, index: int) -> Optional[str]:
    """Early, letter-bearing line that is not the document title."""
    if index >= AGENCY_NAME_WINDOW:
        return None
    text = line.strip()
    low = text.lower()
    if "invoice" in low or "statement" in low:
        return None
    letters = len(re.sub(r"[^A-Za-z]", "", text))
    if len(text) < 4 or letters < 3:
        return None
    return text


# ----------------------------
# Property markers
# ----------------------------

def find_address(text: str) -> Optional[str]:
    m = ADDRESS_RE.search(text or "")
    return m.group(0).strip() if m else None


def match_property(
    line: str,
    lower: str,
    index: int,
    registry: Optional[PropertyRegistry],
    markers: Iterable[str],
    implicit: bool = False,
) -> Optional[str]:
    """
    Display name of the property this line introduces, or None.

    Known properties always win. A bare street address needs an explicit
    marker ('property:', 're:', ...). With implicit=True an unmarked
    address is also accepted when it sits past the letterhead, carries no
    amount and is not a contact line.
    """
    if registry is not None:
        rec = registry.find_by_address_or_name(line)
        if rec is not None:
            return rec.display_name

    address = find_address(line)
    if not address:
        return None
    if _has_marker(lower, markers):
        return address
    if not implicit:
        return None
    if find_amounts(line) or _contains_any(lower, CONTACT_MARKERS):
        return None
    if index < EARLY_ADDRESS_WINDOW:
        return None
    return address
