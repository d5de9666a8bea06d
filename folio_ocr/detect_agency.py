# detect_agency.py
# Which agency printed the folio, scored by letterhead pattern hits.
# Reported next to the chosen strategy; strategy selection itself stays
# with the predicates in mapping.py.

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from folio_ocr.constants import AGENCY_PATTERNS

_COMPILED = {
    code: [re.compile(p, re.IGNORECASE) for p in patterns]
    for code, patterns in AGENCY_PATTERNS.items()
}


class AgencyMatch(NamedTuple):
    code: Optional[str]
    confidence: float
    hits: int


NO_MATCH = AgencyMatch(None, 0.0, 0)


def detect_agency(text: str) -> AgencyMatch:
    """
    Best-scoring agency for the text.
    confidence = share of the agency's patterns found, +0.15 once two or more hit.
    """
    best = NO_MATCH
    if not text:
        return best
    for code, patterns in _COMPILED.items():
        hits = sum(1 for p in patterns if p.search(text))
        if not hits:
            continue
        confidence = round(hits / len(patterns) + (0.15 if hits >= 2 else 0.0), 2)
        if confidence > best.confidence:
            best = AgencyMatch(code, confidence, hits)
    return best
