# mapping.py
# Ordered strategy list: specific agencies first, generic fallback last.
# First strategy whose predicate accepts the text parses it.

from __future__ import annotations

import logging
from typing import Callable, NamedTuple, Optional

from folio_ocr.models import ExtractedData
from folio_ocr.registry import PropertyRegistry, DEFAULT_REGISTRY
from folio_ocr.parsers import horizon, generic

logger = logging.getLogger(__name__)


class Strategy(NamedTuple):
    name: str
    can_parse: Callable[[str], bool]
    parse: Callable[[str, Optional[PropertyRegistry]], ExtractedData]


HORIZON = Strategy(horizon.NAME, horizon.can_parse, horizon.parse_statement)
GENERIC = Strategy(generic.NAME, generic.can_parse, generic.parse_statement)

STRATEGIES: tuple[Strategy, ...] = (
    HORIZON,
    GENERIC,   # always matches; keep last
)


def select_strategy(text: str) -> Strategy:
    for strategy in STRATEGIES:
        if strategy.can_parse(text):
            return strategy
    return GENERIC


def extract(raw_text: str, registry: Optional[PropertyRegistry] = None) -> ExtractedData:
    """
    OCR text of one folio statement -> ExtractedData.
    Never raises on content: whatever cannot be read is left unset.
    """
    text = "" if raw_text is None else str(raw_text)
    if registry is None:
        registry = DEFAULT_REGISTRY

    strategy = select_strategy(text)
    logger.debug("Strategy: %s", strategy.name)

    result = strategy.parse(text, registry)
    logger.debug(
        "Parsed %d propert%s, totals in=%s out=%s",
        len(result.properties), "y" if len(result.properties) == 1 else "ies",
        result.total_money_in, result.total_money_out,
    )
    return result
