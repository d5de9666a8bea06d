from folio_ocr.mapping import extract, select_strategy, STRATEGIES
from folio_ocr.models import ExtractedData, PropertySection, LineItem, StatementPeriod
from folio_ocr.registry import PropertyRecord, StaticPropertyRegistry, load_registry

__all__ = [
    "extract", "select_strategy", "STRATEGIES",
    "ExtractedData", "PropertySection", "LineItem", "StatementPeriod",
    "PropertyRecord", "StaticPropertyRegistry", "load_registry",
]
