# registry.py
# Property directory lookup. The parser only ever asks one question:
# "does this text name a property we manage?"

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List, Iterable, Protocol

import pandas as pd

logger = logging.getLogger(__name__)

ABN_RE = re.compile(r"\b\d{2}\s?\d{3}\s?\d{3}\s?\d{3}\b")


@dataclass(frozen=True)
class PropertyRecord:
    id: str
    name: str
    address: str
    abn: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.address

    @property
    def identifier(self) -> str:
        return self.id


class PropertyRegistry(Protocol):
    def find_by_address_or_name(self, text: str) -> Optional[PropertyRecord]:
        ...


def normalise_abn(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    digits = re.sub(r"\D", "", str(value))
    return digits if len(digits) == 11 else None


class StaticPropertyRegistry:
    """Read-only, in-memory property directory."""

    def __init__(self, records: Iterable[PropertyRecord]):
        self._records: List[PropertyRecord] = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def find_by_address_or_name(self, text: str) -> Optional[PropertyRecord]:
        """Address or name contained in the text (case-insensitive)."""
        if not text:
            return None
        low = text.lower()
        for rec in self._records:
            if rec.address and rec.address.lower() in low:
                return rec
            if rec.name and rec.name.lower() in low:
                return rec
        return None

    def find_by_abn(self, text: str) -> Optional[PropertyRecord]:
        """First registered ABN anywhere in the text; applied to whole documents, not lines."""
        for m in ABN_RE.finditer(text or ""):
            abn = normalise_abn(m.group(0))
            for rec in self._records:
                if abn and normalise_abn(rec.abn) == abn:
                    return rec
        return None


DEFAULT_PROPERTIES = [
    PropertyRecord(
        id="prop_1",
        name="123 George St, Sydney",
        address="123 George St, Sydney NSW 2000",
        abn="12 345 678 901",
    ),
    PropertyRecord(
        id="prop_2",
        name="456 Smith St, Melbourne",
        address="456 Smith St, Melbourne VIC 3000",
        abn="98 765 432 109",
    ),
]

DEFAULT_REGISTRY = StaticPropertyRegistry(DEFAULT_PROPERTIES)


def load_registry(path: str | Path) -> StaticPropertyRegistry:
    """
    Load a property directory from CSV or JSON (records orient).
    Expected columns: id, name, address, abn (abn optional).
    """
    path = Path(path)
    if path.suffix.lower() == ".json":
        df = pd.read_json(path, orient="records", dtype=False)
    else:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)

    missing = {"name", "address"} - set(df.columns)
    if missing:
        raise ValueError(f"Property directory {path.name} is missing columns: {sorted(missing)}")

    df = df.fillna("")
    records = []
    for idx, row in df.iterrows():
        records.append(PropertyRecord(
            id=str(row.get("id") or f"prop_{idx + 1}"),
            name=str(row["name"]).strip(),
            address=str(row["address"]).strip(),
            abn=str(row.get("abn") or "").strip() or None,
        ))
    logger.debug("Loaded %d properties from %s", len(records), path)
    return StaticPropertyRegistry(records)
