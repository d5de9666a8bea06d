import pytest

from folio_ocr.registry import PropertyRecord, StaticPropertyRegistry

HORIZON_TEXT = """Horizon Housing Realty Ltd
Folio: OWN05518
123 George St, Sydney NSW 2000
Rent 14680.00
Management Fee 123.45 1291.84
Total 14680.00 1291.84
"""

GENERIC_TEXT = """One Coronis Real Estate
PO Box 12, Brisbane QLD 4000 Ph: 07 3333 4444
Tax Invoice / Statement
Folio: FOL-2291
From: 1/07/2023 To: 30/06/2024





Property: 14 Hurley Street, Toowong
Rent received 2,400.00
Water usage 12.00 132.00
Subtotal 2,400.00 132.00
22 Smith Road Ashgrove
Rent received 1,800.00
Subtotal 1,800.00 450.00
Grand Total 4,200.00 582.00
"""


@pytest.fixture
def registry():
    return StaticPropertyRegistry([
        PropertyRecord(
            id="prop_1",
            name="123 George St, Sydney",
            address="123 George St, Sydney NSW 2000",
            abn="12 345 678 901",
        ),
    ])


@pytest.fixture
def horizon_text():
    return HORIZON_TEXT


@pytest.fixture
def generic_text():
    return GENERIC_TEXT
