import pytest

from folio_ocr.amounts import (
    find_amounts, clean_amount, find_clean_amounts, add_amounts, is_balanced,
    same_amount, strip_amounts, to_float,
)


@pytest.mark.parametrize("token", ["$1,291.84", "1291.84", " 1291.84 ", "$ 1,291.84"])
def test_clean_amount_canonical(token):
    assert clean_amount(token) == "1291.84"


def test_find_amounts_left_to_right():
    assert find_amounts("Management Fee 123.45 $1,291.84") == ["123.45", "$1,291.84"]


def test_dollar_amount_without_decimals():
    assert find_clean_amounts("Bond lodged $200") == ["200"]


@pytest.mark.parametrize("line", [
    "Financial year 2023",
    "Ph: 0433101353",
    "ABN 12 345 678 901",
    "From: 1.07.2023",
    "Postcode 4000",
])
def test_bare_numbers_are_not_amounts(line):
    assert find_amounts(line) == []


def test_strip_amounts_collapses_whitespace():
    assert strip_amounts("Management   Fee 123.45   1291.84") == "Management Fee"


def test_add_amounts():
    assert add_amounts(None, "10.5") == "10.5"
    assert add_amounts("100.00", "10.25") == "110.25"


def test_is_balanced_tolerance():
    assert is_balanced("1000.00", "250.00", "750.04")
    assert not is_balanced("1000.00", "250.00", "751.00")


def test_same_amount_and_to_float():
    assert same_amount("1291.8", "1291.80")
    assert not same_amount("1291.84", None)
    assert to_float("abc") is None
