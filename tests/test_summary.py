from folio_ocr.sections import ScanState
from folio_ocr.summary import reconcile_summary


def _apply(state, line, amounts):
    return reconcile_summary(state, line, line.lower(), amounts)


def test_tax_lines_are_consumed_without_totals():
    state = ScanState()
    state.enter_property("7 Elm Street")
    assert _apply(state, "Total GST 12.00 132.00", ["12.00", "132.00"])
    assert _apply(state, "Total Tax 1.00 2.00 3.00", ["1.00", "2.00", "3.00"])
    assert state.total_money_in is None and state.total_money_out is None
    assert state.current.subtotal_money_in is None


def test_math_verified_line_is_document_level():
    state = ScanState()
    sec = state.enter_property("7 Elm Street")
    assert _apply(state, "Folio Summary 1,000.00 250.00 750.00", ["1000.00", "250.00", "750.00"])
    assert (state.total_money_in, state.total_money_out) == ("1000.00", "250.00")
    assert sec.subtotal_money_in is None and sec.subtotal_money_out is None


def test_unbalanced_triple_without_keyword_falls_through():
    state = ScanState()
    assert not _apply(state, "Repairs 10.00 110.00 5.00", ["10.00", "110.00", "5.00"])
    assert state.total_money_in is None


def test_section_subtotals_accumulate():
    state = ScanState()
    sec = state.enter_property("7 Elm Street")
    _apply(state, "Subtotal 100.00 10.00", ["100.00", "10.00"])
    _apply(state, "Subtotal 50.50 5.25", ["50.50", "5.25"])
    assert (sec.subtotal_money_in, sec.subtotal_money_out) == ("150.50", "15.25")
    assert state.total_money_in is None


def test_global_dual_overwrites_totals():
    state = ScanState()
    sec = state.enter_property("7 Elm Street")
    _apply(state, "Total 1.00 2.00", ["1.00", "2.00"])
    _apply(state, "Grand Total 14,680.00 1,291.84", ["14680.00", "1291.84"])
    assert (state.total_money_in, state.total_money_out) == ("14680.00", "1291.84")
    assert sec.subtotal_money_in is None


def test_dual_without_section_goes_to_document():
    state = ScanState()
    _apply(state, "Subtotal 300.00 40.00", ["300.00", "40.00"])
    assert (state.total_money_in, state.total_money_out) == ("300.00", "40.00")


def test_single_amount_keyword_context():
    state = ScanState()
    sec = state.enter_property("7 Elm Street")
    _apply(state, "Total Income 500.00", ["500.00"])
    _apply(state, "Subtotal 99.00", ["99.00"])
    assert (sec.subtotal_money_in, sec.subtotal_money_out) == ("500.00", "99.00")
    assert state.total_money_in is None and state.total_money_out is None


def test_single_amount_without_section():
    state = ScanState()
    _apply(state, "Total Expenses 300.00", ["300.00"])
    _apply(state, "Total Rent 800.00", ["800.00"])
    assert (state.total_money_in, state.total_money_out) == ("800.00", "300.00")


def test_single_amount_grand_total_sets_both():
    state = ScanState()
    sec = state.enter_property("7 Elm Street")
    _apply(state, "Grand Total Rent 800.00", ["800.00"])
    assert sec.subtotal_money_in == "800.00"
    assert state.total_money_in == "800.00"


def test_single_amount_matching_known_total():
    state = ScanState(total_money_in="1000.00", total_money_out="90.00")
    sec = state.enter_property("7 Elm Street")
    _apply(state, "Total Fees 1000.00", ["1000.00"])
    assert sec.subtotal_money_in == "1000.00"
    assert sec.subtotal_money_out is None
