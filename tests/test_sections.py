from folio_ocr.sections import ScanState


def test_section_creation_is_idempotent():
    state = ScanState()
    a = state.enter_property("7 Elm Street")
    state.enter_property("9 Oak Road")
    b = state.enter_property("7 Elm Street")
    assert a is b
    assert [s.property_name for s in state.sections] == ["7 Elm Street", "9 Oak Road"]


def test_header_fields_first_value_wins():
    state = ScanState()
    state.set_folio("OWN1")
    state.set_folio("OWN2")
    state.set_period_from(None)
    state.set_period_from("1/07/2023")
    state.set_period_from("2/07/2023")
    assert state.folio_number == "OWN1"
    assert state.period_from == "1/07/2023"


def test_backfill_single_property():
    state = ScanState(total_money_in="100.00", total_money_out="20.00")
    sec = state.enter_property("7 Elm Street")
    state.backfill()
    assert (sec.subtotal_money_in, sec.subtotal_money_out) == ("100.00", "20.00")


def test_backfill_keeps_existing_subtotal():
    state = ScanState(total_money_in="100.00", total_money_out="20.00")
    sec = state.enter_property("7 Elm Street")
    sec.subtotal_money_out = "5.00"
    state.backfill()
    assert (sec.subtotal_money_in, sec.subtotal_money_out) == ("100.00", "5.00")


def test_no_backfill_with_several_properties():
    state = ScanState(total_money_in="100.00", total_money_out="20.00")
    state.enter_property("7 Elm Street")
    state.enter_property("9 Oak Road")
    state.backfill()
    assert all(s.subtotal_money_in is None for s in state.sections)


def test_backfill_never_fills_totals_from_subtotals():
    state = ScanState()
    sec = state.enter_property("7 Elm Street")
    sec.subtotal_money_in = "100.00"
    state.backfill()
    assert state.total_money_in is None
