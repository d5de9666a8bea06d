# validator.py
# Audit report for one parsed folio:
#   - per property: parsed line items vs printed subtotal
#   - document: summed subtotals vs folio totals
# Item/subtotal gaps are informational (unrecognised lines are expected).

import math
from typing import Dict, Any, Optional

import pandas as pd

from folio_ocr.amounts import to_float
from folio_ocr.constants import ABS_TOL
from folio_ocr.ledger import to_ledger_frame
from folio_ocr.models import ExtractedData


# ----------------------------
# Small helpers
# ----------------------------
def _fmt(x):
    return "None" if x is None else f"{float(x):.2f}"


def _cmp(a, b):
    """
    Compare with tolerance; return (delta = b - a, ok)
    If either is None, returns (None, None).
    """
    if a is None or b is None:
        return None, None
    d = round(float(b) - float(a), 2)
    return d, math.isclose(float(a), float(b), abs_tol=ABS_TOL)


def _item_sums(frame: pd.DataFrame) -> Dict[str, Dict[str, float]]:
    if frame.empty:
        return {}
    sums = frame.groupby("Property", sort=False)[["Money In", "Money Out"]].sum(min_count=0)
    return {
        name: {"in": round(float(row["Money In"]), 2), "out": round(float(row["Money Out"]), 2)}
        for name, row in sums.iterrows()
    }


# ----------------------------
# Validation
# ----------------------------
def validate(data: ExtractedData, verbose: bool = True) -> Dict[str, Any]:
    """Print a readable report and return it as a dict."""
    def say(msg: str) -> None:
        if verbose:
            print(msg)

    ident = data.folio_number or data.agency_name or "<unnamed>"
    say(f"\n=== VALIDATION (folio) for: {ident} ===")

    sums = _item_sums(to_ledger_frame(data))
    report: Dict[str, Any] = {
        "agency_name": data.agency_name,
        "folio_number": data.folio_number,
        "properties": {},
        "totals": {},
        "ok": True,
    }

    sub_in_total, sub_out_total = 0.0, 0.0
    all_subtotals = bool(data.properties)

    for section in data.properties:
        name = section.property_name
        s = sums.get(name, {"in": 0.0, "out": 0.0})
        sub_in = to_float(section.subtotal_money_in)
        sub_out = to_float(section.subtotal_money_out)
        say(f"\n{name} ({len(section.line_items)} line items)")

        d_in, ok_in = _cmp(sub_in, s["in"])
        d_out, ok_out = _cmp(sub_out, s["out"])
        if sub_in is None:
            say(f"  ⚪ Money in:  no subtotal (items {_fmt(s['in'])})")
        else:
            say(f"  {'✅' if ok_in else 'ℹ️'} Money in:  subtotal {_fmt(sub_in)} vs item-sum {_fmt(s['in'])}  Δ {_fmt(d_in)}")
        if sub_out is None:
            say(f"  ⚪ Money out: no subtotal (items {_fmt(s['out'])})")
        else:
            say(f"  {'✅' if ok_out else 'ℹ️'} Money out: subtotal {_fmt(sub_out)} vs item-sum {_fmt(s['out'])}  Δ {_fmt(d_out)}")

        if sub_in is None or sub_out is None:
            all_subtotals = False
        else:
            sub_in_total += sub_in
            sub_out_total += sub_out

        report["properties"][name] = {
            "line_items": len(section.line_items),
            "item_sums": s,
            "subtotals": {"in": sub_in, "out": sub_out},
            "items_match_subtotals": bool(ok_in) and bool(ok_out),
        }

    tot_in = to_float(data.total_money_in)
    tot_out = to_float(data.total_money_out)
    say("\nFolio totals")
    if tot_in is None and tot_out is None:
        say("  ⚪ Totals: missing values")

    ok = True
    if all_subtotals:
        sub_in_total, sub_out_total = round(sub_in_total, 2), round(sub_out_total, 2)
        for label, total, summed in (("Money in ", tot_in, sub_in_total), ("Money out", tot_out, sub_out_total)):
            if total is None:
                continue
            d, match = _cmp(total, summed)
            say(f"  {'✅' if match else '❌'} {label}: total {_fmt(total)} vs subtotal-sum {_fmt(summed)}  Δ {_fmt(d)}")
            ok = ok and bool(match)
    else:
        say(f"  ℹ️  Totals: in {_fmt(tot_in)} / out {_fmt(tot_out)} (not every property has subtotals)")

    net: Optional[float] = None
    if tot_in is not None and tot_out is not None:
        net = round(tot_in - tot_out, 2)
        say(f"  ✅ Net to owner: {_fmt(net)}")

    report["totals"] = {
        "in": tot_in,
        "out": tot_out,
        "net": net,
        "subtotal_sum": {"in": sub_in_total, "out": sub_out_total} if all_subtotals else None,
    }
    report["ok"] = ok
    return report
