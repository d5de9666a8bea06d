import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Any, Optional

from folio_ocr.detect_agency import detect_agency
from folio_ocr.errors import FolioOcrError
from folio_ocr.ledger import write_ledger_csv
from folio_ocr.mapping import extract, select_strategy
from folio_ocr.ocr.classes import OcrProfile
from folio_ocr.ocr.document import load_document_text
from folio_ocr.ocr.model_settings import OCR_PROFILES, DEFAULT_SETTINGS
from folio_ocr.registry import PropertyRecord, PropertyRegistry, DEFAULT_REGISTRY, load_registry
from folio_ocr.validator import validate


def document_property(text: str, registry: PropertyRegistry) -> Optional[PropertyRecord]:
    """Property the whole document belongs to, by a registered ABN (registries without ABNs: None)."""
    find_by_abn = getattr(registry, "find_by_abn", None)
    return find_by_abn(text) if find_by_abn else None


def process_document(
    path: str,
    registry: PropertyRegistry = DEFAULT_REGISTRY,
    profile: OcrProfile = DEFAULT_SETTINGS,
    out_dir: Optional[Path] = Path("results_audit"),
    verbose_report: bool = True,
) -> Dict[str, Any]:
    """Single document: load text (OCR) -> extract -> (optional) artifacts -> validate."""
    text = load_document_text(path, profile)
    strategy = select_strategy(text)
    data = extract(text, registry)
    agency = detect_agency(text)
    owner = document_property(text, registry)

    n_items = sum(len(p.line_items) for p in data.properties)
    detected = f"{agency.code} conf {agency.confidence:.2f}" if agency.code else "no letterhead match"
    print(f"🏢 {Path(path).name}: {strategy.name} ({detected}) | agency={data.agency_name} | folio={data.folio_number} "
          f"| {len(data.properties)} properties, {n_items} line items")
    if owner is not None:
        print(f"🏷️  ABN matches {owner.identifier} ({owner.display_name})")

    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)
        stem = Path(path).stem
        # 1) plain text the parser saw
        (out_dir / f"{stem}_ocr_dump.txt").write_text(text, encoding="utf-8")
        # 2) structured result (downstream shape)
        with open(out_dir / f"{stem}_structured.json", "w", encoding="utf-8") as f:
            json.dump(data.to_dict(), f, ensure_ascii=False, indent=2)
        # 3) ledger rows for the accounting import
        write_ledger_csv(data, out_dir / f"{stem}_ledger.csv")

    report = validate(data, verbose=verbose_report)
    return {
        "file": str(path),
        "strategy": strategy.name,
        "agency": agency._asdict(),
        "abn_property": owner.identifier if owner is not None else None,
        "data": data.to_dict(),
        "validation": report,
    }


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="folio-ocr",
        description="Extract properties, line items and totals from letting-agency folio statements.",
    )
    ap.add_argument("files", nargs="+", help="Statement images (.png/.jpg/...) or OCR text dumps (.txt)")
    ap.add_argument("--properties", help="Property directory (CSV or JSON: id,name,address,abn)")
    ap.add_argument("--profile", choices=sorted(OCR_PROFILES), default="default", help="OCR preprocessing profile")
    ap.add_argument("--out", default="results_audit", help="Artifact directory (default: results_audit)")
    ap.add_argument("--no-artifacts", action="store_true", help="Do not write dump/JSON/CSV artifacts")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    registry = DEFAULT_REGISTRY
    if args.properties:
        try:
            registry = load_registry(args.properties)
        except (ValueError, OSError) as e:
            print(f"❌ Property directory {args.properties}: {e}")
            return 1
    profile = OCR_PROFILES[args.profile]
    out_dir = None if args.no_artifacts else Path(args.out)

    failed = 0
    for path in args.files:
        try:
            process_document(path, registry=registry, profile=profile, out_dir=out_dir)
        except FolioOcrError as e:
            failed += 1
            print(f"❌ {path}: {e}")
        except OSError as e:
            failed += 1
            print(f"❌ {path}: could not read file ({e})")

    if out_dir is not None and failed < len(args.files):
        print(f"\n✅ Artifacts saved to {out_dir}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
