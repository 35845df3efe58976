import argparse
from pathlib import Path

from ledger.config import ReportConfig
from ledger.pipeline import build_ledger_report
from ledger.report import build_pdf_report, report_filename
from ledger.snapshot import load_snapshot


def main(argv=None):
    parser = argparse.ArgumentParser(description="Build the print-shop financial report from an exported snapshot.")
    parser.add_argument("input", type=Path, help="CSV, Excel or JSON export of orders or transactions")
    parser.add_argument("--source", choices=["order", "transaction"], default="order")
    parser.add_argument("--out-dir", type=Path, default=Path("."))
    parser.add_argument("--no-pdf", action="store_true", help="print the summary only")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    config = ReportConfig.from_env()
    snapshot = load_snapshot(args.input)
    result = build_ledger_report(snapshot, args.source, config=config, debug=args.debug)

    print("=== SUMMARY ===")
    for line in result["document"].header_lines:
        print(line)
    if result["skipped_count"]:
        print(f"Skipped records: {result['skipped_count']}")

    print("\n=== MONTHLY SERIES (for charts) ===")
    for point in result["chart_series"]:
        print(f"{point.display_label}: income={point.income} expense={point.expense} profit={point.profit}")

    if not args.no_pdf:
        args.out_dir.mkdir(parents=True, exist_ok=True)
        out_path = args.out_dir / report_filename()
        out_path.write_bytes(build_pdf_report(result["document"]))
        print(f"\nReport written to {out_path}")


if __name__ == "__main__":
    main()
