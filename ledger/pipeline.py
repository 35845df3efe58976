import datetime
from typing import Awaitable, Callable, Dict, List, Optional, Union

from .bookkeeping import compute_monthly_buckets, compute_summary
from .config import ReportConfig
from .models import SourceKind
from .normalizer import normalize_records
from .report import build_chart_series, build_report_document, sort_entries_for_report
from .snapshot import fetch_snapshot


def _log(debug: bool, logs: List[str], msg: str) -> None:
    """Collect debug logs and optionally print for local debugging."""
    logs.append(msg)
    if debug:
        print(f"[pipeline] {msg}")


def build_ledger_report(
    records,
    source: Union[SourceKind, str],
    config: Optional[ReportConfig] = None,
    generated_on: Optional[datetime.date] = None,
    debug: bool = False,
) -> Dict:
    """
    Unified entrypoint over one record snapshot.

    Steps:
      - normalize + classify (malformed records are skipped and counted)
      - monthly buckets and grand totals, computed independently
      - chart series (chronological) and report document (config.report_order)
    """
    if records is None:
        raise ValueError("records is None")
    source = SourceKind(source)
    config = config or ReportConfig()

    logs: List[str] = []
    normalized = normalize_records(records, source)
    _log(debug, logs, f"Normalized {len(normalized.entries)} {source.value} records, skipped {normalized.skipped_count}")
    for skipped in normalized.skipped:
        _log(debug, logs, f"Skipped record #{skipped.index} ({skipped.record_id or 'no id'}): {skipped.reason}")

    entries = normalized.entries
    buckets = compute_monthly_buckets(entries, locale=config.locale)
    summary = compute_summary(entries)
    _log(debug, logs, f"Buckets: {[b.display_label for b in buckets]}")
    _log(
        debug,
        logs,
        f"Totals: income={summary.total_income} expense={summary.total_expense} net={summary.net_profit}",
    )

    chart_series = build_chart_series(buckets)
    report_entries = sort_entries_for_report(entries, config.report_order)
    document = build_report_document(
        report_entries, summary, generated_on=generated_on, config=config, source=source
    )
    _log(debug, logs, f"Report rows: {len(document.rows)} ({config.report_order})")

    return {
        "source": source,
        "entries": entries,
        "skipped": normalized.skipped,
        "skipped_count": normalized.skipped_count,
        "buckets": buckets,
        "summary": summary,
        "chart_series": chart_series,
        "document": document,
        "logs": logs,
    }


async def build_ledger_report_async(
    fetch: Callable[[], Awaitable],
    source: Union[SourceKind, str],
    config: Optional[ReportConfig] = None,
    generated_on: Optional[datetime.date] = None,
    debug: bool = False,
) -> Dict:
    """Fetch a snapshot, then run the synchronous pipeline over it."""
    snapshot = await fetch_snapshot(fetch)
    return build_ledger_report(snapshot, source, config=config, generated_on=generated_on, debug=debug)
