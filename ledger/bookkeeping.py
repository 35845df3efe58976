from typing import Dict, Iterable, List

import pandas as pd

from .config import DEFAULT_LOCALE
from .models import Classification, LedgerEntry, LedgerSummary, MonthBucket
from .utils import from_cents, month_label, to_cents

FRAME_COLUMNS = ["id", "date", "classification", "amount_cents"]


def entries_to_frame(entries: Iterable[LedgerEntry]) -> pd.DataFrame:
    """
    Tabular view of ledger entries with integer cent amounts. The cents column
    holds Python ints (object dtype) so sums are exact and cannot overflow.
    """
    if entries is None:
        raise ValueError("entries is None")

    rows = [
        {
            "id": entry.id,
            "date": pd.Timestamp(entry.date),
            "classification": Classification(entry.classification).value,
            "amount_cents": to_cents(entry.amount),
        }
        for entry in entries
    ]
    frame = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    frame["date"] = pd.to_datetime(frame["date"])
    frame["amount_cents"] = frame["amount_cents"].astype(object)
    return frame


def _exact_sum(cents: pd.Series) -> int:
    return sum((int(value) for value in cents.tolist()), 0)


def _totals_by_classification(frame: pd.DataFrame) -> Dict[str, int]:
    totals = frame.groupby("classification")["amount_cents"].agg(_exact_sum)
    return {
        kind.value: int(totals.get(kind.value, 0))
        for kind in Classification
    }


def compute_monthly_buckets(entries: Iterable[LedgerEntry], locale: str = DEFAULT_LOCALE) -> List[MonthBucket]:
    """
    Group entries by calendar (year, month) and sum income/expense per month.
    Buckets come back sorted chronologically; months with a single kind of
    entry report the other side as zero.
    """
    frame = entries_to_frame(entries)
    if frame.empty:
        return []

    frame["month"] = frame["date"].dt.to_period("M")
    monthly = (
        frame.groupby(["month", "classification"])["amount_cents"]
        .agg(_exact_sum)
        .unstack(fill_value=0)
        .reindex(columns=[kind.value for kind in Classification], fill_value=0)
        .sort_index()
    )

    buckets: List[MonthBucket] = []
    # per-cell access keeps each column's exact integer values
    for period in monthly.index:
        buckets.append(
            MonthBucket(
                year=period.year,
                month=period.month,
                display_label=month_label(period.year, period.month, locale),
                income=from_cents(monthly.at[period, Classification.INCOME.value]),
                expense=from_cents(monthly.at[period, Classification.EXPENSE.value]),
            )
        )
    return buckets


def compute_summary(entries: Iterable[LedgerEntry]) -> LedgerSummary:
    """
    Grand totals across all entries: income, expense and net profit.
    """
    frame = entries_to_frame(entries)
    totals = _totals_by_classification(frame)
    income = totals[Classification.INCOME.value]
    expense = totals[Classification.EXPENSE.value]
    return LedgerSummary(
        total_income=from_cents(income),
        total_expense=from_cents(expense),
        net_profit=from_cents(income - expense),
    )
