import datetime
from decimal import Decimal

import pytest

from ledger.models import Classification, LedgerEntry, SourceKind


def make_entry(entry_id, amount, day, classification, settled=True, label="", source=SourceKind.TRANSACTION):
    return LedgerEntry(
        id=entry_id,
        amount=Decimal(amount),
        date=day,
        classification=classification,
        label=label,
        settled=settled,
        source=source,
    )


@pytest.fixture
def mixed_entries():
    return [
        make_entry("1", "100.00", datetime.date(2024, 12, 3), Classification.INCOME, label="Cartões"),
        make_entry("2", "40.00", datetime.date(2025, 1, 15), Classification.EXPENSE, label="Tinta"),
        make_entry("3", "50.00", datetime.date(2024, 12, 20), Classification.INCOME, label="Banner"),
        make_entry("4", "30.00", datetime.date(2024, 12, 21), Classification.EXPENSE, label="Papel"),
        make_entry("5", "75.50", datetime.date(2025, 1, 2), Classification.INCOME, label="Convites"),
        make_entry("6", "12.25", datetime.date(2024, 3, 9), Classification.EXPENSE, label="Cola"),
    ]
