import asyncio
import datetime
import random
from decimal import Decimal

import pytest

from ledger.config import ReportConfig
from ledger.pipeline import build_ledger_report, build_ledger_report_async

ORDERS = [
    {"id": "o1", "order_name": "Cartões", "customer_name": "Ana", "amount": 100.0, "received_date": "2024-12-05",
     "delivery_date": "2024-12-10", "status": "concluído", "paid": True},
    {"id": "o2", "order_name": "Banner", "customer_name": "Bia", "amount": "abc", "received_date": "2024-12-06",
     "delivery_date": "2024-12-12", "status": "em andamento", "paid": True},
    {"id": "o3", "order_name": "Convites", "customer_name": "Caio", "amount": 200.0, "received_date": "2025-01-03",
     "delivery_date": "2025-01-20", "status": "não iniciado", "paid": False},
    {"id": "o4", "order_name": "Adesivos", "customer_name": "Duda", "amount": "50,00", "received_date": "2025-01-08",
     "delivery_date": "2025-01-09", "status": "concluído", "paid": True},
]

TRANSACTIONS = [
    {"id": "t1", "type": "income", "amount": 100, "description": "Venda balcão", "date": "2024-03-01"},
    {"id": "t2", "type": "income", "amount": 50, "description": "Venda online", "date": "2024-03-15"},
    {"id": "t3", "type": "expense", "amount": 30, "description": "Papel", "date": "2024-03-20"},
]

TODAY = datetime.date(2025, 2, 1)


def test_orders_pipeline_skips_bad_amount_and_orders_months():
    result = build_ledger_report(ORDERS, "order", generated_on=TODAY)

    assert result["skipped_count"] == 1
    assert result["skipped"][0].record_id == "o2"
    assert [p.display_label for p in result["chart_series"]] == ["dez. de 2024", "jan. de 2025"]

    summary = result["summary"]
    assert summary.total_income == Decimal("150.00")
    assert summary.total_expense == Decimal("200.00")
    assert summary.net_profit == Decimal("-50.00")

    # report rows default to most recent first
    assert [r.date for r in result["document"].rows] == ["08/01/2025", "03/01/2025", "05/12/2024"]
    assert result["document"].rows[1].settled_state == "Pendente"
    assert any("o2" in line for line in result["logs"])


def test_transactions_pipeline():
    result = build_ledger_report(TRANSACTIONS, "transaction", generated_on=TODAY)

    assert result["skipped_count"] == 0
    [point] = result["chart_series"]
    assert (point.income, point.expense, point.profit) == (Decimal("150.00"), Decimal("30.00"), Decimal("120.00"))
    assert all(r.settled_state == "Pago" for r in result["document"].rows)


def test_pipeline_is_idempotent():
    first = build_ledger_report(ORDERS, "order", generated_on=TODAY)
    second = build_ledger_report(ORDERS, "order", generated_on=TODAY)
    for key in ("entries", "skipped", "buckets", "summary", "chart_series", "document", "logs"):
        assert first[key] == second[key]


def test_shuffle_changes_nothing_but_input_order():
    shuffled = list(ORDERS)
    random.Random(3).shuffle(shuffled)
    config = ReportConfig(report_order="asc")

    a = build_ledger_report(ORDERS, "order", config=config, generated_on=TODAY)
    b = build_ledger_report(shuffled, "order", config=config, generated_on=TODAY)

    assert a["buckets"] == b["buckets"]
    assert a["summary"] == b["summary"]
    assert a["document"].rows == b["document"].rows


def test_empty_snapshot():
    result = build_ledger_report([], "order", generated_on=TODAY)
    assert result["chart_series"] == []
    assert result["document"].rows == []
    assert result["summary"].net_profit == Decimal("0")
    assert result["skipped_count"] == 0


def test_none_snapshot_raises():
    with pytest.raises(ValueError):
        build_ledger_report(None, "order")


def test_unknown_source_raises():
    with pytest.raises(ValueError):
        build_ledger_report([], "invoice")


def test_debug_prints(capsys):
    build_ledger_report(TRANSACTIONS, "transaction", generated_on=TODAY, debug=True)
    assert "[pipeline]" in capsys.readouterr().out


def test_async_fetch_then_compute():
    async def fetch():
        return TRANSACTIONS

    result = asyncio.run(build_ledger_report_async(fetch, "transaction", generated_on=TODAY))
    assert result["summary"].net_profit == Decimal("120.00")


def test_report_heading_matches_source():
    orders = build_ledger_report(ORDERS, "order", generated_on=TODAY)
    transactions = build_ledger_report(TRANSACTIONS, "transaction", generated_on=TODAY)
    assert orders["document"].columns[1] == "Status"
    assert transactions["document"].columns[1] == "Descrição"


def test_oversized_amount_does_not_abort_report():
    records = ORDERS + [
        {"id": "o5", "amount": "1" * 30, "received_date": "2025-01-09", "paid": True},
        {"id": "o6", "amount": "100000000000000000", "received_date": "2025-01-10", "paid": True},
    ]
    result = build_ledger_report(records, "order", generated_on=TODAY)

    assert result["skipped_count"] == 3
    assert result["summary"].total_income == Decimal("150.00")
