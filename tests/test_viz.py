from ledger.bookkeeping import compute_monthly_buckets
from ledger.config import ReportConfig
from ledger.report import build_chart_series
from ledger.viz import build_income_expense_figure, build_profit_figure, series_to_frame


def test_series_frame_keeps_chronological_order(mixed_entries):
    series = build_chart_series(compute_monthly_buckets(mixed_entries))
    frame = series_to_frame(series)
    assert list(frame["month"]) == ["mar. de 2024", "dez. de 2024", "jan. de 2025"]
    assert list(frame["Receitas"]) == [0.0, 150.0, 75.5]


def test_income_expense_figure(mixed_entries):
    series = build_chart_series(compute_monthly_buckets(mixed_entries))
    fig = build_income_expense_figure(series)
    names = {trace.name for trace in fig.data}
    assert names == {"Receitas", "Despesas"}
    assert fig.layout.barmode == "group"
    assert fig.layout.title.text == "Receitas vs Despesas"


def test_profit_figure_cumulative(mixed_entries):
    series = build_chart_series(compute_monthly_buckets(mixed_entries))
    fig = build_profit_figure(series, theme="Dark", config=ReportConfig(locale="en"), cumulative=True)
    assert list(fig.data[0].y) == [-12.25, 107.75, 143.25]
    assert fig.layout.title.text == "Profit Evolution"


def test_figures_for_empty_series():
    assert build_income_expense_figure([]) is not None
    assert build_profit_figure([]) is not None
