from typing import Dict, Iterable, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .config import ReportConfig
from .models import ChartPoint

INCOME_GREEN = "#0f9d58"
EXPENSE_RED = "#e5484d"
PROFIT_PINK = "#db7093"
DEFAULT_THEME = "Default"

THEMES: Dict[str, Dict] = {
    "Default": {"template": "plotly", "color_discrete_sequence": [INCOME_GREEN, EXPENSE_RED, PROFIT_PINK]},
    "Dark": {"template": "plotly_dark", "color_discrete_sequence": ["#4ae3a8", "#ff6b6b", "#f39ac0"]},
}

THEME_STYLES: Dict[str, Dict] = {
    "Default": {
        "paper_bgcolor": "#ffffff",
        "plot_bgcolor": "#ffffff",
        "font_color": "#1f1a1c",
        "gridcolor": "#efdde4",
    },
    "Dark": {
        "paper_bgcolor": "#0f1115",
        "plot_bgcolor": "#0f1115",
        "font_color": "#f2e9ed",
        "gridcolor": "#2a2228",
    },
}


def series_to_frame(series: Iterable[ChartPoint], config: Optional[ReportConfig] = None) -> pd.DataFrame:
    """
    Chart series as a DataFrame with float columns for plotting.
    Row order is the series order (chronological).
    """
    config = config or ReportConfig()
    text = config.text
    rows = [
        {
            "month": point.display_label,
            text["income"]: float(point.income),
            text["expense"]: float(point.expense),
            text["profit"]: float(point.profit),
            "cumulative_profit": float(point.cumulative_profit),
        }
        for point in series
    ]
    return pd.DataFrame(rows, columns=["month", text["income"], text["expense"], text["profit"], "cumulative_profit"])


def _apply_layout(fig: go.Figure, theme: str, title: str) -> go.Figure:
    layout_style = THEME_STYLES.get(theme, THEME_STYLES[DEFAULT_THEME])
    fig.update_layout(
        title=title,
        height=360,
        margin=dict(l=20, r=20, t=50, b=20),
        autosize=False,
        paper_bgcolor=layout_style.get("paper_bgcolor"),
        plot_bgcolor=layout_style.get("plot_bgcolor"),
        font=dict(color=layout_style.get("font_color")),
        xaxis=dict(gridcolor=layout_style.get("gridcolor"), title=None),
        yaxis=dict(gridcolor=layout_style.get("gridcolor"), title=None),
    )
    return fig


def build_income_expense_figure(
    series: Iterable[ChartPoint],
    theme: str = DEFAULT_THEME,
    config: Optional[ReportConfig] = None,
) -> go.Figure:
    """Grouped bars of income vs expense per month."""
    config = config or ReportConfig()
    text = config.text
    theme_cfg = THEMES.get(theme) or THEMES[DEFAULT_THEME]
    frame = series_to_frame(series, config)

    long = frame.melt(
        id_vars="month",
        value_vars=[text["income"], text["expense"]],
        var_name="kind",
        value_name="value",
    )
    fig = px.bar(
        long,
        x="month",
        y="value",
        color="kind",
        barmode="group",
        template=theme_cfg["template"],
        color_discrete_sequence=theme_cfg["color_discrete_sequence"],
        category_orders={"month": list(frame["month"])},
    )
    fig.update_layout(legend_title_text=None)
    return _apply_layout(fig, theme, text["chart_income_expense"])


def build_profit_figure(
    series: Iterable[ChartPoint],
    theme: str = DEFAULT_THEME,
    config: Optional[ReportConfig] = None,
    cumulative: bool = False,
) -> go.Figure:
    """Area chart of per-month profit, or of the running total when `cumulative`."""
    config = config or ReportConfig()
    text = config.text
    theme_cfg = THEMES.get(theme) or THEMES[DEFAULT_THEME]
    frame = series_to_frame(series, config)

    value_col = "cumulative_profit" if cumulative else text["profit"]
    fig = px.area(
        frame,
        x="month",
        y=value_col,
        template=theme_cfg["template"],
        color_discrete_sequence=theme_cfg["color_discrete_sequence"][2:],
    )
    fig.update_traces(line_shape="spline")
    return _apply_layout(fig, theme, text["chart_profit"])
