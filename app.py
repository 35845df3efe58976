import datetime

import pandas as pd
import streamlit as st

from ledger.config import ReportConfig
from ledger.pipeline import build_ledger_report
from ledger.report import build_pdf_report, report_filename
from ledger.snapshot import load_snapshot, read_table
from ledger.utils import format_currency
from ledger.viz import THEMES, build_income_expense_figure, build_profit_figure

LANGUAGE_NAMES = {"pt-BR": "Português", "en": "English"}

TEXT = {
    "pt-BR": {
        "app_title": "Dashboard",
        "app_caption": "Visão geral do seu negócio",
        "settings": "Configurações",
        "ui_language": "Idioma",
        "theme": "Tema",
        "data_source": "Origem dos dados",
        "source_order": "Encomendas",
        "source_transaction": "Transações",
        "upload_csv": "Enviar CSV/Excel/JSON",
        "cumulative_profit": "Lucro acumulado",
        "kpi_income": "Total de Receitas",
        "kpi_expense": "Total de Despesas",
        "kpi_profit": "Lucro Líquido",
        "skipped": "{count} registro(s) ignorado(s) por dados inválidos.",
        "entries": "Lançamentos",
        "export": "Exportar Relatório PDF",
        "build_pdf_fail": "Falha ao gerar o PDF: {error}",
        "upload_prompt": "Envie uma exportação de encomendas ou transações para começar.",
    },
    "en": {
        "app_title": "Dashboard",
        "app_caption": "Overview of your business",
        "settings": "Settings",
        "ui_language": "Language",
        "theme": "Theme",
        "data_source": "Data source",
        "source_order": "Orders",
        "source_transaction": "Transactions",
        "upload_csv": "Upload CSV/Excel/JSON",
        "cumulative_profit": "Cumulative profit",
        "kpi_income": "Total Income",
        "kpi_expense": "Total Expenses",
        "kpi_profit": "Net Profit",
        "skipped": "{count} record(s) skipped because of invalid data.",
        "entries": "Entries",
        "export": "Export PDF Report",
        "build_pdf_fail": "PDF export failed: {error}",
        "upload_prompt": "Upload an orders or transactions export to get started.",
    },
}


def translate(key: str, lang: str, **kwargs) -> str:
    text = TEXT.get(lang, TEXT["pt-BR"]).get(key) or TEXT["pt-BR"].get(key, key)
    return text.format(**kwargs) if kwargs else text


def render_kpi_cards(summary, config: ReportConfig, translate_fn):
    """
    Render the three totals as metric cards.
    """
    cards = [
        (translate_fn("kpi_income"), summary.total_income),
        (translate_fn("kpi_expense"), summary.total_expense),
        (translate_fn("kpi_profit"), summary.net_profit),
    ]
    cols = st.columns(len(cards))
    for col, (label, value) in zip(cols, cards):
        with col:
            st.metric(label=label, value=format_currency(value, config.currency_symbol))


st.set_page_config(page_title="Gráfica e Encantos | Dashboard", page_icon="🖨️", layout="wide")

base_config = ReportConfig.from_env()

with st.sidebar:
    ui_language = st.selectbox(
        "Idioma / Language",
        options=list(LANGUAGE_NAMES.keys()),
        index=list(LANGUAGE_NAMES.keys()).index(base_config.locale),
        format_func=lambda code: LANGUAGE_NAMES.get(code, code),
    )


def t(key: str, **kwargs) -> str:
    return translate(key, ui_language, **kwargs)


with st.sidebar:
    st.header(t("settings"))
    theme_options = list(THEMES.keys())
    theme = st.selectbox(t("theme"), options=theme_options, index=theme_options.index(base_config.theme))
    source = st.radio(
        t("data_source"),
        options=["order", "transaction"],
        format_func=lambda kind: t(f"source_{kind}"),
    )
    cumulative = st.toggle(t("cumulative_profit"), value=False)
    uploaded = st.file_uploader(t("upload_csv"), type=["csv", "xlsx", "json"])

config = base_config.model_copy(update={"locale": ui_language, "theme": theme})

st.title(t("app_title"))
st.caption(t("app_caption"))

if uploaded is None:
    st.info(t("upload_prompt"))
    st.stop()

snapshot = load_snapshot(read_table(uploaded, uploaded.name))
result = build_ledger_report(snapshot, source, config=config)

if result["skipped_count"]:
    st.warning(t("skipped", count=result["skipped_count"]))

render_kpi_cards(result["summary"], config, t)

col_left, col_right = st.columns(2)
with col_left:
    st.plotly_chart(build_income_expense_figure(result["chart_series"], theme, config), use_container_width=True)
with col_right:
    st.plotly_chart(
        build_profit_figure(result["chart_series"], theme, config, cumulative=cumulative),
        use_container_width=True,
    )

document = result["document"]
with st.expander(t("entries"), expanded=True):
    st.dataframe(
        pd.DataFrame([row.model_dump() for row in document.rows], columns=["date", "label", "settled_state", "amount"])
        .set_axis(document.columns, axis=1),
        use_container_width=True,
    )

try:
    pdf_bytes = build_pdf_report(document)
except RuntimeError as e:
    st.error(t("build_pdf_fail", error=e))
else:
    st.download_button(
        t("export"),
        data=pdf_bytes,
        file_name=report_filename(datetime.date.today()),
        mime="application/pdf",
    )
