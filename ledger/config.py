import os
from typing import Dict

from pydantic import BaseModel, field_validator

DEFAULT_LOCALE = "pt-BR"
REPORT_ORDERS = ("desc", "asc", "input")
THEME_NAMES = ("Default", "Dark")

TEXT: Dict[str, Dict] = {
    "pt-BR": {
        "months": ["jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"],
        "month_label": "{month}. de {year}",
        "generated_on": "Data: {date}",
        "summary_title": "Resumo Financeiro",
        "total_income": "Total de Receitas: {value}",
        "total_expense": "Total de Despesas: {value}",
        "net_profit": "Lucro Líquido: {value}",
        "columns": ["Data", "{label}", "Pagamento", "Valor"],
        "label_heading": {"order": "Status", "transaction": "Descrição"},
        "settled": "Pago",
        "pending": "Pendente",
        "income": "Receitas",
        "expense": "Despesas",
        "profit": "Lucro",
        "chart_income_expense": "Receitas vs Despesas",
        "chart_profit": "Evolução do Lucro",
    },
    "en": {
        "months": ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
        "month_label": "{month} {year}",
        "generated_on": "Date: {date}",
        "summary_title": "Financial Summary",
        "total_income": "Total Income: {value}",
        "total_expense": "Total Expenses: {value}",
        "net_profit": "Net Profit: {value}",
        "columns": ["Date", "{label}", "Payment", "Amount"],
        "label_heading": {"order": "Status", "transaction": "Description"},
        "settled": "Paid",
        "pending": "Pending",
        "income": "Income",
        "expense": "Expenses",
        "profit": "Profit",
        "chart_income_expense": "Income vs Expenses",
        "chart_profit": "Profit Evolution",
    },
}


class ReportConfig(BaseModel):
    """
    Presentation settings for charts and the exported report.
    Amounts are never converted; `currency_symbol` is only a prefix.
    """

    currency_symbol: str = "R$"
    locale: str = DEFAULT_LOCALE
    title: str = "Relatório Financeiro - Gráfica e Encantos"
    report_order: str = "desc"
    theme: str = "Default"

    @field_validator("locale")
    @classmethod
    def _check_locale(cls, value: str) -> str:
        if value not in TEXT:
            raise ValueError(f"locale must be one of {', '.join(TEXT)}")
        return value

    @field_validator("report_order")
    @classmethod
    def _check_order(cls, value: str) -> str:
        if value not in REPORT_ORDERS:
            raise ValueError("report_order must be 'desc', 'asc', or 'input'")
        return value

    @field_validator("theme")
    @classmethod
    def _check_theme(cls, value: str) -> str:
        if value not in THEME_NAMES:
            raise ValueError("theme must be 'Default' or 'Dark'")
        return value

    @property
    def text(self) -> Dict:
        return TEXT[self.locale]

    @classmethod
    def from_env(cls, environ=None) -> "ReportConfig":
        env = os.environ if environ is None else environ
        overrides = {
            "currency_symbol": env.get("LEDGER_CURRENCY_SYMBOL"),
            "locale": env.get("LEDGER_LOCALE"),
            "title": env.get("LEDGER_REPORT_TITLE"),
            "report_order": env.get("LEDGER_REPORT_ORDER"),
            "theme": env.get("LEDGER_THEME"),
        }
        return cls(**{k: v for k, v in overrides.items() if v})
