import pytest
from pydantic import ValidationError

from ledger.config import ReportConfig
from ledger.utils import format_currency, format_date, month_label


def test_defaults():
    config = ReportConfig()
    assert config.currency_symbol == "R$"
    assert config.locale == "pt-BR"
    assert config.report_order == "desc"
    assert config.text["settled"] == "Pago"


def test_from_env(monkeypatch):
    monkeypatch.setenv("LEDGER_LOCALE", "en")
    monkeypatch.setenv("LEDGER_REPORT_ORDER", "asc")
    monkeypatch.setenv("LEDGER_CURRENCY_SYMBOL", "€")
    monkeypatch.delenv("LEDGER_REPORT_TITLE", raising=False)
    monkeypatch.delenv("LEDGER_THEME", raising=False)

    config = ReportConfig.from_env()
    assert config.locale == "en"
    assert config.report_order == "asc"
    assert config.currency_symbol == "€"
    assert config.title == ReportConfig().title


@pytest.mark.parametrize("field,value", [("locale", "fr"), ("report_order", "random"), ("theme", "Neon")])
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        ReportConfig(**{field: value})


def test_formatting_helpers():
    import datetime
    from decimal import Decimal

    assert format_currency(Decimal("1234.5")) == "R$ 1234.50"
    assert format_date(datetime.date(2024, 1, 9)) == "09/01/2024"
    assert month_label(2024, 12) == "dez. de 2024"
    assert month_label(2025, 1, "en") == "Jan 2025"
