import datetime
from decimal import ROUND_HALF_UP, Decimal

from .config import TEXT, DEFAULT_LOCALE

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    return Decimal(int(cents)).scaleb(-2)


def format_currency(value: Decimal, symbol: str = "R$") -> str:
    # fixed two decimals, no grouping
    return f"{symbol} {Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP):.2f}"


def format_date(value: datetime.date) -> str:
    return value.strftime("%d/%m/%Y")


def month_label(year: int, month: int, locale: str = DEFAULT_LOCALE) -> str:
    """
    Human-readable month label, e.g. "mar. de 2024" (pt-BR) or "Mar 2024" (en).
    Only used for display; grouping and sorting use (year, month).
    """
    text = TEXT.get(locale) or TEXT[DEFAULT_LOCALE]
    return text["month_label"].format(month=text["months"][month - 1], year=year)
