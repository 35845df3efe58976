from typing import Dict, Optional

import pandas as pd

from .models import Classification, SourceKind

PAID_ALIASES: Dict[str, bool] = {
    "true": True,
    "1": True,
    "yes": True,
    "y": True,
    "sim": True,
    "pago": True,
    "paid": True,
    "false": False,
    "0": False,
    "no": False,
    "n": False,
    "não": False,
    "nao": False,
    "pendente": False,
    "pending": False,
}

TYPE_ALIASES: Dict[str, Classification] = {
    "income": Classification.INCOME,
    "receita": Classification.INCOME,
    "entrada": Classification.INCOME,
    "expense": Classification.EXPENSE,
    "despesa": Classification.EXPENSE,
    "saida": Classification.EXPENSE,
    "saída": Classification.EXPENSE,
}


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_paid(value) -> Optional[bool]:
    """Read an order's `paid` flag; None when missing or unrecognised."""
    if _is_missing(value):
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    return PAID_ALIASES.get(str(value).strip().lower())


def parse_type_tag(value) -> Optional[Classification]:
    if _is_missing(value):
        return None
    if isinstance(value, Classification):
        return value
    return TYPE_ALIASES.get(str(value).strip().lower())


def classify(
    source: SourceKind,
    settled: Optional[bool] = None,
    type_tag: Optional[Classification] = None,
) -> Classification:
    """
    Source-specific classification:
      - transaction: the explicit type tag is authoritative
      - order: paid → income, unpaid → expense (unpaid orders are not treated
        as pending income; see DESIGN.md)
    Raises ValueError when no rule applies.
    """
    source = SourceKind(source)
    if source is SourceKind.TRANSACTION:
        if type_tag is None:
            raise ValueError("transaction has no income/expense type")
        return type_tag

    if settled is None:
        raise ValueError("order has no paid flag")
    return Classification.INCOME if settled else Classification.EXPENSE
