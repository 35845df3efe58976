import datetime
import re
import warnings
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, List, Mapping, Union

import pandas as pd

from .classifier import _is_missing, classify, parse_paid, parse_type_tag
from .models import LedgerEntry, NormalizationResult, SkippedRecord, SourceKind
from .snapshot import frame_to_records
from .utils import CENT

CURRENCY_MARKERS = re.compile(r"(R\$|US\$|BRL|EUR|USD|[€$£¥])", re.IGNORECASE)
NUMBER_PATTERN = re.compile(r"-?\d[\d.,]*")
# "1.234" / "1.234.567" and "1,234,567": separators grouping exactly three digits
DOT_THOUSANDS = re.compile(r"-?\d{1,3}(\.\d{3})+")
COMMA_THOUSANDS = re.compile(r"-?\d{1,3}(,\d{3}){2,}")
MAX_AMOUNT = Decimal("1000000000000")
DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d.%m.%Y", "%d-%m-%Y")


def _normalize_separators(text: str) -> str:
    """
    Resolve decimal/thousands separators the pt-BR way:
      - both present: the last one is the decimal separator
      - dots grouping exactly three digits ("1.234", "1.234.567"): thousands
      - commas grouping three digits more than once ("1,234,567"): thousands
      - otherwise a single comma or dot is the decimal separator
    """
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if DOT_THOUSANDS.fullmatch(text):
        return text.replace(".", "")
    if COMMA_THOUSANDS.fullmatch(text):
        return text.replace(",", "")
    return text.replace(",", ".")


def parse_amount(value) -> Decimal:
    """
    Parse a monetary value into a non-negative Decimal rounded to cents.
    Accepts numbers and strings such as "R$ 1.234,56" or "1,234.56".
    Amounts above MAX_AMOUNT are rejected as data-integrity errors.
    """
    if _is_missing(value):
        raise ValueError("amount is missing")
    if isinstance(value, bool):
        raise ValueError(f"amount is not a number: {value!r}")

    try:
        if isinstance(value, Decimal):
            parsed = value
        elif isinstance(value, (int, float)):
            parsed = Decimal(str(value))
        else:
            text = CURRENCY_MARKERS.sub("", str(value))
            text = text.replace("\u00A0", "").replace(" ", "")
            if not NUMBER_PATTERN.fullmatch(text):
                raise ValueError(f"amount is not a number: {value!r}")
            parsed = Decimal(_normalize_separators(text))

        if not parsed.is_finite():
            raise ValueError(f"amount is not finite: {value!r}")
        if parsed < 0:
            raise ValueError(f"amount is negative: {value!r}")
        if parsed > MAX_AMOUNT:
            raise ValueError(f"amount exceeds {MAX_AMOUNT}: {value!r}")
        return parsed.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"amount is not a number: {value!r}") from e


def parse_date(value) -> datetime.date:
    """Parse a calendar date from date/datetime objects or ISO / dd/mm/yyyy strings."""
    if _is_missing(value):
        raise ValueError("date is missing")
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value

    text = str(value).strip()
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message="Could not infer format.*")
        for fmt in DATE_FORMATS:
            parsed = pd.to_datetime(text, errors="coerce", format=fmt)
            if not pd.isna(parsed):
                return parsed.date()
        parsed = pd.to_datetime(text, errors="coerce", format="ISO8601")
    if pd.isna(parsed):
        raise ValueError(f"date is not a valid calendar date: {value!r}")
    return parsed.date()


def _optional_text(value) -> str:
    return "" if _is_missing(value) else str(value).strip()


def normalize_record(record: Mapping, source: Union[SourceKind, str], index: int = 0) -> LedgerEntry:
    """
    Convert one raw order or transaction record into a LedgerEntry.
    Raises ValueError describing why the record cannot be used.
    """
    if not isinstance(record, Mapping):
        raise ValueError(f"record is not a mapping: {type(record).__name__}")

    source = SourceKind(source)
    record_id = _optional_text(record.get("id")) or f"{source.value}-{index}"
    amount = parse_amount(record.get("amount"))

    if source is SourceKind.ORDER:
        entry_date = parse_date(record.get("received_date"))
        settled = parse_paid(record.get("paid"))
        classification = classify(source, settled=settled)
        label = _optional_text(record.get("status"))
    else:
        entry_date = parse_date(record.get("date"))
        settled = True
        classification = classify(source, type_tag=parse_type_tag(record.get("type")))
        label = _optional_text(record.get("description"))

    service_reference = _optional_text(record.get("service_reference", record.get("service_id"))) or None

    return LedgerEntry(
        id=record_id,
        amount=amount,
        date=entry_date,
        classification=classification,
        label=label,
        settled=settled,
        source=source,
        service_reference=service_reference,
    )


def _iter_records(records) -> Iterable:
    if isinstance(records, pd.DataFrame):
        return frame_to_records(records)
    if isinstance(records, (str, bytes, Mapping)):
        raise ValueError("records must be a sequence of records, not a single value")
    return records


def normalize_records(records, source: Union[SourceKind, str]) -> NormalizationResult:
    """
    Normalize a whole snapshot. Malformed records are skipped and reported,
    never included in totals; only a missing snapshot raises.
    """
    if records is None:
        raise ValueError("records is None")
    source = SourceKind(source)

    entries: List[LedgerEntry] = []
    skipped: List[SkippedRecord] = []
    for index, record in enumerate(_iter_records(records)):
        try:
            entries.append(normalize_record(record, source, index=index))
        except ValueError as e:
            record_id = _optional_text(record.get("id")) if isinstance(record, Mapping) else ""
            skipped.append(SkippedRecord(index=index, record_id=record_id or None, reason=str(e)))

    return NormalizationResult(entries=entries, skipped=skipped)
