import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Classification(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class SourceKind(str, Enum):
    ORDER = "order"
    TRANSACTION = "transaction"


class LedgerEntry(BaseModel):
    """
    One normalized financial record. Frozen: the classification assigned at
    normalization time travels unchanged through the rest of the pipeline.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    amount: Decimal = Field(ge=0)
    date: datetime.date
    classification: Classification
    label: str = ""
    settled: bool
    source: SourceKind
    service_reference: Optional[str] = None


class SkippedRecord(BaseModel):
    index: int
    record_id: Optional[str] = None
    reason: str


class NormalizationResult(BaseModel):
    entries: List[LedgerEntry] = []
    skipped: List[SkippedRecord] = []

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class MonthBucket(BaseModel):
    year: int
    month: int = Field(ge=1, le=12)
    display_label: str
    income: Decimal = Field(default=Decimal("0.00"), ge=0)
    expense: Decimal = Field(default=Decimal("0.00"), ge=0)

    @property
    def month_key(self) -> Tuple[int, int]:
        return (self.year, self.month)

    @property
    def profit(self) -> Decimal:
        return self.income - self.expense


class LedgerSummary(BaseModel):
    total_income: Decimal = Decimal("0.00")
    total_expense: Decimal = Decimal("0.00")
    net_profit: Decimal = Decimal("0.00")


class ChartPoint(BaseModel):
    display_label: str
    year: int
    month: int
    income: Decimal
    expense: Decimal
    profit: Decimal
    cumulative_profit: Decimal


class ReportRow(BaseModel):
    date: str
    label: str
    settled_state: str
    amount: str


class ReportDocument(BaseModel):
    title: str
    generated_on: str
    header_lines: List[str]
    columns: List[str]
    rows: List[ReportRow] = []
