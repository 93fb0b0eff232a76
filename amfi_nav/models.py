"""
Value objects produced by the feed parser.

- ``NavRecord``: one valuation entry (pydantic, frozen).  Field names are
  stable so tabular/serialization adapters can introspect them via
  ``NavRecord.model_fields``.
- ``LineError``: one line-level failure (frozen dataclass).
- ``ErrorKind``: closed taxonomy of line failures.
- ``ParseOutcome``: what the stream yields -- a ``NavRecord`` or a
  ``LineError``.  Callers discriminate with ``isinstance``.

Why ``Decimal | None`` for money:
  NAV values are fixed-point; floats would introduce representation
  error.  ``None`` is the explicit "not available" state -- the feed's
  ``N.A.`` token must never turn into ``0``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from decimal import Decimal
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Reason tag for a ``LineError``."""

    STRUCTURAL_MISMATCH = "structural_mismatch"
    EMPTY_MANDATORY_FIELD = "empty_mandatory_field"
    NUMERIC_PARSE_FAILURE = "numeric_parse_failure"
    DATE_PARSE_FAILURE = "date_parse_failure"
    UNCLASSIFIABLE_LINE = "unclassifiable_line"
    # Only emitted when ParserConfig.require_family is on
    MISSING_FAMILY = "missing_family"


class FundMaturity(str, Enum):
    """Open/close ended classification from scheme-category headers."""

    OPEN_ENDED = "open_ended"
    CLOSE_ENDED = "close_ended"
    INTERVAL = "interval"


class FundPlan(str, Enum):
    """Regular/Direct plan, inferred from the scheme name."""

    REGULAR = "regular"
    DIRECT = "direct"


class NavRecord(BaseModel):
    """One NAV entry from the feed."""

    model_config = ConfigDict(frozen=True)

    scheme_code: str = Field(..., min_length=1, pattern=r"^\d+$")
    isin_growth: str | None = None
    isin_dividend: str | None = None
    name: str = Field(..., min_length=1)
    nav: Decimal | None = Field(None, ge=0)
    repurchase_price: Decimal | None = Field(None, ge=0)
    sale_price: Decimal | None = Field(None, ge=0)
    date: Date
    family: str = ""
    # Context carried from the last scheme-category header
    maturity: FundMaturity | None = None
    scheme_type: str | None = None
    category: str | None = None
    plan: FundPlan = FundPlan.REGULAR

    @property
    def nav_available(self) -> bool:
        return self.nav is not None


@dataclass(frozen=True)
class LineError:
    """A feed line that could not be turned into a ``NavRecord``.

    Attributes:
        line_no: 1-based position of the line in the input.
        raw: The line text as received (terminators stripped).
        kind: Reason tag.
        detail: Human-readable explanation, naming the column for
            conversion failures.
    """

    line_no: int
    raw: str
    kind: ErrorKind
    detail: str = ""

    def __str__(self) -> str:
        msg = f"line {self.line_no}: {self.kind.value}"
        if self.detail:
            msg += f" ({self.detail})"
        return f"{msg}: {self.raw!r}"


ParseOutcome = Union[NavRecord, LineError]
