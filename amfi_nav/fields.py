"""
Field converters for AMFI NAV feed lines.

Each converter takes one raw field string and returns a typed value or
raises ``FieldConversionError`` carrying the ``ErrorKind`` to report.
The line classifier calls them to validate a data line, and the stream
parser calls them again to build the ``NavRecord``.

Conventions of the feed handled here:
- ``N.A.`` (and configured variants) in a numeric column: value not
  available -> ``None``, never ``0``.
- ``-`` / ``---`` / empty in an ISIN column: no ISIN -> ``None``.
- Dates are day-month-year (``17-Oct-2026``, ``17/10/26``, ...).
- Comma thousand separators are tolerated in numbers; Python-style
  ``_`` digit grouping is not.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from amfi_nav.config import ParserConfig
from amfi_nav.exceptions import FieldConversionError
from amfi_nav.layout_registry import DECIMAL_COLUMNS, ISIN_COLUMNS, FeedLayout
from amfi_nav.models import ErrorKind, FundMaturity, FundPlan

# Placeholders the feed prints in ISIN columns that do not apply
ISIN_PLACEHOLDERS = ("-", "---")

# Marker in a scheme name that identifies a Direct plan
DIRECT_PLAN_MARKER = "DIRECT"

_MONTHS = {
    name: i
    for i, names in enumerate(
        [
            ("jan", "january"),
            ("feb", "february"),
            ("mar", "march"),
            ("apr", "april"),
            ("may",),
            ("jun", "june"),
            ("jul", "july"),
            ("aug", "august"),
            ("sep", "sept", "september"),
            ("oct", "october"),
            ("nov", "november"),
            ("dec", "december"),
        ],
        start=1,
    )
    for name in names
}

_DATE_PATTERN = re.compile(
    r"^(?P<day>\d{1,2})(?P<sep>[-/ ])(?P<month>[A-Za-z]+|\d{1,2})(?P=sep)(?P<year>\d{4}|\d{2})$"
)

_SCHEME_CATEGORY_PATTERN = re.compile(
    r"^(?P<kind>(?:open|close|closed)\s+ended|interval(?:\s+fund)?)\s+schemes?\s*"
    r"(?:\((?P<inner>.*?)\)?)?$",
    re.IGNORECASE,
)


def parse_scheme_code(raw: str) -> str:
    value = raw.strip()
    if not value.isdecimal():
        raise FieldConversionError(
            ErrorKind.UNCLASSIFIABLE_LINE,
            f"scheme_code: expected digits, got {value!r}",
        )
    return value


def parse_isin(raw: str) -> str | None:
    value = raw.strip()
    if not value or value in ISIN_PLACEHOLDERS:
        return None
    return value


def parse_decimal(raw: str, column: str, config: ParserConfig) -> Decimal | None:
    """Parse a non-negative fixed-point number.

    Returns ``None`` for an empty field or a "not available" token.

    Raises:
        FieldConversionError: NUMERIC_PARSE_FAILURE for anything that is
            not a finite, non-negative decimal.
    """
    value = raw.strip()
    if not value or config.is_not_available(value):
        return None
    if "_" in value:
        raise FieldConversionError(
            ErrorKind.NUMERIC_PARSE_FAILURE, f"{column}: not a number: {value!r}"
        )
    cleaned = value.replace(",", "")
    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        raise FieldConversionError(
            ErrorKind.NUMERIC_PARSE_FAILURE, f"{column}: not a number: {value!r}"
        ) from None
    if not number.is_finite():
        raise FieldConversionError(
            ErrorKind.NUMERIC_PARSE_FAILURE, f"{column}: not a finite number: {value!r}"
        )
    if number < 0:
        raise FieldConversionError(
            ErrorKind.NUMERIC_PARSE_FAILURE, f"{column}: negative value: {value!r}"
        )
    return number


def parse_nav_date(raw: str, column: str = "date") -> date:
    """Parse a day-month-year date with a 2- or 4-digit year.

    Two-digit years follow the ``strptime('%y')`` pivot: 69-99 map to
    the 1900s, 00-68 to the 2000s.
    """
    value = raw.strip()
    m = _DATE_PATTERN.match(value)
    if m is None:
        raise FieldConversionError(
            ErrorKind.DATE_PARSE_FAILURE, f"{column}: expected day-month-year, got {value!r}"
        )

    month_text = m.group("month")
    if month_text.isdigit():
        month = int(month_text)
    else:
        month = _MONTHS.get(month_text.lower(), 0)

    year = int(m.group("year"))
    if len(m.group("year")) == 2:
        year += 1900 if year >= 69 else 2000

    try:
        return date(year, month, int(m.group("day")))
    except ValueError as exc:
        raise FieldConversionError(
            ErrorKind.DATE_PARSE_FAILURE, f"{column}: invalid date {value!r}: {exc}"
        ) from None


def infer_plan(name: str) -> FundPlan:
    if DIRECT_PLAN_MARKER in name.upper():
        return FundPlan.DIRECT
    return FundPlan.REGULAR


def parse_scheme_category(
    header: str,
) -> tuple[FundMaturity, str | None, str | None] | None:
    """Split a scheme-category header into (maturity, scheme_type, category).

    ``Open Ended Schemes(Debt Scheme - Banking and PSU Fund)`` gives
    ``(OPEN_ENDED, "Debt Scheme", "Banking and PSU Fund")``;
    ``Close Ended Schemes(Income)`` gives ``(CLOSE_ENDED, None, "Income")``.
    Nested parentheses stay in the category:
    ``...(Other Scheme - Index Funds (ETF))`` gives ``"Index Funds (ETF)"``.
    Returns ``None`` for any other header (e.g. a fund house name).
    """
    m = _SCHEME_CATEGORY_PATTERN.match(header.strip())
    if m is None:
        return None

    kind = m.group("kind").lower()
    if kind.startswith("open"):
        maturity = FundMaturity.OPEN_ENDED
    elif kind.startswith("close"):
        maturity = FundMaturity.CLOSE_ENDED
    else:
        maturity = FundMaturity.INTERVAL

    inner = (m.group("inner") or "").strip()
    if not inner:
        return maturity, None, None
    scheme_type, sep, category = inner.partition(" - ")
    if not sep:
        return maturity, None, inner
    return maturity, scheme_type.strip() or None, category.strip() or None


def convert_fields(
    fields: list[str] | tuple[str, ...],
    layout: FeedLayout,
    config: ParserConfig,
) -> dict[str, object]:
    """Convert the raw fields of a data line into NavRecord keyword values.

    Checks run in a fixed order so the reported reason is stable:
    mandatory columns first, then each column's conversion left to right.

    Raises:
        FieldConversionError: On the first failing column.
    """
    for column, raw in zip(layout.columns, fields):
        if column in layout.mandatory and not raw.strip():
            raise FieldConversionError(
                ErrorKind.EMPTY_MANDATORY_FIELD, f"{column}: mandatory field is empty"
            )

    values: dict[str, object] = {}
    for column, raw in zip(layout.columns, fields):
        if column == "scheme_code":
            values[column] = parse_scheme_code(raw)
        elif column in ISIN_COLUMNS:
            values[column] = parse_isin(raw)
        elif column in DECIMAL_COLUMNS:
            values[column] = parse_decimal(raw, column, config)
        elif column == "date":
            values[column] = parse_nav_date(raw, column)
        else:
            values[column] = raw.strip()
    return values
