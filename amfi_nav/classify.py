"""
Line classification for AMFI NAV feeds.

Decides which shape one raw feed line has, without looking at any
other line.  The result is a closed union of small frozen dataclasses:

- ``Blank``: empty or whitespace-only.
- ``SectionHeader``: no field separator at all -- a fund house name or
  a scheme-category header such as
  ``Open Ended Schemes(Debt Scheme - Banking and PSU Fund)``.
- ``ColumnHeader``: the column legend of a known feed layout.
- ``DataFields``: a data line that passed every structural and
  conversion check.
- ``Malformed``: anything else with a separator, tagged with an
  ``ErrorKind``.

Classification order (first match wins):
1. Blank.
2. No separator -> SectionHeader.  A separator-free line is never data;
   this is what lets the stream parser track the family without lookahead.
3. Legend of any layout (case- and whitespace-insensitive) -> ColumnHeader.
4. Field count matches no layout -> STRUCTURAL_MISMATCH when the first
   field looks like a scheme code, else UNCLASSIFIABLE_LINE.
5. Mandatory field empty, then per-column conversion -> the converter's
   ErrorKind, naming the column.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Union

from amfi_nav.config import ParserConfig
from amfi_nav.exceptions import FieldConversionError
from amfi_nav.fields import convert_fields, parse_scheme_category
from amfi_nav.layout_registry import FeedLayout, load_all_layouts
from amfi_nav.models import ErrorKind, FundMaturity


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class SectionHeader:
    """A separator-free line naming a fund family or scheme category.

    ``maturity`` is set only for scheme-category headers; ``scheme_type``
    and ``category`` only when the header carries them in parentheses.
    """

    name: str
    maturity: FundMaturity | None = None
    scheme_type: str | None = None
    category: str | None = None

    @property
    def is_scheme_category(self) -> bool:
        return self.maturity is not None


@dataclass(frozen=True)
class ColumnHeader:
    layout_name: str


@dataclass(frozen=True)
class DataFields:
    fields: tuple[str, ...]
    layout_name: str


@dataclass(frozen=True)
class Malformed:
    kind: ErrorKind
    detail: str


LineShape = Union[Blank, SectionHeader, ColumnHeader, DataFields, Malformed]


class LineClassifier:
    """Classifies single feed lines against a fixed set of layouts.

    Holds no per-stream state; one instance can be shared by any number
    of stream parsers.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        layouts: list[FeedLayout] | None = None,
    ) -> None:
        self.config = config or ParserConfig()
        if layouts is None:
            layouts = load_all_layouts(self.config.layouts_dir)
        self.layouts = list(layouts)
        self._by_width = {layout.width: layout for layout in self.layouts}
        self._by_name = {layout.layout_name: layout for layout in self.layouts}

    def layout(self, layout_name: str) -> FeedLayout:
        return self._by_name[layout_name]

    def classify(self, line: str) -> LineShape:
        text = line.strip()
        if not text:
            return Blank()

        sep = self.config.separator
        if sep not in text:
            category = parse_scheme_category(text)
            if category is None:
                return SectionHeader(name=text)
            maturity, scheme_type, category_name = category
            return SectionHeader(
                name=text,
                maturity=maturity,
                scheme_type=scheme_type,
                category=category_name,
            )

        fields = [f.strip() for f in text.split(sep)]

        for layout in self.layouts:
            if layout.matches_legend(fields):
                return ColumnHeader(layout_name=layout.layout_name)

        layout = self._by_width.get(len(fields))
        if layout is None:
            expected = " or ".join(str(w) for w in sorted(self._by_width))
            detail = f"expected {expected} fields, got {len(fields)}"
            if fields[0].isdecimal():
                return Malformed(ErrorKind.STRUCTURAL_MISMATCH, detail)
            return Malformed(ErrorKind.UNCLASSIFIABLE_LINE, detail)

        try:
            convert_fields(fields, layout, self.config)
        except FieldConversionError as exc:
            return Malformed(exc.kind, str(exc))

        return DataFields(fields=tuple(fields), layout_name=layout.layout_name)


@lru_cache(maxsize=1)
def default_classifier() -> LineClassifier:
    """Lazily build the classifier for the built-in layouts."""
    return LineClassifier()


def classify_line(line: str, classifier: LineClassifier | None = None) -> LineShape:
    """Classify one feed line (line terminators already stripped)."""
    return (classifier or default_classifier()).classify(line)
