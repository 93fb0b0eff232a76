"""
Stream parser for AMFI NAV feeds.

Pulls lines one at a time, classifies each one, and yields one outcome
per data or malformed line:

- ``NavRecord`` for a good data line, stamped with the current family
  and scheme-category context.
- ``LineError`` for a malformed line.  The stream always continues.

Blank lines, column legends and section headers yield nothing; section
headers only move the context forward.

Context rules:
- Every section header replaces ``family``.
- A scheme-category header (``Open Ended Schemes(...)``) also replaces
  maturity / scheme type / category; a fund house header keeps them.
- A data line before any header gets ``family=""``, unless
  ``ParserConfig.require_family`` is on, in which case it is reported
  as a ``missing_family`` error.

A ``FeedParser`` is a single-pass iterator: construct a new one per
input.  Stopping early needs no cleanup beyond closing the line source.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from pydantic import ValidationError

from amfi_nav.classify import (
    Blank,
    ColumnHeader,
    DataFields,
    LineClassifier,
    Malformed,
    SectionHeader,
    default_classifier,
)
from amfi_nav.config import ParserConfig
from amfi_nav.exceptions import FieldConversionError
from amfi_nav.fields import convert_fields, infer_plan
from amfi_nav.models import ErrorKind, FundMaturity, LineError, NavRecord, ParseOutcome

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


class FeedParser:
    """Single-pass iterator of ``ParseOutcome`` over feed lines.

    Args:
        lines: Decoded feed lines, with or without line terminators.
        config: Parser settings.  Ignored when *classifier* is given.
        classifier: A prebuilt ``LineClassifier`` to share between parsers.

    Attributes:
        family: Name from the most recent section header (``""`` before any).
        line_no: 1-based number of the last line pulled from *lines*.
    """

    def __init__(
        self,
        lines: Iterable[str],
        config: ParserConfig | None = None,
        classifier: LineClassifier | None = None,
    ) -> None:
        if classifier is None:
            classifier = LineClassifier(config) if config is not None else default_classifier()
        self.classifier = classifier
        self.config = classifier.config
        self.family = ""
        self.maturity: FundMaturity | None = None
        self.scheme_type: str | None = None
        self.category: str | None = None
        self.line_no = 0
        self._lines = iter(lines)

    def __iter__(self) -> FeedParser:
        return self

    def __next__(self) -> ParseOutcome:
        for raw in self._lines:
            self.line_no += 1
            line = raw.rstrip("\r\n")
            if self.line_no == 1:
                line = line.lstrip(_BOM)

            shape = self.classifier.classify(line)
            if isinstance(shape, (Blank, ColumnHeader)):
                continue
            if isinstance(shape, SectionHeader):
                self._enter_section(shape)
                continue
            if isinstance(shape, Malformed):
                return self._error(line, shape.kind, shape.detail)
            assert isinstance(shape, DataFields)
            return self._build_record(line, shape)
        raise StopIteration

    def _enter_section(self, header: SectionHeader) -> None:
        self.family = header.name
        if header.is_scheme_category:
            self.maturity = header.maturity
            self.scheme_type = header.scheme_type
            self.category = header.category
        logger.debug("Line %d: entering section %r", self.line_no, header.name)

    def _build_record(self, line: str, shape: DataFields) -> ParseOutcome:
        if self.config.require_family and not self.family:
            return self._error(
                line, ErrorKind.MISSING_FAMILY, "data line before any section header"
            )

        layout = self.classifier.layout(shape.layout_name)
        try:
            values = convert_fields(shape.fields, layout, self.config)
            return NavRecord(
                **values,
                family=self.family,
                maturity=self.maturity,
                scheme_type=self.scheme_type,
                category=self.category,
                plan=infer_plan(str(values["name"])),
            )
        except FieldConversionError as exc:
            return self._error(line, exc.kind, str(exc))
        except ValidationError as exc:
            first = exc.errors()[0]
            loc = ".".join(str(p) for p in first["loc"])
            return self._error(line, ErrorKind.UNCLASSIFIABLE_LINE, f"{loc}: {first['msg']}")

    def _error(self, line: str, kind: ErrorKind, detail: str) -> LineError:
        logger.debug("Line %d rejected (%s): %s", self.line_no, kind.value, detail)
        return LineError(line_no=self.line_no, raw=line, kind=kind, detail=detail)


def parse_feed(
    lines: Iterable[str],
    config: ParserConfig | None = None,
    classifier: LineClassifier | None = None,
) -> Iterator[ParseOutcome]:
    """Parse feed lines lazily.  See ``FeedParser``."""
    return FeedParser(lines, config=config, classifier=classifier)
