"""
amfi-nav: Python library for parsing the AMFI daily NAV feed.

The feed (``NAVAll.txt`` and older ``NAVOpen.txt`` style files) is a
semicolon-delimited text file that interleaves blank lines, section
headers (fund houses and scheme categories), column legends and data
lines.  This library turns it into a lazy stream of typed results.

Public API surface:

- ``parse_feed(lines, ...)`` -- **core entry point**.  Takes decoded
  lines and returns a single-pass iterator yielding, per data line,
  either a ``NavRecord`` or a ``LineError``.  One bad line never stops
  the stream.

- ``nav_from_file(path, ...)`` / ``nav_from_text(text, ...)`` -- the
  same stream over a local file or an in-memory string.

- ``classify_line(line)`` -- the context-free line classifier.

- ``records_to_frame(...)`` / ``export_records(...)`` -- pandas
  DataFrame / CSV / Parquet output.

Example::

    import amfi_nav

    for item in amfi_nav.nav_from_file("NAVAll.txt"):
        if isinstance(item, amfi_nav.LineError):
            log.warning("%s", item)
            continue
        print(f"{item.nav!s:>10} {item.date} {item.name}")
"""

from __future__ import annotations

from amfi_nav.classify import LineClassifier, classify_line
from amfi_nav.config import NOT_AVAILABLE, ParserConfig, load_config, save_config
from amfi_nav.export import export_records, records_to_frame
from amfi_nav.models import ErrorKind, FundMaturity, FundPlan, LineError, NavRecord, ParseOutcome
from amfi_nav.parser import FeedParser, parse_feed
from amfi_nav.sources import nav_from_file, nav_from_text

__all__ = [
    "parse_feed",
    "nav_from_file",
    "nav_from_text",
    "classify_line",
    "records_to_frame",
    "export_records",
    "FeedParser",
    "LineClassifier",
    "ParserConfig",
    "load_config",
    "save_config",
    "NavRecord",
    "LineError",
    "ErrorKind",
    "FundMaturity",
    "FundPlan",
    "ParseOutcome",
    "NOT_AVAILABLE",
]
