"""
Line sources for the feed parser.

Thin wrappers that hand decoded lines to ``FeedParser``.  Fetching the
feed over HTTP is left to the caller: download ``NAVAll.txt`` with any
client, then pass the decoded text to ``nav_from_text``.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterator

from amfi_nav.classify import LineClassifier
from amfi_nav.config import ParserConfig
from amfi_nav.models import ParseOutcome
from amfi_nav.parser import FeedParser

logger = logging.getLogger(__name__)

# Public URL of the daily feed, for callers doing their own download
AMFI_NAV_URL = "https://portal.amfiindia.com/spages/NAVAll.txt"


def nav_from_file(
    path: str | Path,
    config: ParserConfig | None = None,
    classifier: LineClassifier | None = None,
    encoding: str = "utf-8-sig",
) -> Iterator[ParseOutcome]:
    """Parse a local copy of the feed lazily.

    The file is opened on the first ``next()`` and closed when the
    iterator is exhausted or closed (``close()`` / garbage collection).

    Raises:
        FileNotFoundError: If *path* does not exist (on first ``next()``).
    """
    path = Path(path)
    logger.info("Parsing NAV feed from %s", path)
    with open(path, "r", encoding=encoding, newline="") as f:
        parser = FeedParser(f, config=config, classifier=classifier)
        yield from parser
    logger.info("Finished %s after %d lines", path, parser.line_no)


def nav_from_text(
    text: str,
    config: ParserConfig | None = None,
    classifier: LineClassifier | None = None,
) -> FeedParser:
    """Parse an already-decoded feed held in memory.

    Lines break on ``\\n``, ``\\r\\n`` and ``\\r`` only, as in ``nav_from_file``.
    """
    return FeedParser(io.StringIO(text, newline=""), config=config, classifier=classifier)
