"""
Shared test fixtures and path constants for amfi-nav tests.

All sample feed paths are defined here as module-level constants for
easy discovery and modification. If sample files move or new ones are
added, update this file.
"""

from pathlib import Path

import pytest

from amfi_nav.classify import LineClassifier
from amfi_nav.config import ParserConfig

# ---------------------------------------------------------------------------
# Sample feed paths -- edit here if files move or new ones are added
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

NAV_ALL_TXT = FIXTURES_DIR / "NAVAll.txt"
NAV_OPEN_TXT = FIXTURES_DIR / "NAVOpen.txt"

NAV_ALL_LEGEND = (
    "Scheme Code;ISIN Div Payout/ ISIN Growth;ISIN Div Reinvestment;"
    "Scheme Name;Net Asset Value;Date"
)
NAV_OPEN_LEGEND = (
    "Scheme Code;ISIN Div Payout/ISIN Growth;ISIN Div Reinvestment;"
    "Scheme Name;Net Asset Value;Repurchase Price;Sale Price;Date"
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def classifier() -> LineClassifier:
    """Classifier over the built-in layouts with default settings."""
    return LineClassifier(ParserConfig())


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs against the sample feed files)",
    )
