"""
Feed layout loader for amfi-nav.

Loads layout YAML files from amfi_nav/layouts/ (plus an optional extra
directory) and provides structured access via Pydantic models. Each
layout defines:
- layout_name: unique identifier (e.g., "navall")
- legend: the column titles printed on the feed's column-header line
- columns: the NavRecord field each column maps onto, in order
- mandatory: columns that must be non-empty on a data line

The column count is what tells feed variants apart, so no two layouts
may share one.

Why YAML instead of hardcoded:
- AMFI occasionally rewords the legend; the fix is a YAML edit.
- New feed variants are added by dropping in a YAML file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from amfi_nav.exceptions import LayoutError

logger = logging.getLogger(__name__)

# Directory containing layout YAML files (sibling package)
_LAYOUTS_DIR = Path(__file__).parent / "layouts"

# NavRecord fields a feed column may map onto
RECORD_COLUMNS = (
    "scheme_code",
    "isin_growth",
    "isin_dividend",
    "name",
    "nav",
    "repurchase_price",
    "sale_price",
    "date",
)

DECIMAL_COLUMNS = frozenset({"nav", "repurchase_price", "sale_price"})
ISIN_COLUMNS = frozenset({"isin_growth", "isin_dividend"})


def normalize_title(title: str) -> str:
    """Canonical form of a legend title: no whitespace, lower case."""
    return "".join(title.split()).lower()


class FeedLayout(BaseModel):
    """A feed variant loaded from YAML."""

    layout_name: str
    description: str = ""
    legend: list[str]
    columns: list[str]
    mandatory: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_columns(self) -> FeedLayout:
        unknown = [c for c in self.columns if c not in RECORD_COLUMNS]
        if unknown:
            raise ValueError(f"Unknown columns {unknown}; expected any of {list(RECORD_COLUMNS)}")
        if len(set(self.columns)) != len(self.columns):
            raise ValueError(f"Duplicate columns in {self.columns}")
        for required in ("scheme_code", "name", "date"):
            if required not in self.columns:
                raise ValueError(f"Layout must map a '{required}' column")
        if len(self.legend) != len(self.columns):
            raise ValueError(
                f"Legend has {len(self.legend)} titles but {len(self.columns)} columns"
            )
        stray = [c for c in self.mandatory if c not in self.columns]
        if stray:
            raise ValueError(f"Mandatory columns {stray} are not in columns")
        return self

    @property
    def width(self) -> int:
        return len(self.columns)

    def matches_legend(self, fields: list[str]) -> bool:
        """True if *fields* spell out this layout's legend (case-insensitive)."""
        if len(fields) != self.width:
            return False
        return all(
            normalize_title(got) == normalize_title(want)
            for got, want in zip(fields, self.legend)
        )


def load_layout(path: Path) -> FeedLayout:
    """Load a single layout YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if not isinstance(raw, dict):
        raise LayoutError(f"Layout file is empty or not a mapping: {path}")
    return FeedLayout.model_validate(raw)


def load_all_layouts(extra_dir: str | Path | None = None) -> list[FeedLayout]:
    """Load the built-in layouts plus any found in *extra_dir*.

    A layout in *extra_dir* replaces a built-in one with the same
    ``layout_name``.  Files that fail to load are logged and skipped.

    Returns:
        Layouts sorted by column count.

    Raises:
        LayoutError: If no layouts load, or two layouts share a column count.
    """
    dirs = [_LAYOUTS_DIR]
    if extra_dir is not None:
        extra = Path(extra_dir)
        if extra.is_dir():
            dirs.append(extra)
        else:
            logger.warning("Extra layouts directory not found: %s", extra)

    by_name: dict[str, FeedLayout] = {}
    for layouts_dir in dirs:
        for yaml_path in sorted(layouts_dir.glob("*.yaml")):
            try:
                layout = load_layout(yaml_path)
            except (yaml.YAMLError, ValidationError, LayoutError) as e:
                logger.warning("Failed to load layout from %s: %s", yaml_path, e)
                continue
            by_name[layout.layout_name] = layout
            logger.debug("Loaded layout: %s from %s", layout.layout_name, yaml_path)

    if not by_name:
        raise LayoutError(f"No layout YAML files found in {[str(d) for d in dirs]}")

    layouts = sorted(by_name.values(), key=lambda l: l.width)
    widths = [l.width for l in layouts]
    if len(set(widths)) != len(widths):
        raise LayoutError(
            "Feed layouts must have distinct column counts, got "
            + ", ".join(f"{l.layout_name}={l.width}" for l in layouts)
        )
    logger.debug("Loaded %d layouts", len(layouts))
    return layouts
