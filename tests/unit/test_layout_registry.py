"""
Unit tests for the feed layout loader (amfi_nav.layout_registry).

Tests the built-in layouts, legend matching, extra layout directories
and the consistency checks.
"""

import logging

import pytest
from pydantic import ValidationError

from amfi_nav.classify import DataFields, LineClassifier
from amfi_nav.config import ParserConfig
from amfi_nav.exceptions import LayoutError
from amfi_nav.layout_registry import FeedLayout, load_all_layouts, load_layout, normalize_title

EXTRA_LAYOUT = """\
layout_name: navmini
description: Code, name, NAV and date only
legend: [Code, Name, NAV, Date]
columns: [scheme_code, name, nav, date]
mandatory: [scheme_code, name, date]
"""


class TestBuiltInLayouts:
    """Tests for the layouts shipped in amfi_nav/layouts/."""

    def test_loads_both_variants(self):
        layouts = load_all_layouts()
        assert [l.layout_name for l in layouts] == ["navall", "navopen"]
        assert [l.width for l in layouts] == [6, 8]

    def test_mandatory_columns(self):
        for layout in load_all_layouts():
            assert layout.mandatory == ["scheme_code", "name", "nav", "date"]

    def test_legend_match(self):
        navall = load_all_layouts()[0]
        assert navall.matches_legend(
            ["scheme code", "ISIN Div Payout/ISIN Growth", "ISIN Div Reinvestment",
             "Scheme Name", "Net Asset Value", "DATE"]
        )
        assert not navall.matches_legend(["Scheme Code", "Date"])

    def test_normalize_title(self):
        assert normalize_title(" ISIN Div  Payout/ ISIN Growth ") == "isindivpayout/isingrowth"


class TestFeedLayoutValidation:
    """Tests for FeedLayout model checks."""

    def _make(self, **overrides) -> FeedLayout:
        data = {
            "layout_name": "x",
            "legend": ["Code", "Name", "Date"],
            "columns": ["scheme_code", "name", "date"],
        }
        data.update(overrides)
        return FeedLayout(**data)

    def test_valid(self):
        assert self._make().width == 3

    def test_unknown_column(self):
        with pytest.raises(ValidationError, match="Unknown columns"):
            self._make(columns=["scheme_code", "name", "price"])

    def test_missing_required_column(self):
        with pytest.raises(ValidationError, match="date"):
            self._make(legend=["Code", "Name"], columns=["scheme_code", "name"])

    def test_legend_length_mismatch(self):
        with pytest.raises(ValidationError, match="Legend has 2 titles"):
            self._make(legend=["Code", "Name"])

    def test_mandatory_must_be_a_column(self):
        with pytest.raises(ValidationError, match="Mandatory"):
            self._make(mandatory=["nav"])


class TestExtraLayouts:
    """Tests for layouts loaded from a caller-supplied directory."""

    def test_extra_layout_is_used(self, tmp_path):
        (tmp_path / "navmini.yaml").write_text(EXTRA_LAYOUT, encoding="utf-8")
        classifier = LineClassifier(ParserConfig(layouts_dir=str(tmp_path)))
        assert [l.layout_name for l in classifier.layouts] == ["navmini", "navall", "navopen"]
        shape = classifier.classify("101;Mini Fund;N.A.;01-Jan-2024")
        assert shape == DataFields(
            fields=("101", "Mini Fund", "N.A.", "01-Jan-2024"), layout_name="navmini"
        )

    def test_duplicate_width_rejected(self, tmp_path):
        clash = EXTRA_LAYOUT.replace("[Code, Name, NAV, Date]", "[A, B, C, D, E, F]").replace(
            "[scheme_code, name, nav, date]",
            "[scheme_code, isin_growth, isin_dividend, name, nav, date]",
        )
        (tmp_path / "clash.yaml").write_text(clash, encoding="utf-8")
        with pytest.raises(LayoutError, match="distinct column counts"):
            load_all_layouts(tmp_path)

    def test_broken_file_is_skipped(self, tmp_path):
        (tmp_path / "broken.yaml").write_text("layout_name: [unclosed\n", encoding="utf-8")
        layouts = load_all_layouts(tmp_path)
        assert [l.layout_name for l in layouts] == ["navall", "navopen"]

    def test_missing_extra_dir_warns(self, tmp_path, caplog):
        missing = tmp_path / "no-such-dir"
        with caplog.at_level(logging.WARNING, logger="amfi_nav.layout_registry"):
            layouts = load_all_layouts(missing)
        assert [l.layout_name for l in layouts] == ["navall", "navopen"]
        assert "not found" in caplog.text
        assert str(missing) in caplog.text

    def test_empty_file_raises_layout_error(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(LayoutError, match="empty"):
            load_layout(path)
