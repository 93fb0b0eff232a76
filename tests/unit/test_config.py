"""
Unit tests for config models and YAML I/O (amfi_nav.config).

Tests Pydantic model validation, the "not available" token check and
YAML serialization round-trip.
"""

import pytest
from pydantic import ValidationError

from amfi_nav.config import (
    FIELD_SEPARATOR,
    NOT_AVAILABLE,
    ParserConfig,
    load_config,
    save_config,
)
from amfi_nav.exceptions import ConfigValidationError


class TestParserConfig:
    """Tests for ParserConfig validation."""

    def test_defaults(self):
        cfg = ParserConfig()
        assert cfg.separator == FIELD_SEPARATOR == ";"
        assert NOT_AVAILABLE in cfg.not_available_tokens
        assert cfg.require_family is False
        assert cfg.layouts_dir is None

    def test_default_token_list_not_shared(self):
        a = ParserConfig()
        b = ParserConfig()
        a.not_available_tokens.append("X")
        assert "X" not in b.not_available_tokens

    @pytest.mark.parametrize("sep", ["", ";;", " ", "\t"])
    def test_bad_separator_rejected(self, sep):
        with pytest.raises(ValidationError, match="separator"):
            ParserConfig(separator=sep)

    def test_empty_token_list_rejected(self):
        with pytest.raises(ValidationError, match="at least one token"):
            ParserConfig(not_available_tokens=["  ", ""])

    def test_tokens_are_trimmed(self):
        cfg = ParserConfig(not_available_tokens=[" N.A. ", ""])
        assert cfg.not_available_tokens == ["N.A."]

    def test_is_not_available(self):
        cfg = ParserConfig()
        assert cfg.is_not_available("N.A.")
        assert cfg.is_not_available(" na ")
        assert not cfg.is_not_available("0")
        assert not cfg.is_not_available("")


class TestConfigYaml:
    """Tests for load_config() / save_config()."""

    def test_round_trip(self, tmp_path):
        cfg = ParserConfig(separator="|", not_available_tokens=["#N/A"], require_family=True)
        path = tmp_path / "nested" / "amfinav.yaml"
        save_config(cfg, path)
        assert path.read_text(encoding="utf-8").startswith("# amfi-nav")
        assert load_config(path) == cfg

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "amfinav.yaml"
        path.write_text("require_family: true\n", encoding="utf-8")
        cfg = load_config(path)
        assert cfg.require_family is True
        assert cfg.separator == ";"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigValidationError, match="empty"):
            load_config(path)

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("separator: '::'\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)
