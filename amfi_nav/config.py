"""
Parser configuration models and YAML I/O for amfi-nav.

This module defines the Pydantic model that maps 1:1 to an optional
``amfinav.yaml`` file, plus helpers for loading and saving it.

Key model:
- ParserConfig: field separator, "not available" tokens, the policy
  for data lines seen before any section header, and an optional
  directory of extra feed layouts.

Key functions:
- load_config(path) -> ParserConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

Every setting has a default, so ``ParserConfig()`` parses the
published AMFI feeds as-is; a config file is only needed when the
upstream feed changes its wording.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from amfi_nav.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

# Separator between fields on data and legend lines
FIELD_SEPARATOR = ";"

# Reserved placeholder the feed uses for a missing numeric value
NOT_AVAILABLE = "N.A."

_DEFAULT_NOT_AVAILABLE_TOKENS = [NOT_AVAILABLE, "NA", "N/A"]


class ParserConfig(BaseModel):
    """Settings for the line classifier and stream parser."""

    separator: str = Field(
        FIELD_SEPARATOR, description="Single character separating fields"
    )
    not_available_tokens: list[str] = Field(
        default_factory=lambda: list(_DEFAULT_NOT_AVAILABLE_TOKENS),
        description="Placeholders meaning 'value not available' (case-insensitive)",
    )
    require_family: bool = Field(
        False,
        description=(
            "If True, a data line seen before any section header is reported "
            "as a missing_family error instead of a record with empty family"
        ),
    )
    layouts_dir: str | None = Field(
        None, description="Extra directory of feed layout YAML files"
    )

    @field_validator("separator")
    @classmethod
    def _check_separator(cls, value: str) -> str:
        if len(value) != 1 or value.isspace():
            raise ValueError(
                f"separator must be a single non-whitespace character, got {value!r}"
            )
        return value

    @field_validator("not_available_tokens")
    @classmethod
    def _check_tokens(cls, value: list[str]) -> list[str]:
        tokens = [t.strip() for t in value if t.strip()]
        if not tokens:
            raise ValueError("not_available_tokens must contain at least one token")
        return tokens

    def is_not_available(self, raw: str) -> bool:
        """Return True if *raw* is one of the "not available" placeholders."""
        probe = raw.strip().upper()
        return any(probe == t.upper() for t in self.not_available_tokens)


def load_config(path: str | Path) -> ParserConfig:
    """Load and validate a YAML config file into a ParserConfig.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return ParserConfig.model_validate(raw)


def save_config(config: ParserConfig, path: str | Path) -> None:
    """Serialize a ParserConfig to YAML with a header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# amfi-nav parser configuration\n\n")
        yaml.dump(data, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
    logger.info("Saved config to %s", path)
