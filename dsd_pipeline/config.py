"""
Configuration management for DSD conversion.

Supports:
- Loading config from YAML
- Config validation with Pydantic
- Config hashing for reproducibility
"""

import hashlib
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic Config Models
# =============================================================================


class ParserConfig(BaseModel):
    """Markup parsing settings."""

    features: str = "lxml-xml"  # BeautifulSoup tree builder (lxml-xml | html.parser)


class NotesConfig(BaseModel):
    """Note splitting settings."""

    max_note_number: int = 33  # Notes above this are merged into the last accepted note


class LayoutConfig(BaseModel):
    """Sheet layout settings."""

    font_name: str = "맑은 고딕"
    font_size: int = 8
    data_col_start: int = 4  # Column D
    number_format: str = "#,##0_);\\(#,##0\\);\\-_)"
    px_per_width_unit: float = 7.0
    min_column_width: float = 2.0
    scale_divider: int = 1000  # Divider for the thousand-won sheets


class ConverterConfig(BaseModel):
    """Complete conversion configuration."""

    name: Optional[str] = None
    parser: ParserConfig = Field(default_factory=ParserConfig)
    notes: NotesConfig = Field(default_factory=NotesConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)

    def config_hash(self) -> str:
        """
        Generate hash of config for reproducibility tracking.

        Returns:
            SHA256 hash of serialized config (first 12 chars)
        """
        config_json = self.model_dump_json(exclude={"name"})
        return hashlib.sha256(config_json.encode()).hexdigest()[:12]


# =============================================================================
# Config Loading Functions
# =============================================================================


def load_yaml(path: Union[str, Path]) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConverterConfig:
    """
    Load conversion configuration from YAML.

    Args:
        config_path: Path to config file, or None for defaults

    Returns:
        ConverterConfig with all settings resolved
    """
    if config_path is None:
        return ConverterConfig()

    config = ConverterConfig.model_validate(load_yaml(config_path))
    logger.info(f"Loaded config: {config.name or 'default'} (hash: {config.config_hash()})")
    return config


def save_config(config: ConverterConfig, output_path: Union[str, Path]) -> Path:
    """
    Save resolved config to YAML file.

    Args:
        config: ConverterConfig to save
        output_path: Path to save to

    Returns:
        Path where config was saved
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    return output_path


def validate_config(config: ConverterConfig) -> list[str]:
    """
    Validate config and return list of warnings/issues.

    Args:
        config: ConverterConfig to validate

    Returns:
        List of warning messages (empty if all good)
    """
    warnings = []

    if config.parser.features in ("lxml", "html5lib"):
        warnings.append(
            f"features={config.parser.features!r} wraps the document in html/body; use lxml-xml"
        )
    elif config.parser.features == "html.parser":
        warnings.append(
            "features='html.parser' treats HTML empty-element names such as META as childless; lxml-xml is exact"
        )

    if config.notes.max_note_number < 1:
        warnings.append(
            f"max_note_number={config.notes.max_note_number} merges every note into the first one"
        )

    if config.layout.data_col_start < 1:
        warnings.append(f"data_col_start={config.layout.data_col_start} must be a 1-based column index")

    if config.layout.scale_divider <= 0:
        warnings.append(f"scale_divider={config.layout.scale_divider} must be positive")

    if config.layout.px_per_width_unit <= 0:
        warnings.append(f"px_per_width_unit={config.layout.px_per_width_unit} must be positive")

    return warnings
