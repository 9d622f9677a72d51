"""
Module: slicer.config

Purpose:
    Configuration dataclass for the slicing pipeline. Holds the band
    height, the label-code pattern and the output naming scheme, and
    loads overrides from a JSON file.

Key Classes:
    - SliceConfig: Immutable slicing settings

Key Functions:
    - load_config(): Read a SliceConfig from a JSON file

Dependencies:
    - dataclasses: For frozen dataclass support
    - json: Config file parsing

Used By:
    - slicer.pipeline: Band height, naming and failure policy
    - slicer.detection: Label pattern
    - label_slicer.cli: --config and --band-height options
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict

from .errors import ConfigError

logger = logging.getLogger(__name__)

# Height of one label on the physical sheet, in PDF points
DEFAULT_BAND_HEIGHT = 209.1

# Must be reproduced verbatim
DEFAULT_LABEL_PATTERN = r"\*ST\d{3}R\dT\w{4} \d{4}\*"

DEFAULT_TEMP_NAME = "TEMP_Part_{index}.pdf"
DEFAULT_FINAL_NAME = "TextLabel_Part_{index}.pdf"

# Created beside the input PDF when no output directory is given
DEFAULT_OUTPUT_DIR_NAME = "Filtered_TextBeforeNewline_Labels"


@dataclass(frozen=True)
class SliceConfig:
    """
    Configuration for the label slicing pipeline.

    Attributes:
        band_height: Height of each candidate slice in points (default 209.1).
        label_pattern: Regex a label code must match.
        temp_name_template: Filename for a slice awaiting detection.
            Must contain ``{index}``.
        final_name_template: Filename for an accepted slice. Must contain
            ``{index}`` and differ from the temp template.
        skip_failed_slices: When True a band that fails to crop or save is
            logged and skipped; when False the error aborts the run.
    """
    band_height: float = DEFAULT_BAND_HEIGHT
    label_pattern: str = DEFAULT_LABEL_PATTERN
    temp_name_template: str = DEFAULT_TEMP_NAME
    final_name_template: str = DEFAULT_FINAL_NAME
    skip_failed_slices: bool = True

    def __post_init__(self):
        if isinstance(self.band_height, bool) or not isinstance(self.band_height, (int, float)):
            raise ConfigError(f"band_height must be a number, got {self.band_height!r}")
        if self.band_height <= 0:
            raise ConfigError(f"band_height must be positive, got {self.band_height}")
        try:
            re.compile(self.label_pattern)
        except re.error as e:
            raise ConfigError(f"Invalid label_pattern {self.label_pattern!r}: {e}") from e
        for name in ("temp_name_template", "final_name_template"):
            template = getattr(self, name)
            if "{index}" not in template:
                raise ConfigError(f"{name} must contain '{{index}}', got {template!r}")
        if self.temp_name_template == self.final_name_template:
            raise ConfigError("temp_name_template and final_name_template must differ")

    def temp_name(self, index: int) -> str:
        """Filename for candidate slice ``index`` before detection."""
        return self.temp_name_template.format(index=index)

    def final_name(self, index: int) -> str:
        """Filename for accepted slice ``index``."""
        return self.final_name_template.format(index=index)

    def with_overrides(self, **overrides: Any) -> "SliceConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        try:
            return replace(self, **changes)
        except TypeError as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SliceConfig":
        """
        Build a config from a mapping, rejecting unknown keys.

        Raises:
            ConfigError: If data is not a mapping or holds unknown keys.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a JSON object, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(f"Invalid config value: {e}") from e


def load_config(path: Path) -> SliceConfig:
    """
    Load slicing configuration from a JSON file.

    Keys match the SliceConfig attribute names; omitted keys keep their
    defaults.

    Args:
        path: Path to a JSON file.

    Returns:
        SliceConfig built from the file.

    Raises:
        ConfigError: If the file is missing, malformed or invalid.

    Example:
        >>> Path("slicer.json").write_text('{"band_height": 200.0}')
        >>> load_config(Path("slicer.json")).band_height
        200.0
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed config file {path}: {e}") from e

    config = SliceConfig.from_dict(data)
    logger.debug(f"Loaded slicing config from {path}: band_height={config.band_height}")
    return config
