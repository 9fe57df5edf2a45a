# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
YAML config loading for wgslformer.

A config file goes through three stages, and each stage has its own
failure type:

  read      file must exist, be a regular file and decode as UTF-8
  parse     text must be YAML whose top level is a mapping
  validate  mapping must satisfy WGSLFormerConfig

Read and parse failures raise ConfigLoadError; validation failures raise
ConfigValidationError. Nothing is defaulted for a broken file.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from wgslformer.config.exceptions import ConfigLoadError, ConfigValidationError
from wgslformer.config.schema import WGSLFormerConfig


def _read_text(config_path: Path) -> str:
    if not config_path.is_file():
        reason = "does not exist" if not config_path.exists() else "is not a regular file"
        raise ConfigLoadError(f"{config_path} {reason}")
    try:
        return config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigLoadError(f"Could not read {config_path}: {err}") from err


def parse_config_text(text: str, source: str = "<string>") -> dict[str, Any]:
    """
    Parse YAML text into the raw mapping the schema validates.

    Raises:
        ConfigLoadError: If the text isn't YAML or its top level isn't a mapping.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"{source} is not valid YAML: {err}") from err

    if not isinstance(document, dict):
        kind = "empty" if document is None else type(document).__name__
        raise ConfigLoadError(f"{source} must hold a YAML mapping at the top level, got {kind}")
    return document


def load_config(config_path: Path) -> WGSLFormerConfig:
    """
    Read, parse and validate a config file.

    Returns:
        A frozen WGSLFormerConfig.

    Raises:
        ConfigLoadError: The file can't be read or isn't a YAML mapping.
        ConfigValidationError: The mapping breaks the schema, including a
            model width that doesn't split evenly across the heads.
    """
    document = parse_config_text(_read_text(config_path), source=str(config_path))

    try:
        return WGSLFormerConfig.model_validate(document)
    except ValidationError as err:
        raise ConfigValidationError(f"{config_path} failed validation:\n{err}") from err
