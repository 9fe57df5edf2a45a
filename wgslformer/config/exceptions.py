# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exceptions raised by the configuration system.

They live in their own module so callers can catch config failures
without pulling in pydantic or the YAML loader.
"""


class ConfigError(Exception):
    """Base for all configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when a config file cannot be read from disk or parsed as YAML."""


class ConfigValidationError(ConfigError):
    """
    Raised when a config file parses but fails schema validation.

    Covers missing required fields, wrong types, out-of-range values,
    unknown keys, and cross-field problems such as a model width that
    does not split evenly across the attention heads.
    """
