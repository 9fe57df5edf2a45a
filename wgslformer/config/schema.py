# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for wgslformer.

Each config section gets its own frozen pydantic model. Frozen means the
object cannot be mutated after construction, so the values a model was
built from are the values it keeps.

All models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields fail immediately
  - validate_default=True: defaults are type-checked too

The model section is consumed exactly once, when the model is built.
Nothing downstream re-validates it per forward call.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GlobalConfig(BaseModel):
    """
    Cross-cutting settings: project identity, seed, and logging.

    This is the only required section of a config file.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    project_name: str = Field(
        default="wgslformer", description="Human-readable project identifier"
    )
    seed: int = Field(
        default=42,
        ge=0,
        description="Run seed; model and runtime sections without their own seed inherit it",
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_VALID_LOG_LEVELS)}, got '{value}'"
            )
        return upper


class TokenizerConfig(BaseModel):
    """Settings for the WGSL tokenizer and vocabulary fitting."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(description="Schema version")
    tokenizer_type: str = Field(
        default="wgsl",
        description="Tokenizer family; only 'wgsl' is implemented",
    )
    max_length: int = Field(
        default=512,
        ge=1,
        description="Maximum token sequence length recorded with the vocabulary",
    )
    lowercase: bool = Field(
        default=False,
        description="Lowercase text before tokenizing (off for shader code)",
    )
    min_frequency: int = Field(
        default=1,
        ge=1,
        description="Minimum corpus count for a token to enter the vocabulary",
    )


class ModelConfig(BaseModel):
    """
    Encoder-decoder architecture settings.

    ``architecture`` is a free string. The model
    resolves it case-insensitively and falls back to the transformer
    (with a warning) for names it does not know.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(description="Schema version")
    architecture: str = Field(
        default="transformer",
        description="'transformer' or 'lstm' (case-insensitive)",
    )
    d_model: int = Field(default=512, ge=1, description="Model width")
    nhead: int = Field(default=8, ge=1, description="Number of attention heads")
    num_layers: int = Field(
        default=6,
        ge=1,
        description="Number of encoder layers, and of decoder layers",
    )
    dim_feedforward: int = Field(
        default=2048,
        ge=1,
        description="Hidden width of the position-wise feed-forward sublayer",
    )
    dropout: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Kept for config compatibility; inference applies no dropout",
    )
    max_seq_len: int = Field(
        default=512,
        ge=1,
        description="Maximum sequence length and positional table size",
    )
    seed: int = Field(default=42, ge=0, description="Seed for weight initialization")
    init_range: float = Field(
        default=0.1,
        gt=0.0,
        description="Weights are drawn uniformly from [-init_range, init_range]",
    )

    @model_validator(mode="after")
    def _check_heads_divide_width(self) -> "ModelConfig":
        if self.d_model % self.nhead != 0:
            raise ValueError(
                f"d_model ({self.d_model}) must be divisible by nhead ({self.nhead})"
            )
        return self


class RuntimeConfig(BaseModel):
    """Inference-time generation settings."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(description="Schema version")
    max_new_tokens: int = Field(
        default=64,
        ge=1,
        description="Upper bound on tokens produced per generate() call",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        description="0.0 means greedy decoding",
    )
    top_k: int = Field(
        default=0,
        ge=0,
        description="Restrict sampling to the k best tokens; 0 disables the filter",
    )
    seed: int = Field(default=42, ge=0, description="Seed for sampling")


class WGSLFormerConfig(BaseModel):
    """
    Top-level config container.

    A file may hold only ``global:`` or any combination of the optional
    sections. Sections that are absent stay None, and whatever consumes
    them checks that they are present. A seed set under ``global:`` is
    inherited by the model and runtime sections that don't set their own.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    tokenizer: Optional[TokenizerConfig] = Field(default=None)
    model: Optional[ModelConfig] = Field(default=None)
    runtime: Optional[RuntimeConfig] = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def _inherit_global_seed(cls, data: Any) -> Any:
        # An explicit global seed fills in model and runtime seeds left unset.
        if not isinstance(data, dict):
            return data
        global_section = data.get("global")
        if not isinstance(global_section, dict) or "seed" not in global_section:
            return data

        resolved = dict(data)
        for key in ("model", "runtime"):
            section = resolved.get(key)
            if isinstance(section, dict) and "seed" not in section:
                resolved[key] = {**section, "seed": global_section["seed"]}
        return resolved
