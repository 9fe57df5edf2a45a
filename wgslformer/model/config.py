# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Model configuration for WGSLFormer.

This is a plain data object (not Pydantic) because it's used inside torch
modules and needs to be lightweight. Validation of user-facing YAML happens
in config/schema.py; this class only re-checks the one invariant the
layers can't live without, that the width splits evenly across heads.
"""

from enum import Enum

from wgslformer.config.schema import ModelConfig
from wgslformer.logging.logger import get_logger

logger = get_logger(__name__)


class ModelArchitecture(str, Enum):
    """
    Architectures a config can ask for.

    Only TRANSFORMER is implemented. LSTM is accepted so that configs
    naming it still load, but the model it builds is a stub with no
    parameters that always predicts zeros.
    """

    TRANSFORMER = "transformer"
    LSTM = "lstm"

    @classmethod
    def parse(cls, name: str) -> "ModelArchitecture":
        """
        Resolve an architecture name case-insensitively.

        Unknown names fall back to TRANSFORMER with a warning instead of
        failing, so a typo in a config never stops a run.
        """
        normalized = name.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member

        logger.warning(
            "unknown_architecture",
            extra={"requested": name, "fallback": cls.TRANSFORMER.value},
        )
        return cls.TRANSFORMER


class TransformerModelConfig:
    """
    Architecture dimensions for the encoder-decoder transformer.

    Args:
        vocab_size: Size of the token vocabulary (embedding rows and logits).
        d_model: Model width.
        nhead: Number of attention heads. Must divide d_model.
        num_layers: Number of encoder layers, and of decoder layers.
        dim_feedforward: Hidden width of the feedforward sublayer.
        max_seq_len: Rows in the positional table; longer inputs are truncated.
        norm_eps: Epsilon added to the variance in LayerNorm.
        init_range: Half-width of the uniform init interval.
        seed: Random seed for deterministic initialization.
        architecture: Which architecture the facade should build.

    Raises:
        ValueError: If d_model is not divisible by nhead, or a size is not positive.
    """

    __slots__ = (
        "vocab_size",
        "d_model",
        "nhead",
        "num_layers",
        "dim_feedforward",
        "max_seq_len",
        "norm_eps",
        "init_range",
        "seed",
        "architecture",
    )

    def __init__(
        self,
        vocab_size: int,
        d_model: int = 512,
        nhead: int = 8,
        num_layers: int = 6,
        dim_feedforward: int = 2048,
        max_seq_len: int = 512,
        norm_eps: float = 1e-5,
        init_range: float = 0.1,
        seed: int = 42,
        architecture: ModelArchitecture = ModelArchitecture.TRANSFORMER,
    ) -> None:
        for name, value in (
            ("vocab_size", vocab_size),
            ("d_model", d_model),
            ("nhead", nhead),
            ("dim_feedforward", dim_feedforward),
            ("max_seq_len", max_seq_len),
        ):
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")
        if num_layers < 0:
            raise ValueError(f"num_layers must be >= 0, got {num_layers}")
        if d_model % nhead != 0:
            raise ValueError(
                f"d_model ({d_model}) must be divisible by nhead ({nhead})"
            )

        self.vocab_size = vocab_size
        self.d_model = d_model
        self.nhead = nhead
        self.num_layers = num_layers
        self.dim_feedforward = dim_feedforward
        self.max_seq_len = max_seq_len
        self.norm_eps = norm_eps
        self.init_range = init_range
        self.seed = seed
        self.architecture = architecture

    @property
    def head_dim(self) -> int:
        return self.d_model // self.nhead

    @classmethod
    def from_schema(cls, model_config: ModelConfig, vocab_size: int) -> "TransformerModelConfig":
        """Build from the validated YAML section plus the tokenizer's vocab size."""
        return cls(
            vocab_size=vocab_size,
            d_model=model_config.d_model,
            nhead=model_config.nhead,
            num_layers=model_config.num_layers,
            dim_feedforward=model_config.dim_feedforward,
            max_seq_len=model_config.max_seq_len,
            init_range=model_config.init_range,
            seed=model_config.seed,
            architecture=ModelArchitecture.parse(model_config.architecture),
        )

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.__slots__)
        return f"TransformerModelConfig({fields})"
