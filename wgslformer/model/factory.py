# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Model factory for WGSLFormer.

Provides preset configurations and the build functions. All presets share
the same code; only config values change.

  tiny   d_model 64,  4 heads, 2 layers, ffn 256,  max_seq_len 128
  small  d_model 256, 8 heads, 4 layers, ffn 1024, max_seq_len 512
  base   d_model 512, 8 heads, 6 layers, ffn 2048, max_seq_len 512

``base`` matches the defaults of ModelConfig.
"""

from collections.abc import Callable

from wgslformer.logging.logger import get_logger
from wgslformer.model.code_model import CodeGenerationModel
from wgslformer.model.config import TransformerModelConfig

logger = get_logger(__name__)


def tiny_config(vocab_size: int, seed: int = 42) -> TransformerModelConfig:
    """Small enough to build and run in unit tests."""
    return TransformerModelConfig(
        vocab_size=vocab_size,
        d_model=64,
        nhead=4,
        num_layers=2,
        dim_feedforward=256,
        max_seq_len=128,
        seed=seed,
    )


def small_config(vocab_size: int, seed: int = 42) -> TransformerModelConfig:
    return TransformerModelConfig(
        vocab_size=vocab_size,
        d_model=256,
        nhead=8,
        num_layers=4,
        dim_feedforward=1024,
        max_seq_len=512,
        seed=seed,
    )


def base_config(vocab_size: int, seed: int = 42) -> TransformerModelConfig:
    return TransformerModelConfig(
        vocab_size=vocab_size,
        d_model=512,
        nhead=8,
        num_layers=6,
        dim_feedforward=2048,
        max_seq_len=512,
        seed=seed,
    )


PRESETS: dict[str, Callable[..., TransformerModelConfig]] = {
    "tiny": tiny_config,
    "small": small_config,
    "base": base_config,
}


def build_model(config: TransformerModelConfig) -> CodeGenerationModel:
    """
    Build a CodeGenerationModel from a config object.

    This is the canonical entry point for model construction.
    """
    logger.info(
        "building_model",
        extra={
            "architecture": config.architecture.value,
            "d_model": config.d_model,
            "nhead": config.nhead,
            "num_layers": config.num_layers,
            "dim_feedforward": config.dim_feedforward,
            "vocab_size": config.vocab_size,
            "max_seq_len": config.max_seq_len,
        },
    )

    model = CodeGenerationModel(config)

    logger.info(
        "model_built",
        extra={"total_params": model.num_parameters()},
    )
    return model


def build_model_from_preset(
    preset: str,
    vocab_size: int,
    seed: int = 42,
) -> CodeGenerationModel:
    """
    Build a model from a named preset.

    Raises:
        ValueError: If the preset name is unknown.
    """
    factory = PRESETS.get(preset.lower())
    if factory is None:
        raise ValueError(
            f"Unknown preset '{preset}'. Available: {sorted(PRESETS.keys())}"
        )
    return build_model(factory(vocab_size=vocab_size, seed=seed))
