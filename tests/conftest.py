# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for wgslformer tests.

Fixtures here are available to every test file automatically.
We keep them minimal: just the stuff that multiple test modules need.
"""

import textwrap
from pathlib import Path

import pytest

from wgslformer.model.code_model import CodeGenerationModel
from wgslformer.model.config import TransformerModelConfig
from wgslformer.tokenizer.wgsl import WGSLTokenizer

SHADER_CORPUS = [
    "@vertex fn vs_main(@builtin(vertex_index) idx: u32) -> @builtin(position) vec4<f32> {"
    " return vec4<f32>(0.0, 0.0, 0.0, 1.0); }",
    "@fragment fn fs_main() -> @location(0) vec4<f32> { return vec4<f32>(1.0, 0.0, 0.0, 1.0); }",
    "@compute @workgroup_size(8, 8, 1) fn main(@builtin(global_invocation_id) id: vec3<u32>) {"
    " let x = id.x; }",
]


@pytest.fixture()
def shader_corpus() -> list[str]:
    return list(SHADER_CORPUS)


@pytest.fixture()
def fitted_tokenizer() -> WGSLTokenizer:
    """A tokenizer fitted on the three-shader corpus with min_frequency=1."""
    tokenizer = WGSLTokenizer()
    tokenizer.fit(SHADER_CORPUS, min_frequency=1)
    return tokenizer


@pytest.fixture()
def tiny_model_config() -> TransformerModelConfig:
    """Small enough that a forward pass takes milliseconds."""
    return TransformerModelConfig(
        vocab_size=50,
        d_model=16,
        nhead=4,
        num_layers=2,
        dim_feedforward=32,
        max_seq_len=16,
        seed=42,
    )


@pytest.fixture()
def tiny_model(tiny_model_config: TransformerModelConfig) -> CodeGenerationModel:
    return CodeGenerationModel(tiny_model_config)


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """
    Create a minimal valid config YAML file in a temp directory.

    This is the smallest config that passes schema validation.
    Tests that need specific config values should write their own files.
    """
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "wgslformer-test"
          seed: 42
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (config_version is missing)."""
    config_content = textwrap.dedent("""\
        global:
          project_name: "wgslformer-test"
          seed: 42
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
