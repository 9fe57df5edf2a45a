# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the config loader.

We check that:
  1. Valid YAML loads into a frozen, correct config object
  2. Missing or unknown fields raise ConfigValidationError
  3. Broken YAML and bad paths raise ConfigLoadError
  4. Cross-field model checks surface as ConfigValidationError
"""

import textwrap
from pathlib import Path

import pytest

from wgslformer.config.exceptions import ConfigError, ConfigLoadError, ConfigValidationError
from wgslformer.config.loader import load_config, parse_config_text


class TestLoadValidConfig:
    def test_loads_minimal_valid_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.global_config.project_name == "wgslformer-test"
        assert config.global_config.seed == 42
        assert config.global_config.log_level == "DEBUG"

    def test_optional_sections_default_to_none(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.tokenizer is None
        assert config.model is None
        assert config.runtime is None

    def test_loads_full_config_with_all_sections(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
              project_name: "full-test"
              seed: 7
            tokenizer:
              config_version: "1.0.0"
              lowercase: true
              min_frequency: 2
            model:
              config_version: "1.0.0"
              architecture: "Transformer"
              d_model: 64
              nhead: 4
              num_layers: 2
              dim_feedforward: 128
              max_seq_len: 32
            runtime:
              config_version: "1.0.0"
              max_new_tokens: 8
              temperature: 0.7
              top_k: 5
        """)
        config_file = tmp_path / "full.yaml"
        config_file.write_text(content, encoding="utf-8")

        config = load_config(config_file)
        assert config.tokenizer is not None
        assert config.tokenizer.min_frequency == 2
        assert config.model is not None
        assert config.model.d_model == 64
        assert config.model.architecture == "Transformer"
        assert config.runtime is not None
        assert config.runtime.top_k == 5
        assert config.model.seed == 7
        assert config.runtime.seed == 7


class TestLoadInvalidConfig:
    def test_missing_required_field_raises_validation_error(
        self, invalid_config_file: Path
    ) -> None:
        with pytest.raises(ConfigValidationError):
            load_config(invalid_config_file)

    def test_unknown_field_raises_validation_error(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
              some_nonsense_field: true
        """)
        config_file = tmp_path / "unknown_field.yaml"
        config_file.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_indivisible_width_raises_validation_error(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
            model:
              config_version: "1.0.0"
              d_model: 10
              nhead: 3
        """)
        config_file = tmp_path / "bad_heads.yaml"
        config_file.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigValidationError, match="divisible"):
            load_config(config_file)

    def test_broken_yaml_raises_load_error(self, broken_yaml_file: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(broken_yaml_file)

    def test_non_mapping_yaml_raises_load_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config(config_file)

    def test_nonexistent_file_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path / "does_not_exist.yaml")

    def test_directory_path_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path)

    def test_errors_share_a_base_class(self) -> None:
        assert issubclass(ConfigLoadError, ConfigError)
        assert issubclass(ConfigValidationError, ConfigError)


class TestConfigImmutability:
    def test_cannot_mutate_frozen_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        with pytest.raises(Exception):
            config.global_config.seed = 999  # type: ignore[misc]


class TestParseConfigText:
    def test_returns_raw_mapping(self) -> None:
        document = parse_config_text("global:\n  seed: 3\n")
        assert document == {"global": {"seed": 3}}

    def test_empty_text_is_rejected(self) -> None:
        with pytest.raises(ConfigLoadError, match="empty"):
            parse_config_text("")

    def test_source_appears_in_message(self) -> None:
        with pytest.raises(ConfigLoadError, match="inline.yaml"):
            parse_config_text("key: [unclosed", source="inline.yaml")
