"""Unit tests for config.py"""

import pytest

from statscribe.config import Settings, default_config_yaml, load_config


def test_load_config_defaults(monkeypatch, tmp_path):
    """Settings defaults apply when no config.yaml, env var, or CLI override exists."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("STATSCRIBE_MIN_BLOCK_CHARS", raising=False)
    settings = load_config()
    assert settings.min_block_chars == 10
    assert settings.lookahead_lines == 3
    assert settings.output_format == "json"


def test_load_config_reads_config_yaml(tmp_path, monkeypatch):
    """Values in config.yaml override the defaults."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("lookahead_lines: 5\noutput_dir: out\n")
    settings = load_config()
    assert settings.lookahead_lines == 5
    assert settings.output_dir == "out"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """STATSCRIBE_LOOKAHEAD_LINES takes precedence over config.yaml and is coerced to int."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("lookahead_lines: 5\n")
    monkeypatch.setenv("STATSCRIBE_LOOKAHEAD_LINES", "2")
    settings = load_config()
    assert settings.lookahead_lines == 2


def test_load_config_cli_overrides_env(monkeypatch, tmp_path):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STATSCRIBE_OUTPUT_FORMAT", "yaml")
    settings = load_config(overrides={"output_format": "json", "output_dir": None})
    assert settings.output_format == "json"
    assert settings.output_dir == "dist"


def test_load_config_env_bool(monkeypatch, tmp_path):
    """STATSCRIBE_DEDUPE_BLOCKS=false disables duplicate-block suppression."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STATSCRIBE_DEDUPE_BLOCKS", "false")
    assert load_config().dedupe_blocks is False


def test_load_config_invalid_yaml(tmp_path, monkeypatch):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path, monkeypatch):
    """A config.yaml holding a list is rejected."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


def test_load_config_rejects_unknown_format(monkeypatch, tmp_path):
    """output_format outside json/yaml fails validation."""
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValueError):
        load_config(overrides={"output_format": "xml"})


def test_default_config_yaml_round_trips(tmp_path, monkeypatch):
    """The rendered default config loads back to the default settings."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text(default_config_yaml())
    assert load_config() == Settings()
