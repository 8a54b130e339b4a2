"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from udiff.config.loader import ConfigError, load_config, validate
from udiff.config.schema import UdiffConfig


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.diff.max_lookahead == 10_000
        assert cfg.diff.max_context == 3
        assert cfg.diff.chunk_size == 8192
        assert cfg.output.patch_headers is True
        assert cfg.output.exit_code is False

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".udiff.toml").write_text(
            '[diff]\n'
            'max_lookahead = 500\n'
            'max_context = 1\n'
            '[output]\n'
            'exit_code = true\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.diff.max_lookahead == 500
        assert cfg.diff.max_context == 1
        assert cfg.output.exit_code is True

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".udiff.toml").write_text('[diff]\ncolour = "always"\n')
        assert load_config(tmp_path).diff.max_context == 3

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text("[diff]\nmax_context = 7\n")
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.diff.max_context == 7

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".udiff.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_section_not_a_table_raises(self, tmp_path: Path):
        (tmp_path / ".udiff.toml").write_text('diff = "fast"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestValidation:
    def test_zero_lookahead_rejected(self, tmp_path: Path):
        (tmp_path / ".udiff.toml").write_text("[diff]\nmax_lookahead = 0\n")
        with pytest.raises(ConfigError, match="max_lookahead"):
            load_config(tmp_path)

    def test_zero_context_allowed(self):
        cfg = UdiffConfig()
        cfg.diff.max_context = 0
        assert validate(cfg) is cfg

    def test_non_integer_rejected(self, tmp_path: Path):
        (tmp_path / ".udiff.toml").write_text('[diff]\nchunk_size = "big"\n')
        with pytest.raises(ConfigError, match="chunk_size"):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_lookahead_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("UDIFF_MAX_LOOKAHEAD", "42")
        assert load_config(tmp_path).diff.max_lookahead == 42

    def test_context_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("UDIFF_MAX_CONTEXT", "0")
        assert load_config(tmp_path).diff.max_context == 0

    def test_flags_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("UDIFF_PATCH_HEADERS", "0")
        monkeypatch.setenv("UDIFF_EXIT_CODE", "1")
        cfg = load_config(tmp_path)
        assert cfg.output.patch_headers is False
        assert cfg.output.exit_code is True

    def test_env_beats_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".udiff.toml").write_text("[diff]\nmax_context = 9\n")
        monkeypatch.setenv("UDIFF_MAX_CONTEXT", "2")
        assert load_config(tmp_path).diff.max_context == 2

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("UDIFF_CHUNK_SIZE", "lots")
        assert load_config(tmp_path).diff.chunk_size == 8192
