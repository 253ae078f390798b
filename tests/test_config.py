"""
Unit tests for the compiler configuration.
"""
import json

import pytest
from pydantic import ValidationError

from sprig.config import CompilerConfig, load_config


class TestCompilerConfig:
    """Tests for defaults and validation."""

    def test_defaults(self):
        config = CompilerConfig()
        assert config.max_input_length == 65536
        assert config.max_depth == 64
        assert config.integer_bits == 64
        assert config.max_nodes == 100000

    def test_rejects_non_positive_limits(self):
        with pytest.raises(ValidationError):
            CompilerConfig(max_depth=0)


class TestLoadConfig:
    """Tests for loading configuration files."""

    @pytest.fixture
    def isolated(self, tmp_path, monkeypatch):
        """Run with an empty working directory and home."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        return tmp_path

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"max_depth": 10}))
        config = load_config(str(path))
        assert config.max_depth == 10
        assert config.max_input_length == 65536

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.json"))

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"integer_bits": 4}))
        with pytest.raises(ValidationError):
            load_config(str(path))

    def test_defaults_without_files(self, isolated):
        assert load_config() == CompilerConfig()

    def test_working_directory_file(self, isolated):
        (isolated / "sprig.json").write_text(json.dumps({"max_input_length": 100}))
        assert load_config().max_input_length == 100

    def test_home_file(self, isolated):
        """~/.sprig/config.json is used when the working directory has none."""
        (isolated / ".sprig").mkdir()
        (isolated / ".sprig" / "config.json").write_text(json.dumps({"max_depth": 5}))
        assert load_config().max_depth == 5
