"""Tests for agentstream configuration loading and validation."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from agentstream.core.config import (
    find_config_file,
    load_env_config,
    load_stream_config,
    load_toml_config,
)
from agentstream.types.config import StreamConfig, StreamConfigError


@pytest.fixture(autouse=True)
def _isolate(monkeypatch, tmp_path):
    """Keep the real environment, cwd, and home directory out of these tests."""
    monkeypatch.delenv("AGENTSTREAM_TICK_MS", raising=False)
    monkeypatch.delenv("AGENTSTREAM_CHUNK_SIZE", raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)


def _write_config(root: Path, body: str) -> Path:
    path = root / ".agentstream" / "config.toml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    return path


class TestStreamConfig:
    def test_defaults(self):
        config = StreamConfig()
        assert config.tick_interval_ms == 50
        assert config.tick_interval == pytest.approx(0.05)
        assert config.replay_chunk_size == 16

    def test_rejects_non_positive_tick(self):
        with pytest.raises(StreamConfigError):
            StreamConfig(tick_interval_ms=0)

    def test_rejects_non_positive_chunk(self):
        with pytest.raises(StreamConfigError):
            StreamConfig(replay_chunk_size=-1)

    def test_error_is_value_error(self):
        assert issubclass(StreamConfigError, ValueError)


class TestEnvConfig:
    def test_empty(self):
        assert load_env_config() == {}

    def test_reads_values(self, monkeypatch):
        monkeypatch.setenv("AGENTSTREAM_TICK_MS", "20")
        monkeypatch.setenv("AGENTSTREAM_CHUNK_SIZE", " 8 ")
        assert load_env_config() == {"tick_interval_ms": 20, "replay_chunk_size": 8}

    def test_bad_value_ignored(self, monkeypatch, caplog):
        monkeypatch.setenv("AGENTSTREAM_TICK_MS", "fast")
        with caplog.at_level(logging.WARNING):
            assert load_env_config() == {}
        assert "AGENTSTREAM_TICK_MS" in caplog.text


class TestTomlConfig:
    def test_no_file(self):
        assert find_config_file() is None
        assert load_toml_config() == {}

    def test_reads_stream_table(self):
        _write_config(Path.cwd(), "[stream]\ntick_interval_ms = 30\n")
        assert load_toml_config() == {"tick_interval_ms": 30}

    def test_explicit_cwd_wins(self, tmp_path):
        project = tmp_path / "project"
        _write_config(project, "[stream]\nreplay_chunk_size = 4\n")
        _write_config(Path.cwd(), "[stream]\nreplay_chunk_size = 9\n")
        assert load_toml_config(str(project)) == {"replay_chunk_size": 4}

    def test_home_fallback(self):
        _write_config(Path.home(), "[stream]\ntick_interval_ms = 75\n")
        assert load_toml_config() == {"tick_interval_ms": 75}

    def test_malformed_file_ignored(self, caplog):
        _write_config(Path.cwd(), "[stream\ntick_interval_ms = ")
        with caplog.at_level(logging.WARNING):
            assert load_toml_config() == {}
        assert "Cannot read config file" in caplog.text

    def test_non_integer_value_ignored(self):
        _write_config(Path.cwd(), '[stream]\ntick_interval_ms = "slow"\nreplay_chunk_size = 2\n')
        assert load_toml_config() == {"replay_chunk_size": 2}

    def test_boolean_rejected(self):
        _write_config(Path.cwd(), "[stream]\ntick_interval_ms = true\n")
        assert load_toml_config() == {}


class TestLoadStreamConfig:
    def test_defaults(self):
        assert load_stream_config() == StreamConfig()

    def test_precedence(self, monkeypatch):
        _write_config(Path.cwd(), "[stream]\ntick_interval_ms = 30\nreplay_chunk_size = 4\n")
        monkeypatch.setenv("AGENTSTREAM_TICK_MS", "40")
        config = load_stream_config(replay_chunk_size=2)
        assert config.tick_interval_ms == 40
        assert config.replay_chunk_size == 2

    def test_none_overrides_ignored(self):
        config = load_stream_config(tick_interval_ms=None, replay_chunk_size=None)
        assert config == StreamConfig()

    def test_invalid_value_raises(self, monkeypatch):
        monkeypatch.setenv("AGENTSTREAM_TICK_MS", "0")
        with pytest.raises(StreamConfigError):
            load_stream_config()
