from __future__ import annotations

import logging
import os

import pytest

from tcp_emitter import config


@pytest.fixture(autouse=True)
def restore_config():
    saved = config.CLIENT_CONFIG.copy()
    level = logging.getLogger().level
    yield
    config.CLIENT_CONFIG.clear()
    config.CLIENT_CONFIG.update(saved)
    logging.getLogger().setLevel(level)


def test_defaults_without_environment(tmp_path, monkeypatch):
    for key in config.DEFAULT_CONFIG:
        monkeypatch.delenv(f"EMITTER_{key.upper()}", raising=False)
    loaded = config.load_config(str(tmp_path / "missing.env"))
    assert loaded == config.DEFAULT_CONFIG
    assert config.CLIENT_CONFIG["delimiter"] == "@@@"


def test_environment_overrides_are_coerced(tmp_path, monkeypatch):
    monkeypatch.setenv("EMITTER_SERVER_PORT", "9000")
    monkeypatch.setenv("EMITTER_DELIMITER", "##")
    monkeypatch.setenv("EMITTER_LOG_LEVEL", "DEBUG")
    loaded = config.load_config(str(tmp_path / "missing.env"))
    assert loaded["server_port"] == 9000
    assert loaded["delimiter"] == "##"
    assert logging.getLogger().level == logging.DEBUG


def test_env_file_is_loaded(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("EMITTER_MAX_BUFFER_SIZE=2048\n", encoding="utf-8")
    try:
        loaded = config.load_config(str(env_file))
        assert loaded["max_buffer_size"] == 2048
    finally:
        os.environ.pop("EMITTER_MAX_BUFFER_SIZE", None)


@pytest.mark.parametrize(
    "key,value",
    [("EMITTER_SERVER_PORT", "70000"), ("EMITTER_READ_CHUNK_SIZE", "0"), ("EMITTER_SERVER_PORT", "abc")],
)
def test_invalid_values_raise(tmp_path, monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(config.ConfigError):
        config.load_config(str(tmp_path / "missing.env"))
