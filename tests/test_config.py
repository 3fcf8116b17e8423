"""
Config System (config.py)

Tests ScopeConfig, ConfigLoader, configure/get_config.
"""

import json
import os
import logging

import pytest

from scopestack.config import (
    LOG_FORMAT,
    ConfigLoader,
    ScopeConfig,
    configure,
    get_config,
)
from scopestack.faults import ConfigInvalidFault, ErrorKind


# ============================================================================
# ScopeConfig
# ============================================================================

class TestScopeConfig:

    def test_defaults(self):
        cfg = ScopeConfig()
        assert cfg.log_level == "WARNING"
        assert cfg.log_format == LOG_FORMAT
        assert cfg.trace_unwind is False

    def test_level_normalized(self):
        assert ScopeConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_level(self):
        with pytest.raises(ConfigInvalidFault) as exc_info:
            ScopeConfig(log_level="LOUD")
        assert exc_info.value.kind is ErrorKind.CONFIG_ERROR


# ============================================================================
# ConfigLoader
# ============================================================================

class TestConfigLoader:

    def test_empty(self, monkeypatch):
        for key in list(os.environ):
            if key.startswith("SCOPESTACK_"):
                monkeypatch.delenv(key)
        loader = ConfigLoader.load()
        assert loader.to_dict() == {}
        assert loader.get_config() == ScopeConfig()

    def test_json_file(self, tmp_path):
        path = tmp_path / "scopestack.json"
        path.write_text(json.dumps({"log_level": "INFO", "trace_unwind": True}))
        cfg = ConfigLoader.load(paths=[str(path)]).get_config()
        assert cfg.log_level == "INFO"
        assert cfg.trace_unwind is True

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "scopestack.yaml"
        path.write_text("log_level: ERROR\ntrace_unwind: false\n")
        cfg = ConfigLoader.load(paths=[str(path)]).get_config()
        assert cfg.log_level == "ERROR"

    def test_glob_pattern(self, tmp_path):
        (tmp_path / "a.json").write_text(json.dumps({"log_level": "INFO"}))
        (tmp_path / "b.json").write_text(json.dumps({"log_level": "ERROR"}))
        loader = ConfigLoader.load(paths=[str(tmp_path / "*.json")])
        assert loader.get("log_level") == "ERROR"

    def test_env_file(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text('SCOPESTACK_TRACE_UNWIND=true\nSCOPESTACK_LOG_LEVEL="debug"\nOTHER=1\n')
        loader = ConfigLoader.load(env_file=str(env))
        cfg = loader.get_config()
        assert cfg.trace_unwind is True
        assert cfg.log_level == "DEBUG"
        assert "other" not in loader.to_dict()

    def test_missing_env_file_ignored(self, tmp_path):
        loader = ConfigLoader.load(env_file=str(tmp_path / "nope.env"))
        assert "trace_unwind" not in loader.to_dict()

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "scopestack.json"
        path.write_text(json.dumps({"log_level": "INFO"}))
        monkeypatch.setenv("SCOPESTACK_LOG_LEVEL", "ERROR")
        cfg = ConfigLoader.load(paths=[str(path)]).get_config()
        assert cfg.log_level == "ERROR"

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("SCOPESTACK_LOG_LEVEL", "ERROR")
        loader = ConfigLoader.load(overrides={"log_level": "CRITICAL"})
        assert loader.get_config().log_level == "CRITICAL"

    def test_nested_env_keys(self, monkeypatch):
        monkeypatch.setenv("SCOPESTACK_EXTRA__DEPTH", "3")
        loader = ConfigLoader.load()
        assert loader.get("extra.depth") == 3
        assert loader.get("extra.missing", "dflt") == "dflt"

    def test_parse_value(self):
        loader = ConfigLoader()
        assert loader._parse_value("yes") is True
        assert loader._parse_value("off") is False
        assert loader._parse_value("12") == 12
        assert loader._parse_value("1.5") == 1.5
        assert loader._parse_value('{"a": 1}') == {"a": 1}
        assert loader._parse_value("WARNING") == "WARNING"

    def test_type_mismatch(self):
        loader = ConfigLoader.load(overrides={"trace_unwind": "sometimes"})
        with pytest.raises(ConfigInvalidFault) as exc_info:
            loader.get_config()
        assert exc_info.value.metadata["key"] == "trace_unwind"

    def test_unknown_keys_ignored(self):
        loader = ConfigLoader.load(overrides={"colour": "blue"})
        assert loader.get_config() == ScopeConfig()


# ============================================================================
# configure / get_config
# ============================================================================

class TestConfigure:

    def test_activates_config(self):
        cfg = ScopeConfig(trace_unwind=True)
        assert configure(cfg) is cfg
        assert get_config() is cfg

    def test_overrides(self):
        cfg = configure(log_level="info")
        assert cfg.log_level == "INFO"
        assert get_config().log_level == "INFO"

    def test_unknown_override(self):
        with pytest.raises(ConfigInvalidFault):
            configure(colour="blue")

    def test_sets_logger_level_and_single_handler(self):
        configure(log_level="ERROR")
        configure(log_level="DEBUG")
        logger = logging.getLogger("scopestack")
        assert logger.level == logging.DEBUG
        owned = [h for h in logger.handlers if getattr(h, "_scopestack_handler", False)]
        assert len(owned) == 1
