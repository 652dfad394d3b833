from __future__ import annotations

import json
import logging
import os
from logging.handlers import RotatingFileHandler

import pytest

from unixid.core.config import LoggingConfig, UnixIdConfig, load_config
from unixid.core.errors import ConfigError, ReadOnlyIdentityError
from unixid.core.identity import ROOT, UidPrincipal
from unixid.core.logger import setup_logging, setup_logging_from_config


def test_defaults_when_missing(tmp_path):
    assert load_config(None) == UnixIdConfig()
    cfg = load_config(str(tmp_path / "nope.json"))
    assert cfg.logging.level == "INFO"
    assert cfg.logging.log_dir == "logs"


def test_load_valid(tmp_path):
    p = tmp_path / "unixid.json"
    p.write_text(json.dumps({"config_version": 1, "logging": {"level": "debug", "file_enabled": False}}), encoding="utf-8")
    cfg = load_config(str(p))
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.file_enabled is False


@pytest.mark.parametrize(
    "body",
    [
        "{not json",
        "[1, 2]",
        json.dumps({"logging": {"level": "LOUD"}}),
        json.dumps({"unknown": True}),
        json.dumps({"config_version": 0}),
    ],
)
def test_load_invalid(tmp_path, body):
    p = tmp_path / "unixid.json"
    p.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(p))


def test_setup_logging_is_idempotent(tmp_path, clean_unixid_logger):
    lg = setup_logging(str(tmp_path / "logs"))
    n = len(lg.handlers)
    lg2 = setup_logging(str(tmp_path / "logs"))
    assert lg2 is lg
    assert len(lg.handlers) == n == 2
    assert os.path.isdir(tmp_path / "logs")


def test_setup_logging_from_config_without_file(tmp_path, clean_unixid_logger):
    cfg = UnixIdConfig(logging=LoggingConfig(log_dir=str(tmp_path / "logs"), level="WARNING", file_enabled=False))
    lg = setup_logging_from_config(cfg)
    assert lg.level == logging.WARNING
    assert not any(isinstance(h, RotatingFileHandler) for h in lg.handlers)
    assert not os.path.exists(tmp_path / "logs")


def test_read_only_violation_is_logged(tmp_path, clean_unixid_logger):
    setup_logging(str(tmp_path / "logs"))
    with pytest.raises(ReadOnlyIdentityError):
        ROOT.add(UidPrincipal(7))
    for h in clean_unixid_logger.handlers:
        h.flush()
    text = (tmp_path / "logs" / "unixid.log").read_text(encoding="utf-8")
    assert "Refused add on read-only identity" in text


def test_load_undecodable_file(tmp_path):
    p = tmp_path / "unixid.json"
    p.write_bytes(b'{"logging": {"level": "\xff\xfe"}}')
    with pytest.raises(ConfigError) as ei:
        load_config(str(p))
    assert ei.value.context["path"] == str(p)


def test_load_directory_path(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path))


def test_setup_logging_accepts_lowercase_level(tmp_path, clean_unixid_logger):
    lg = setup_logging(str(tmp_path / "logs"), "debug", file_enabled=False)
    assert lg.level == logging.DEBUG


def test_setup_logging_can_disable_file_output(tmp_path, clean_unixid_logger):
    lg = setup_logging(str(tmp_path / "logs"))
    assert any(isinstance(h, RotatingFileHandler) for h in lg.handlers)
    lg = setup_logging(str(tmp_path / "logs"), file_enabled=False)
    assert not any(isinstance(h, RotatingFileHandler) for h in lg.handlers)
    assert len(lg.handlers) == 1
