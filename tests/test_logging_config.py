"""Tests for shellqa.logging_config."""

import logging

import pytest

from conftest import extract
from shellqa.config import AnalysisConfig, load_config
from shellqa.logging_config import configure_logging, get_logger, setup_logging


class TestGetLogger:
    def test_root_logger(self):
        assert get_logger().name == "shellqa"

    def test_module_names_are_namespaced(self):
        assert get_logger("shellqa.core").name == "shellqa.core"
        assert get_logger("plugins").name == "shellqa.plugins"


class TestSetupLogging:
    def test_levels(self):
        assert setup_logging("verbose").level == logging.DEBUG
        assert setup_logging("quiet").level == logging.ERROR
        assert setup_logging().level == logging.WARNING

    def test_unknown_verbosity(self):
        with pytest.raises(ValueError):
            setup_logging("loud")

    def test_extraction_warnings_are_logged(self, caplog):
        setup_logging()
        with caplog.at_level(logging.WARNING, logger="shellqa"):
            extract("broken() {\n  echo\n")
        assert any("broken" in record.getMessage() for record in caplog.records)


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def isolated(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("SHELLQA_VERBOSITY", raising=False)
        yield
        setup_logging()

    def test_uses_config_verbosity(self):
        assert configure_logging(AnalysisConfig(verbosity="verbose")).level == logging.DEBUG

    def test_environment_verbosity(self, monkeypatch):
        monkeypatch.setenv("SHELLQA_VERBOSITY", "quiet")
        assert configure_logging(load_config()).level == logging.ERROR

    def test_file_verbosity(self, tmp_path):
        (tmp_path / "shellqa.toml").write_text('verbosity = "verbose"\n')
        assert configure_logging(load_config()).level == logging.DEBUG
