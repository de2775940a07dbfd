"""
Tests para la carga de configuración (YAML + env + CLI) y el setup de logging.
"""

import logging
from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from easyview.config.loader import (
    apply_cli_overrides,
    deep_merge,
    load_config,
    load_env_overrides,
    load_yaml_config,
)
from easyview.config.schema import AppConfig, LoggingConfig
from easyview.logging import configure_logging, console_level


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("EASYVIEW_WORKSPACE", "EASYVIEW_LOG_LEVEL", "EASYVIEW_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "easyview.yaml"
    path.write_text(
        "workspace:\n"
        "  root: /srv/project\n"
        "indexer:\n"
        "  max_file_size: 1000\n"
        "  exclude_dirs: [vendor, target]\n"
        "logging:\n"
        "  level: info\n"
    )
    return path


# -- Tests: merge ------------------------------------------------------------


class TestDeepMerge:
    def test_nested(self):
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        assert deep_merge(base, {"a": {"b": 99}, "e": 4}) == {
            "a": {"b": 99, "c": 2}, "d": 3, "e": 4,
        }

    def test_base_not_mutated(self):
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


# -- Tests: fuentes ----------------------------------------------------------


class TestSources:
    """Tests para YAML, variables de entorno y CLI."""

    def test_defaults(self):
        config = load_config()
        assert config.workspace.root == Path(".")
        assert config.indexer.max_file_size == 50 * 1024 * 1024
        assert config.indexer.max_view_size == 10 * 1024 * 1024
        assert config.logging.level == "warn"

    def test_yaml(self, config_file):
        config = load_config(config_path=config_file)
        assert config.workspace.root == Path("/srv/project")
        assert config.indexer.max_file_size == 1000
        assert config.indexer.exclude_dirs == ["vendor", "target"]
        assert config.indexer.sample_bytes == 64 * 1024

    def test_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_config(tmp_path / "nope.yaml")

    def test_yaml_empty(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

    def test_yaml_not_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_yaml_config(path)

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("indexer:\n  max_fle_size: 1\n")
        with pytest.raises(ValidationError):
            load_config(config_path=path)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("EASYVIEW_WORKSPACE", "/from/env")
        monkeypatch.setenv("EASYVIEW_LOG_LEVEL", "DEBUG")
        overrides = load_env_overrides()
        assert overrides == {
            "workspace": {"root": "/from/env"},
            "logging": {"level": "debug"},
        }

    def test_env_beats_yaml(self, config_file, monkeypatch):
        monkeypatch.setenv("EASYVIEW_WORKSPACE", "/from/env")
        config = load_config(config_path=config_file)
        assert config.workspace.root == Path("/from/env")
        assert config.indexer.max_file_size == 1000

    def test_cli_beats_env(self, config_file, monkeypatch):
        monkeypatch.setenv("EASYVIEW_WORKSPACE", "/from/env")
        config = load_config(
            config_path=config_file,
            cli_args={"workspace": Path("/from/cli"), "verbose": 2, "include_hidden": True},
        )
        assert config.workspace.root == Path("/from/cli")
        assert config.logging.verbose == 2
        assert config.indexer.include_hidden is True

    def test_unset_cli_args_ignored(self):
        merged = apply_cli_overrides(
            {"logging": {"level": "error"}},
            {"workspace": None, "log_file": None, "verbose": 0, "include_hidden": False},
        )
        assert merged == {"logging": {"level": "error"}}

    def test_invalid_level(self, monkeypatch):
        monkeypatch.setenv("EASYVIEW_LOG_LEVEL", "loud")
        with pytest.raises(ValidationError):
            load_config()


# -- Tests: logging ----------------------------------------------------------


class TestLoggingSetup:
    """Tests para configure_logging."""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        yield
        for handler in logging.root.handlers:
            handler.close()
        logging.root.handlers.clear()
        structlog.reset_defaults()

    def test_console_level_from_config(self):
        configure_logging(LoggingConfig(level="error"))
        levels = [h.level for h in logging.root.handlers]
        assert levels == [logging.ERROR]

    def test_verbose_raises_console_level(self):
        configure_logging(LoggingConfig(verbose=2))
        assert [h.level for h in logging.root.handlers] == [logging.DEBUG]

    def test_console_level_single_v(self):
        assert console_level(LoggingConfig(level="error", verbose=1)) == logging.INFO
        assert console_level(LoggingConfig(level="debug", verbose=1)) == logging.DEBUG

    def test_quiet_removes_console(self):
        configure_logging(LoggingConfig(), quiet=True)
        assert logging.root.handlers == []

    def test_json_file(self, tmp_path):
        log_file = tmp_path / "logs" / "easyview.jsonl"
        configure_logging(LoggingConfig(file=log_file), quiet=True)
        structlog.get_logger().info("index.build.start", root="/x")
        for handler in logging.root.handlers:
            handler.flush()

        content = log_file.read_text()
        assert '"event": "index.build.start"' in content
        assert '"root": "/x"' in content

    def test_app_config_sections(self):
        assert set(AppConfig.model_fields) == {"workspace", "indexer", "logging"}
