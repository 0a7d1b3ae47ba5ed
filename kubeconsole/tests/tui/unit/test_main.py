"""Tests for the command-line entry point."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from kubeconsole.constants.values import APP_VERSION
from kubeconsole.main import app, apply_overrides
from kubeconsole.models.state.app_settings import AppSettings
from kubeconsole.models.state.config_manager import ConfigManager

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("kubeconsole")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(f"logging:\n  file: {tmp_path / 'console.log'}\n", encoding="utf-8")
    return path


class TestApplyOverrides:
    """Tests for layering flags over loaded settings."""

    def test_flags_win(self) -> None:
        updated = apply_overrides(
            AppSettings(),
            context="staging",
            namespace="batch",
            refresh=5.0,
            no_color=True,
            insecure_kubelet=True,
            max_concurrent=4,
            snapshot=Path("cluster.yaml"),
            verbose=True,
        )
        assert updated.cluster.context == "staging"
        assert updated.cluster.namespace == "batch"
        assert updated.refresh.interval == 5.0
        assert updated.ui.no_color is True
        assert updated.kubelet.insecure is True
        assert updated.refresh.max_concurrent == 4
        assert updated.snapshot_path == "cluster.yaml"
        assert updated.verbose is True

    def test_missing_flags_keep_loaded_values(self) -> None:
        settings = AppSettings()
        settings.cluster.context = "prod"
        updated = apply_overrides(settings)
        assert updated.cluster.context == "prod"
        assert updated.snapshot_path == ""

    def test_original_is_untouched(self) -> None:
        settings = AppSettings()
        apply_overrides(settings, namespace="batch")
        assert settings.cluster.namespace == ""


class TestCommands:
    """Tests for the typer commands."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"kubeconsole version {APP_VERSION}" in result.stdout

    def test_init_config(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "config.yaml"
        result = runner.invoke(app, ["init-config", "--path", str(target)])
        assert result.exit_code == 0
        assert target.is_file()
        assert ConfigManager.load(target, environ={}) == AppSettings()

    def test_init_config_keeps_existing_file(self, config_file: Path) -> None:
        before = config_file.read_text(encoding="utf-8")
        result = runner.invoke(app, ["init-config", "--path", str(config_file)])
        assert result.exit_code == 1
        assert config_file.read_text(encoding="utf-8") == before

    def test_init_config_force(self, config_file: Path) -> None:
        result = runner.invoke(app, ["init-config", "--path", str(config_file), "--force"])
        assert result.exit_code == 0

    def test_console_with_missing_config(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["console", "--config", str(tmp_path / "absent.yaml")])
        assert result.exit_code == 1

    def test_console_without_data_source(self, config_file: Path) -> None:
        result = runner.invoke(app, ["console", "--config", str(config_file)])
        assert result.exit_code == 2
