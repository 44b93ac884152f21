"""Tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

import healthmon.cli as cli_module
from healthmon.cli import EXIT_CONFIG_ERROR, EXIT_HEALTHY, EXIT_UNHEALTHY, build_monitor, main
from healthmon.config import load_config
from healthmon.models import ResourceKind
from healthmon.probes import SyntheticProber

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "config"


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []

    def _record(app_settings: Any, **kwargs: Any) -> None:
        calls.append({"service": app_settings.service.name, **kwargs})

    monkeypatch.setattr(cli_module, "bootstrap_logging_from_app_settings", _record)
    return calls


def _write_config(directory: Path, payload: dict[str, Any]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "appsettings.json").write_text(json.dumps(payload), encoding="utf-8")
    return directory


class TestMain:
    def test_healthy_run_prints_json_and_exits_zero(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main(["--config-dir", str(FIXTURES_DIR), "--env", "development"])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_HEALTHY
        assert payload["status"] == 200
        assert payload["message"] == "Ok"
        assert [result["resource"] for result in payload["results"]] == ["graphql", "cache"]

    def test_timeout_exits_unhealthy(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_dir = _write_config(
            tmp_path / "config",
            {
                "service": {"name": "slow"},
                "monitor": {
                    "timeout_seconds": 0.05,
                    "probe_mode": "synthetic",
                    "synthetic_delay_seconds": 1.0,
                },
                "resources": [{"type": "serviceUrl", "name": "graphql", "handle": "http://g"}],
            },
        )

        exit_code = main(["--config-dir", str(config_dir), "--env", "test"])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_UNHEALTHY
        assert payload == {"status": 503, "message": "Timed out while checking resources"}

    def test_empty_resources_exits_unhealthy(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_dir = _write_config(tmp_path / "config", {"service": {"name": "empty"}})

        exit_code = main(["--config-dir", str(config_dir), "--env", "test"])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_UNHEALTHY
        assert payload == {"status": 500, "message": "Nothing to check"}

    def test_missing_config_exits_with_config_error(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main(["--config-dir", str(tmp_path / "missing")])

        assert exit_code == EXIT_CONFIG_ERROR
        assert "appsettings.json" in capsys.readouterr().err

    def test_non_positive_timeout_is_rejected(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = main(["--config-dir", str(FIXTURES_DIR), "--timeout", "0"])

        assert exit_code == EXIT_CONFIG_ERROR
        assert "--timeout" in capsys.readouterr().err

    def test_logging_is_bootstrapped_from_settings(
        self,
        _quiet_logging: list[dict[str, Any]],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        main(["--config-dir", str(FIXTURES_DIR), "--env", "development"])
        capsys.readouterr()

        assert _quiet_logging[0]["service"] == "test-service"
        assert _quiet_logging[0]["env"] == "development"


class TestBuildMonitor:
    def test_registers_configured_resources(self) -> None:
        app_settings = load_config(config_dir=FIXTURES_DIR, env="test")

        monitor = build_monitor(app_settings, synthetic=True)

        assert len(monitor.registry) == 2
        assert (ResourceKind.SERVICE_URL, "graphql") in monitor.registry
        assert monitor.registry.critical_names == ["graphql"]
        assert isinstance(monitor.probers[ResourceKind.REDIS_CLIENT], SyntheticProber)

    def test_timeout_override(self) -> None:
        app_settings = load_config(config_dir=FIXTURES_DIR, env="test")

        monitor = build_monitor(app_settings, timeout_seconds=0.25)

        assert monitor.settings.timeout_seconds == 0.25
        assert monitor.settings.probe_mode == "live"
