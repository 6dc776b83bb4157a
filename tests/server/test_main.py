"""Tests for the catalog server command line entry point."""

import os
import socket
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import uvicorn

from catalog.server.__main__ import APP_IMPORT_STRING, load_config, main
from catalog.server.logging_config import LOGGING_CONFIG


SOURCE_ROOT = Path(__file__).resolve().parents[2] / "catalog-server"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("HOST", raising=False)


def test_load_config_defaults():
    config, reload = load_config([])

    assert config.host == "0.0.0.0"
    assert config.port == 8080
    assert reload is False


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9000")

    config, _ = load_config([])

    assert config.port == 9000


def test_cli_flags_override_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9000")

    config, reload = load_config(["--port", "9100", "--host", "127.0.0.1", "--reload"])

    assert config.port == 9100
    assert config.host == "127.0.0.1"
    assert reload is True


def test_cli_port_overrides_invalid_environment_port(monkeypatch):
    monkeypatch.setenv("PORT", "abc")

    config, _ = load_config(["--port", "9000"])

    assert config.port == 9000


def test_main_serves_app_built_from_resolved_config(monkeypatch):
    monkeypatch.setenv("PORT", "abc")

    with patch("catalog.server.__main__.uvicorn.Server") as server_cls:
        server_cls.return_value.started = True
        main(["--port", "8181"])

    server_cls.return_value.run.assert_called_once()
    uvicorn_config = server_cls.call_args.args[0]
    assert isinstance(uvicorn_config, uvicorn.Config)
    assert uvicorn_config.port == 8181
    assert uvicorn_config.host == "0.0.0.0"
    assert uvicorn_config.access_log is False
    assert uvicorn_config.app.state.config.port == 8181


def test_main_reload_runs_app_by_import_string():
    with patch("catalog.server.__main__.uvicorn.run") as mock_run:
        main(["--reload"])

    args, kwargs = mock_run.call_args
    assert args == (APP_IMPORT_STRING,)
    assert kwargs["reload"] is True
    assert kwargs["log_config"] is LOGGING_CONFIG


def test_main_exits_1_when_server_does_not_start():
    with patch("catalog.server.__main__.uvicorn.Server") as server_cls:
        server_cls.return_value.started = False
        with pytest.raises(SystemExit) as exc_info:
            main([])

    assert exc_info.value.code == 1


def test_main_exits_1_on_invalid_port(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")

    with patch("catalog.server.__main__.uvicorn.Server") as server_cls:
        with pytest.raises(SystemExit) as exc_info:
            main([])

    assert exc_info.value.code == 1
    server_cls.assert_not_called()


def test_exits_1_when_port_already_bound():
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(SOURCE_ROOT), env.get("PYTHONPATH")])
    )
    env["LOG_JSON"] = "true"
    env.pop("PORT", None)

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen()
        port = sock.getsockname()[1]

        result = subprocess.run(
            [
                sys.executable,
                "-m",
                "catalog.server",
                "--host",
                "127.0.0.1",
                "--port",
                str(port),
            ],
            capture_output=True,
            text=True,
            env=env,
            timeout=60,
        )

    assert result.returncode == 1
    assert "Server failed to start" in result.stderr
