from __future__ import annotations

import pytest

from fileshare import __main__ as cli


def test_load_settings_applies_command_line_overrides(tmp_path):
    config = cli.load_settings(['--port', '9000', '--basedir', str(tmp_path), '--log-level', 'debug'])

    assert config.app_port == 9000
    assert config.base_dir == str(tmp_path)
    assert config.log_level == 'debug'


def test_load_settings_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv('APP_PORT', '8181')
    monkeypatch.setenv('BASE_DIR', str(tmp_path))

    config = cli.load_settings([])

    assert config.app_port == 8181
    assert config.base_dir == str(tmp_path)


def test_load_settings_rejects_out_of_range_port():
    with pytest.raises(SystemExit) as exc:
        cli.load_settings(['--port', '70000'])

    assert exc.value.code == 2


def test_main_exits_before_serving_on_invalid_base_dir(monkeypatch, tmp_path):
    served = []
    monkeypatch.setattr(cli.uvicorn, 'run', lambda *args, **kwargs: served.append(kwargs))

    code = cli.main(['--basedir', str(tmp_path / 'missing')])

    assert code == 2
    assert served == []


def test_main_runs_uvicorn_with_resolved_settings(monkeypatch, tmp_path):
    calls = []

    def _run(app, **kwargs):
        calls.append((app, kwargs))

    monkeypatch.setattr(cli.uvicorn, 'run', _run)

    code = cli.main(['--basedir', str(tmp_path), '--port', '8099', '--host', '127.0.0.1'])

    assert code == 0
    [(app, kwargs)] = calls
    assert kwargs == {'host': '127.0.0.1', 'port': 8099, 'log_level': 'info'}
    assert app.state.settings.base_dir == str(tmp_path.resolve())
