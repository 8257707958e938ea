import json

import pytest

from finforecast import cli
from finforecast.logging_setup import configure_logging

EVENTS = [
    {"date": "2025-03-01", "type": "income", "amount": 500},
    {"date": "2025-03-04", "type": "expense", "amount": 120},
]


def _feed(monkeypatch, lines):
    it = iter(lines)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(it))


@pytest.fixture(autouse=True)
def _restore_logging():
    # main() points log output at the captured stderr; undo that after each test
    yield
    configure_logging()


def test_cli_runs_forecast_and_quits(tmp_path, monkeypatch, capsys):
    path = tmp_path / "events.json"
    path.write_text(json.dumps(EVENTS))
    _feed(monkeypatch, ["", "60 optimistic", "bogus", "quit"])

    assert cli.main([str(path), "--as-of", "2025-03-10"]) == 0
    out = capsys.readouterr().out
    assert '"scenario": "optimistic"' in out
    assert '"horizon": 60' in out
    assert "Could not parse 'bogus'" in out


def test_cli_reports_invalid_horizon(tmp_path, monkeypatch, capsys):
    path = tmp_path / "events.json"
    path.write_text(json.dumps({"events": EVENTS}))
    _feed(monkeypatch, ["45", "q"])

    assert cli.main([str(path), "--as-of", "2025-03-10"]) == 0
    assert "Invalid request" in capsys.readouterr().out


def test_cli_exits_on_eof(tmp_path, monkeypatch, capsys):
    path = tmp_path / "events.json"
    path.write_text(json.dumps(EVENTS))

    def eof(prompt=""):
        raise EOFError
    monkeypatch.setattr("builtins.input", eof)

    assert cli.main([str(path)]) == 0
    assert "Bye!" in capsys.readouterr().out


def test_parse_command():
    assert cli.parse_command("60 PESSIMISTIC") == {"horizon": 60, "scenario": "pessimistic"}
    assert cli.parse_command("90") == {"horizon": 90}
    with pytest.raises(ValueError):
        cli.parse_command("soon")
    with pytest.raises(ValueError):
        cli.parse_command("30 rosy")


def test_cli_bad_as_of_keeps_loop_alive(tmp_path, monkeypatch, capsys):
    path = tmp_path / "events.json"
    path.write_text(json.dumps(EVENTS))
    _feed(monkeypatch, ["30", "quit"])

    assert cli.main([str(path), "--as-of", "2025-13-01"]) == 0
    out = capsys.readouterr().out
    assert "Invalid request" in out and "$.as_of" in out


def test_cli_impossible_event_date_keeps_loop_alive(tmp_path, monkeypatch, capsys):
    path = tmp_path / "events.json"
    path.write_text(json.dumps([{"date": "2025-02-30", "type": "income", "amount": 5}]))
    _feed(monkeypatch, ["30", "60", "quit"])

    assert cli.main([str(path), "--as-of", "2025-03-10"]) == 0
    assert capsys.readouterr().out.count("$.events[0].date") == 2


def test_cli_stdout_is_pure_json_and_logs_go_to_stderr(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    path = tmp_path / "events.json"
    path.write_text(json.dumps(EVENTS))
    _feed(monkeypatch, ["30", "quit"])

    assert cli.main([str(path), "--as-of", "2025-03-10"]) == 0
    captured = capsys.readouterr()
    banner, _, rest = captured.out.partition("\n")
    assert banner.startswith("finforecast:")
    data = json.loads(rest)
    assert data["status"] == "ok" and data["forecast"]["horizon"] == 30
    assert "forecast.generated" not in captured.out

    log_lines = [json.loads(line) for line in captured.err.splitlines() if line.strip()]
    generated = [r for r in log_lines if r["event"] == "forecast.generated"]
    assert generated and generated[0]["service"] == "finforecast-cli"
