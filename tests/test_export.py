import json
import runpy
from pathlib import Path

import pytest

from cryptolearn.dispatcher import dispatch
from cryptolearn.trace.model import TraceRequest
from cryptolearn.utils.export import trace_to_json, write_trace

SCRIPT = Path(__file__).parent.parent / "scripts" / "run_trace.py"


def test_json_is_deterministic():
    request = TraceRequest(algorithm="aes", input_text="Two One Nine Two", mode="inverse")
    assert trace_to_json(dispatch(request), request) == trace_to_json(dispatch(request), request)


def test_write_trace_to_directory(tmp_path):
    request = TraceRequest(algorithm="checksum", input_text="TEST")
    path = write_trace(tmp_path, dispatch(request), request)
    assert path.parent == tmp_path
    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc["result"] == "FEBF"
    assert doc["request"]["algorithm"] == "checksum"
    assert len(doc["steps"]) == 4


def test_write_trace_to_file(tmp_path):
    request = TraceRequest(algorithm="des", input_text="Secret123")
    path = write_trace(tmp_path / "nested" / "trace.json", dispatch(request), request)
    assert path.name == "trace.json"
    assert json.loads(path.read_text(encoding="utf-8"))["algorithm"] == "feistel-cipher"


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _run_cli(monkeypatch, *argv):
    monkeypatch.setattr("sys.argv", ["run_trace.py", *argv])
    with pytest.raises(SystemExit) as exc:
        runpy.run_path(str(SCRIPT), run_name="__main__")
    return exc.value.code


def test_cli_prints_trace(monkeypatch, capsys):
    assert _run_cli(monkeypatch, "checksum", "TEST") == 0
    out = capsys.readouterr().out
    assert "Final Checksum" in out
    assert "Result: FEBF" in out


def test_cli_json(monkeypatch, capsys):
    assert _run_cli(monkeypatch, "des", "Secret123", "--mode", "decrypt", "--json") == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["mode"] == "inverse"
    assert len(doc["steps"]) == 18


def test_cli_reports_unknown_algorithm(monkeypatch, capsys):
    assert _run_cli(monkeypatch, "rot13", "hello") == 2
    assert "Unsupported algorithm" in capsys.readouterr().err


def test_cli_lists_catalog(monkeypatch, capsys):
    assert _run_cli(monkeypatch, "--list") == 0
    out = capsys.readouterr().out
    for algo in ("spn-cipher", "feistel-cipher", "checksum"):
        assert algo in out


def test_cli_reports_empty_algorithm(monkeypatch, capsys):
    assert _run_cli(monkeypatch, "", "hello") == 2
    assert "Unsupported algorithm" in capsys.readouterr().err
