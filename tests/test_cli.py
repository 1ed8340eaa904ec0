import sys

import pytest

import main


def test_cli_rejects_unknown_log_level(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(sys, "argv", [
        "bionic",
        "--file", str(tmp_path / "book.pdf"),
        "--config", str(tmp_path / "absent.json"),
        "--log-level", "verbose",
    ])
    with pytest.raises(SystemExit) as exc:
        main._cli()
    assert exc.value.code == 2
    assert "unknown log level: VERBOSE" in capsys.readouterr().err
