import json

import pytest

import main
from _version import __version__
from app_state import MODE_EMPTY, MODE_GRID


def test_build_state_without_path_uses_sample():
    state = main.build_state(None)
    assert state.mode == MODE_GRID
    assert state.file_path is None
    assert state.loader is None
    assert len(state.rows) == 3


def test_build_state_from_file(tmp_path):
    path = tmp_path / "rows.json"
    path.write_text(json.dumps({"a": 1}), encoding="utf-8")
    state = main.build_state(str(path))
    assert state.file_path == str(path)
    assert state.rows == [{"key": "a", "value": 1}]


def test_build_state_keeps_invalid_document(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("", encoding="utf-8")
    state = main.build_state(str(path))
    assert state.mode == MODE_EMPTY
    assert state.error == "Empty input"


def test_version_flag(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["jsongrid", "-v"])
    main.main()
    assert capsys.readouterr().out.strip() == __version__


@pytest.mark.parametrize("argv", [["-h"], ["--help"], ["a.json", "b.json"]])
def test_usage(monkeypatch, capsys, argv):
    monkeypatch.setattr("sys.argv", ["jsongrid", *argv])
    main.main()
    assert "Usage:" in capsys.readouterr().out


def test_missing_file_exits_with_message(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr("sys.argv", ["jsongrid", str(tmp_path / "missing.json")])
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    monkeypatch.setattr(main, "load_config", lambda: {"LOG_LEVEL": "WARNING"})
    with pytest.raises(SystemExit) as exc:
        main.main()
    assert exc.value.code == 1
    assert "Load failed" in capsys.readouterr().err
