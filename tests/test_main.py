import sys

import pytest

import main


@pytest.fixture
def run_cli(monkeypatch, tmp_path):
    def run(*args):
        monkeypatch.setattr(sys, "argv", ["main.py", "--config", str(tmp_path / "none.yaml"), *args])
        return main.main()
    return run


def test_locked_gesture_is_refused(run_cli, monkeypatch, capsys):
    monkeypatch.setattr(main, "run_practice", lambda *a, **kw: pytest.fail("session started"))
    assert run_cli("--gesture", "love") == 2
    assert "locked" in capsys.readouterr().out

def test_unknown_gesture_is_refused(run_cli, monkeypatch, capsys):
    monkeypatch.setattr(main, "run_practice", lambda *a, **kw: pytest.fail("session started"))
    assert run_cli("--gesture", "goodbye") == 2
    assert "Unknown gesture" in capsys.readouterr().out

def test_unlocked_gesture_starts_practice(run_cli, monkeypatch):
    started = []
    monkeypatch.setattr(main, "run_practice", lambda config, gesture, debug=False: started.append(gesture.id) or 0)
    assert run_cli("--gesture", "hello") == 0
    assert started == ["hello"]

def test_list(run_cli, capsys):
    assert run_cli("--list") == 0
    out = capsys.readouterr().out
    assert "thank-you" in out
    assert "* locked" in out
