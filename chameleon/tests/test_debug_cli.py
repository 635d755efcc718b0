import json

from chameleon_app import debug
from chameleon_app.persistence.storage_json import JsonStorage


def _last_json(capsys) -> dict:
    out = capsys.readouterr().out.strip()
    return json.loads(out)


def test_debug_config_reads_env(monkeypatch, capsys, tmp_path) -> None:
    monkeypatch.setenv("CHAMELEON_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CHAMELEON_DECAY_SECONDS", "5")
    rc = debug.main(["config"])
    payload = _last_json(capsys)
    assert rc == 0
    assert payload["data_dir"] == str(tmp_path)
    assert payload["decay_seconds"] == 5


def test_debug_init_act_and_status(monkeypatch, capsys, tmp_path) -> None:
    monkeypatch.setenv("CHAMELEON_DATA_DIR", str(tmp_path))

    assert debug.main(["init", "Rex", "--species", "pygmy"]) == 0
    assert _last_json(capsys) == {"ok": True, "message": "Rex is ready to be your new pet!"}

    assert debug.main(["act", "feed"]) == 0
    assert _last_json(capsys)["ok"] is True

    assert debug.main(["status"]) == 0
    payload = _last_json(capsys)
    assert payload["pet"]["name"] == "Rex"
    assert payload["pet"]["species"] == "pygmy"
    assert payload["pet"]["stats"]["hunger"] == 100
    assert payload["finances"]["balance"] == 45
    assert payload["finances"]["expenses"] == 1
    assert payload["badges"] == ["New Pet Parent"]


def test_debug_refusal_returns_nonzero(monkeypatch, capsys, tmp_path) -> None:
    monkeypatch.setenv("CHAMELEON_DATA_DIR", str(tmp_path))
    debug.main(["init", "Rex"])
    capsys.readouterr()

    assert debug.main(["act", "juggle"]) == 1
    payload = _last_json(capsys)
    assert payload["ok"] is False
    assert "Unknown action" in payload["message"]


def test_debug_chore_then_cooldown(monkeypatch, capsys, tmp_path) -> None:
    monkeypatch.setenv("CHAMELEON_DATA_DIR", str(tmp_path))
    debug.main(["init", "Rex"])
    assert debug.main(["chore", "homework"]) == 0
    assert debug.main(["chore", "homework"]) == 1
    capsys.readouterr()

    state = JsonStorage(tmp_path / "chameleon_state.json").load()
    assert state.finances.balance == 65
    assert state.completed_chores == ["homework"]


def test_debug_tick_and_reset(monkeypatch, capsys, tmp_path) -> None:
    monkeypatch.setenv("CHAMELEON_DATA_DIR", str(tmp_path))
    debug.main(["init", "Rex"])
    capsys.readouterr()

    assert debug.main(["tick", "--n", "3"]) == 0
    assert "H:69" in capsys.readouterr().out

    assert debug.main(["reset"]) == 0
    assert _last_json(capsys)["ok"] is True
    assert JsonStorage(tmp_path / "chameleon_state.json").load().is_first_time is True


def test_debug_status_survives_null_timestamps(monkeypatch, capsys, tmp_path) -> None:
    monkeypatch.setenv("CHAMELEON_DATA_DIR", str(tmp_path))
    debug.main(["init", "Rex"])
    capsys.readouterr()
    path = tmp_path / "chameleon_state.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    payload["last_updated"] = None
    payload["pet"]["created_at"] = None
    path.write_text(json.dumps(payload), encoding="utf-8")

    assert debug.main(["status"]) == 0
    assert _last_json(capsys)["is_first_time"] is True
