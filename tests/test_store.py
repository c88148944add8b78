import json

from pinball_shared.scorestore import HighScoreStore, HIGH_SCORE_KEY, dumps_record, loads_record


def test_missing_file_reads_as_zero(tmp_path):
    assert HighScoreStore(tmp_path / "none.json").load() == 0


def test_save_then_load(tmp_path):
    path = tmp_path / "sub" / "storage.json"
    assert HighScoreStore(path).save(4200)
    assert HighScoreStore(path).load() == 4200
    assert json.loads(path.read_text())[HIGH_SCORE_KEY] == "4200"


def test_other_keys_survive_save(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(dumps_record({"volume": "7"}))
    HighScoreStore(path).save(10)
    record = loads_record(path.read_text())
    assert record == {"volume": "7", HIGH_SCORE_KEY: "10"}


def test_corrupt_values_read_as_zero(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json")
    assert HighScoreStore(path).load() == 0
    path.write_text(json.dumps({HIGH_SCORE_KEY: "lots"}))
    assert HighScoreStore(path).load() == 0
    path.write_text(json.dumps([1, 2]))
    assert HighScoreStore(path).load() == 0


def test_unwritable_path_reports_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    assert not HighScoreStore(blocker / "storage.json").save(5)


def test_in_memory_store():
    store = HighScoreStore(None)
    assert store.load() == 0
    assert store.save(12)
    assert store.load() == 12


def test_save_after_load_only_writes(tmp_path, monkeypatch):
    path = tmp_path / "storage.json"
    path.write_text(dumps_record({"volume": "7"}))
    store = HighScoreStore(path)
    assert store.load() == 0

    def read_again():
        raise AssertionError("store file read during save")

    monkeypatch.setattr(store, "_read", read_again)
    for value in range(1, 61):
        assert store.save(value)
    assert loads_record(path.read_text()) == {"volume": "7", HIGH_SCORE_KEY: "60"}
