# pinball_shared/scorestore.py
import json
from pathlib import Path
from typing import Dict, Optional, Union

HIGH_SCORE_KEY = "pinballHighScore"
DEFAULT_STORE_FILE = Path.home() / ".pinball" / "storage.json"


def dumps_record(record: Dict[str, str]) -> str:
    """Encode a key-value record as indented JSON."""
    return json.dumps(record, indent=2, sort_keys=True) + "\n"


def loads_record(text: str) -> Optional[Dict[str, str]]:
    """Decode JSON text -> dict of strings, or None if invalid."""
    try:
        obj = json.loads(text)
    except ValueError:
        return None
    if not isinstance(obj, dict):
        return None
    return {str(k): str(v) for k, v in obj.items()}


class HighScoreStore:
    """Key-value string storage holding the only durable value: the high score.

    path=None keeps the value in memory only.
    """

    def __init__(self, path: Union[str, Path, None] = DEFAULT_STORE_FILE):
        self.path = Path(path) if path is not None else None
        # file contents as of the last load; None until the file is read
        self._record: Optional[Dict[str, str]] = {} if self.path is None else None

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            print(f"[pinball] could not read {self.path}: {e}")
            return {}
        return loads_record(text) or {}

    def load(self) -> int:
        if self.path is not None:
            self._record = self._read()
        raw = self._record.get(HIGH_SCORE_KEY, "0")
        try:
            return max(0, int(raw))
        except ValueError:
            return 0

    def save(self, value: int) -> bool:
        if self._record is None:
            self._record = self._read()
        self._record[HIGH_SCORE_KEY] = str(int(value))
        if self.path is None:
            return True
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(dumps_record(self._record), encoding="utf-8")
        except OSError as e:
            print(f"[pinball] could not write {self.path}: {e}")
            return False
        return True
