from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

SAVE_PATH_ENV = "PATTERN_MEMORY_SAVE_PATH"
MAX_SCORE = 255


def clamp_score(value: int) -> int:
    return max(0, min(MAX_SCORE, int(value)))


class HighScoreStore:
    """Best score ever reached, kept in a small JSON file.

    Reads never fail: a missing, unreadable or malformed file yields 0.
    A bare integer file is accepted too.
    """

    _version = 1

    def __init__(self, path: Path) -> None:
        self._path = path

    @classmethod
    def default_path(cls) -> Path:
        explicit = os.environ.get(SAVE_PATH_ENV)
        if explicit:
            return Path(explicit).expanduser()
        return Path.home() / ".pattern_memory_score.json"

    def load_high_score(self) -> int:
        if not self._path.exists():
            return 0
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable high score file %s: %s", self._path, exc)
            return 0

        raw = payload.get("high_score") if isinstance(payload, dict) else payload
        if isinstance(raw, bool) or not isinstance(raw, int):
            logger.warning("Ignoring malformed high score in %s", self._path)
            return 0
        return clamp_score(raw)

    def save_high_score(self, value: int) -> None:
        payload = {"version": self._version, "high_score": clamp_score(value)}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
            tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            logger.warning("Could not save high score to %s: %s", self._path, exc)
