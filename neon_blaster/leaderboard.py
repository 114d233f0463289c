"""
Top-5 leaderboard persisted through a small key/value storage.

Storage is anything with `read(key) -> Optional[str]` and `write(key, value)`.
`JsonFileStorage` keeps all keys in one JSON file on disk; `MemoryStorage` is
for tests and for running without a writable home directory.
"""
from __future__ import annotations
import json
import os
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from .log import get_logger
from .settings import (
    HIGHSCORE_KEY,
    INITIALS_MAX,
    LEADERBOARD_PLACEHOLDER,
    LEADERBOARD_SIZE,
    LEADERBOARD_UNKNOWN,
)

logger = get_logger(__name__)


@dataclass
class LeaderboardEntry:
    name: str
    score: int


def normalize_initials(initials: Optional[str]) -> str:
    name = (initials or "").strip().upper()[:INITIALS_MAX]
    return name or LEADERBOARD_UNKNOWN


def default_entries() -> List[LeaderboardEntry]:
    return [LeaderboardEntry(LEADERBOARD_PLACEHOLDER, 0) for _ in range(LEADERBOARD_SIZE)]


# ============================
# STORAGE
# ============================
class MemoryStorage:
    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, value: str):
        self.data[key] = value


class JsonFileStorage:
    """All keys in one JSON object on disk. Failures degrade to "no data"."""
    def __init__(self, path: str):
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.path)
            return {}
        return data

    def read(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, value: str):
        data = self._load()
        data[key] = value
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            # Read-only disk: the game keeps running with the in-memory table
            logger.warning("Could not write %s: %s", self.path, e)


# ============================
# LEADERBOARD
# ============================
def _parse(raw: str) -> Optional[List[LeaderboardEntry]]:
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(data, list):
        return None
    entries = []
    for item in data:
        if not isinstance(item, dict):
            return None
        name, score = item.get("name"), item.get("score")
        if not isinstance(name, str) or isinstance(score, bool) or not isinstance(score, int):
            return None
        entries.append(LeaderboardEntry(name[:INITIALS_MAX], max(0, score)))
    return entries


def _ranked(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    ranked = sorted(entries, key=lambda e: e.score, reverse=True)[:LEADERBOARD_SIZE]
    ranked += default_entries()[len(ranked):]
    return ranked


class Leaderboard:
    def __init__(self, storage, key: str = HIGHSCORE_KEY):
        self.storage = storage
        self.key = key
        self.entries: List[LeaderboardEntry] = default_entries()

    def load(self) -> List[LeaderboardEntry]:
        raw = self.storage.read(self.key)
        entries = _parse(raw) if raw is not None else None
        if entries is None:
            if raw is not None:
                logger.warning("Malformed leaderboard data under %r, resetting", self.key)
            self.entries = default_entries()
            self._save()
        else:
            self.entries = _ranked(entries)
        return list(self.entries)

    def _save(self):
        self.storage.write(self.key, json.dumps([asdict(e) for e in self.entries]))

    @property
    def lowest_score(self) -> int:
        return self.entries[-1].score

    def is_high_score(self, score: int) -> bool:
        return score > self.lowest_score

    def submit(self, initials: Optional[str], score: int) -> Optional[int]:
        """Insert a score and persist. Returns its 0-based rank, or None if it fell off."""
        if score < 0:
            raise ValueError(f"score must be non-negative, got {score}")
        entry = LeaderboardEntry(normalize_initials(initials), score)
        # Stable sort: an equal score ranks below the ones already on the board
        self.entries = _ranked(self.entries + [entry])
        self._save()
        for rank, e in enumerate(self.entries):
            if e is entry:
                logger.info("New leaderboard entry %s %d at #%d", entry.name, score, rank + 1)
                return rank
        return None
