"""Persist and load juices (JSON). Create when id is the new-entry sentinel, else update by id."""
import json
import logging
import threading
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import List, Optional

from juicetracker.models.juice import NEW_JUICE_ID, Juice, JuiceColor, clamp_rating

logger = logging.getLogger(__name__)


def _juice_from_dict(item: dict) -> Juice:
    return Juice(
        id=int(item["id"]),
        name=item["name"],
        description=item["description"],
        color=JuiceColor.from_name(item["color"]),
        rating=clamp_rating(item["rating"]),
    )


def juice_to_dict(j: Juice) -> dict:
    return {
        "id": j.id,
        "name": j.name,
        "description": j.description,
        "color": j.color.name,
        "rating": j.rating,
    }


def load_juices(path: Path) -> List[Juice]:
    """Load all juices from disk, in stored order."""
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        logger.warning("Unreadable juice file %s, starting empty", path)
        return []
    out = []
    for item in data.get("juices", []):
        try:
            out.append(_juice_from_dict(item))
        except (KeyError, TypeError, ValueError):
            continue
    return out


def save_juices(path: Path, juices: List[Juice]) -> None:
    """Save all juices to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {"juices": [juice_to_dict(j) for j in juices]}
    path.write_text(json.dumps(data, indent=2))


class JuiceStore:
    """JSON-file juice store. Thread-safe; every write rewrites the file."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def list_juices(self) -> List[Juice]:
        with self._lock:
            return load_juices(self._path)

    def fetch_by_id(self, juice_id: int) -> Optional[Juice]:
        """Return the juice with this id or None."""
        with self._lock:
            for j in load_juices(self._path):
                if j.id == juice_id:
                    return j
        return None

    def persist(self, juice: Juice) -> Optional[Juice]:
        """Insert a new juice (assigning the next id) or replace the stored one with the same id.

        Returns the stored juice, or None when updating an id that does not exist.
        """
        with self._lock:
            juices = load_juices(self._path)
            if juice.is_new:
                next_id = max((j.id for j in juices), default=NEW_JUICE_ID) + 1
                stored = Juice(next_id, juice.name, juice.description, juice.color, juice.rating)
                juices.append(stored)
                save_juices(self._path, juices)
                logger.info("Added juice %s (%s)", stored.id, stored.name)
                return stored
            for i, j in enumerate(juices):
                if j.id == juice.id:
                    juices[i] = juice
                    save_juices(self._path, juices)
                    logger.info("Updated juice %s", juice.id)
                    return juice
        logger.warning("Persist ignored: no juice with id %s", juice.id)
        return None

    def delete(self, juice_id: int) -> bool:
        """Remove juice by id; save. Returns True if found and removed."""
        with self._lock:
            juices = load_juices(self._path)
            for i, j in enumerate(juices):
                if j.id == juice_id:
                    juices.pop(i)
                    save_juices(self._path, juices)
                    logger.info("Deleted juice %s", juice_id)
                    return True
        return False


class BackgroundFetchStore:
    """Wraps a JuiceStore so fetch_by_id runs on an executor and returns a Future."""

    def __init__(self, store: JuiceStore, executor: Executor) -> None:
        self._store = store
        self._executor = executor

    def fetch_by_id(self, juice_id: int) -> "Future[Optional[Juice]]":
        return self._executor.submit(self._store.fetch_by_id, juice_id)

    def persist(self, juice: Juice) -> Optional[Juice]:
        return self._store.persist(juice)
