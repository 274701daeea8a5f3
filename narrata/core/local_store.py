"""
Local fallback store

JSON file holding lists of payloads keyed by collection name. Relays write
here when the remote channel is unavailable so nothing submitted is lost.
"""
import json
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List

from loguru import logger

from .config import settings

FEEDBACK_COLLECTION = "feedback_submissions"
BETA_SIGNUP_COLLECTION = "beta_signups"


class LocalStore:
    """
    Thread-safe JSON file store

    A missing or unreadable file reads as empty.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self._lock = Lock()

    def _read(self) -> Dict[str, List[Any]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Fallback store unreadable, treating as empty: {}", e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, List[Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def append(self, collection: str, item: Any) -> None:
        """Append one payload to a collection"""
        with self._lock:
            data = self._read()
            items = data.get(collection)
            if not isinstance(items, list):
                items = []
            items.append(item)
            data[collection] = items
            self._write(data)
        logger.info("Stored payload in fallback collection {}", collection)

    def list(self, collection: str) -> List[Any]:
        """Return every payload in a collection"""
        with self._lock:
            items = self._read().get(collection)
        return items if isinstance(items, list) else []

    def clear(self, collection: str) -> None:
        """Remove a collection"""
        with self._lock:
            data = self._read()
            if collection in data:
                data.pop(collection)
                self._write(data)


local_store = LocalStore(settings.fallback_store_path)
