import os
import json
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class PositionStore:
    """Last reading offset per document, kept in a small JSON file."""

    def __init__(self, path: str, max_items: int = 200):
        self.path = path
        self.max_items = max_items
        self.positions: Dict[str, int] = {}

    def load(self) -> Dict[str, int]:
        if not os.path.exists(self.path):
            self.positions = {}
            return self.positions
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable position file %s", self.path)
            self.positions = {}
            return self.positions
        if not isinstance(data, dict):
            data = {}
        self.positions = {
            k: v
            for k, v in data.items()
            if isinstance(k, str) and isinstance(v, int) and not isinstance(v, bool) and v >= 0
        }
        return self.positions

    @staticmethod
    def _key(doc_path: str) -> str:
        return os.path.abspath(doc_path)

    def get(self, doc_path: Optional[str]) -> int:
        if not doc_path:
            return 0
        return self.positions.get(self._key(doc_path), 0)

    def remember(self, doc_path: Optional[str], offset: int) -> None:
        if not doc_path:
            return
        key = self._key(doc_path)
        # re-insert so the most recent entry is last
        self.positions.pop(key, None)
        self.positions[key] = max(0, int(offset))
        if len(self.positions) > self.max_items:
            for old in list(self.positions)[: len(self.positions) - self.max_items]:
                del self.positions[old]
        self.persist()

    def persist(self) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.positions, f, indent=2)
        except OSError:
            logger.exception("Failed to write %s", self.path)
