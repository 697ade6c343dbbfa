from __future__ import annotations

import logging
from pathlib import Path

from config import PASSAGES_FILE
from storage import JsonListStore


logger = logging.getLogger(__name__)


class PassageStore(JsonListStore[str]):
    """Passages the user saved for later practice."""

    key = "passages"

    def __init__(self, path: Path = PASSAGES_FILE) -> None:
        super().__init__(path)

    def add(self, passage: str) -> str:
        passage = (passage or "").strip()
        if not passage:
            raise ValueError("Enter a passage first")
        self.append(passage)
        logger.info("Saved passage of %d words", len(passage.split()))
        return passage

    def get(self, index: int) -> str:
        return self.load()[index]
