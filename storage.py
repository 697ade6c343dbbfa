from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Generic, Protocol, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ListStore(Protocol[T]):
    def load(self) -> list[T]: ...

    def save(self, items: list[T]) -> None: ...

    def append(self, item: T) -> None: ...

    def delete(self, index: int) -> None: ...


class JsonListStore(Generic[T]):
    """A list of items kept under one key of a JSON file.

    Subclasses convert items to and from plain JSON values by overriding
    ``_encode`` and ``_decode``.
    """

    key = "items"

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[T]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable store file %s", self.path)
            return []
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s without a top-level object", self.path)
            return []
        items = []
        for position, raw in enumerate(data.get(self.key) or []):
            try:
                items.append(self._decode(raw))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping entry %d of %s: %s", position, self.path, exc)
        return items

    def save(self, items: list[T]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {self.key: [self._encode(item) for item in items]}
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def append(self, item: T) -> None:
        items = self.load()
        items.append(item)
        self.save(items)

    def delete(self, index: int) -> None:
        items = self.load()
        if not 0 <= index < len(items):
            raise IndexError(f"No item at index {index} in {self.path.name}")
        del items[index]
        self.save(items)

    def _encode(self, item: T) -> Any:
        return item

    def _decode(self, raw: Any) -> T:
        """Turn one stored value into an item; raise TypeError or ValueError to skip it."""
        return raw
