from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .models import Pair


@dataclass
class KeyValueEntry:
    id: int
    key: str = ""
    value: str = ""


class KeyValueSet:
    """Ordered key/value rows with ids that stay stable across edits.

    Ids come from a per-set counter and are never handed out twice, so a row
    keeps its identity when rows before it are removed. Operations on unknown
    ids are ignored.
    """

    def __init__(self, pairs: Iterable[Pair] = ()) -> None:
        self._entries: list[KeyValueEntry] = []
        self._next_id = 0
        for key, value in pairs:
            self._append(key, value)

    def __iter__(self) -> Iterator[KeyValueEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"KeyValueSet({self.pairs()!r})"

    def add(self) -> KeyValueEntry:
        return self._append("", "")

    def remove(self, entry_id: int) -> None:
        self._entries = [entry for entry in self._entries if entry.id != entry_id]

    def set_key(self, entry_id: int, key: str) -> None:
        entry = self.get(entry_id)
        if entry is not None:
            entry.key = key

    def set_value(self, entry_id: int, value: str) -> None:
        entry = self.get(entry_id)
        if entry is not None:
            entry.value = value

    def get(self, entry_id: int) -> KeyValueEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def reset(self, pairs: Iterable[Pair]) -> None:
        """Replace every row; new rows get fresh ids."""
        self._entries = []
        for key, value in pairs:
            self._append(key, value)

    def pairs(self) -> list[Pair]:
        return [(entry.key, entry.value) for entry in self._entries]

    def active_pairs(self) -> list[Pair]:
        """Pairs that take part in a request: rows with an empty key are skipped."""
        return [(entry.key, entry.value) for entry in self._entries if entry.key]

    def _append(self, key: str, value: str) -> KeyValueEntry:
        entry = KeyValueEntry(id=self._next_id, key=key, value=value)
        self._next_id += 1
        self._entries.append(entry)
        return entry
