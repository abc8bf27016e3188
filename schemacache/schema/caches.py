"""Cache primitives backing the schema registry client."""

from __future__ import annotations

from typing import Dict, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class WriteOnceIndex(Generic[K, V]):
    """Grow-only mapping whose entries never change once written.

    Registry ids and content keys are immutable at the source, so a second
    write for a present key keeps the first value. Lookups and inserts do not
    await, which keeps every entry whole under asyncio interleaving.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._store: Dict[K, V] = {}

    def get(self, key: K) -> Optional[V]:
        return self._store.get(key)

    def put_if_absent(self, key: K, value: V) -> V:
        """Store ``value`` unless ``key`` is present; return the stored value."""

        return self._store.setdefault(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)


__all__ = ["WriteOnceIndex"]
