import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, List


class KeyedLocks:
    """
    A registry of exclusive locks, one per key.

    Locks are created on first use and dropped once no thread holds or waits
    on them, so the registry only ever contains keys under contention.
    Callers must never hold two keys from the same registry at once.
    """

    def __init__(self, name: str):
        self.name = name
        self._guard = threading.Lock()
        # key -> [lock, number of threads holding or waiting]
        self._entries: Dict[Hashable, List] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._entries[key] = entry
            entry[1] += 1

        lock = entry[0]
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


# Structural mutation of a theatre (seats, showtimes) is serialized per theatre id.
theatre_locks = KeyedLocks("theatre")

# Ticket status transitions are serialized per (showtime_id, seat_id).
unit_locks = KeyedLocks("bookable_unit")
