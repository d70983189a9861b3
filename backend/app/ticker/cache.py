"""Thread-safe in-memory snapshot cache."""

from __future__ import annotations

from threading import Lock

from .models import TickerSnapshot


class SnapshotCache:
    """Thread-safe in-memory cache of the latest TickerSnapshot for each symbol.

    Writer: StockTickerService after a successful refresh.
    Readers: StockTickerService freshness checks, anything peeking at the
    last computed result.

    Snapshots are immutable, so replacing one is a single locked assignment
    and readers never observe a half-built value.
    """

    def __init__(self) -> None:
        self._snapshots: dict[str, TickerSnapshot] = {}
        self._lock = Lock()
        self._version: int = 0  # Monotonically increasing; bumped on every put

    def put(self, snapshot: TickerSnapshot) -> TickerSnapshot:
        """Store `snapshot` under its symbol, replacing any previous one."""
        with self._lock:
            self._snapshots[snapshot.symbol] = snapshot
            self._version += 1
            return snapshot

    def get(self, symbol: str) -> TickerSnapshot | None:
        """Latest snapshot for a symbol, or None if never refreshed."""
        with self._lock:
            return self._snapshots.get(symbol)

    def get_all(self) -> dict[str, TickerSnapshot]:
        """Shallow copy of every cached snapshot."""
        with self._lock:
            return dict(self._snapshots)

    def remove(self, symbol: str) -> None:
        with self._lock:
            self._snapshots.pop(symbol, None)

    def clear(self) -> None:
        with self._lock:
            self._snapshots.clear()

    @property
    def version(self) -> int:
        """Current version counter."""
        return self._version

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshots)

    def __contains__(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._snapshots
