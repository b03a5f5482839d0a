"""Kafka adapter – OffsetTracker.

Retries make acknowledgements arrive out of offset order.  Kafka only knows a
single committed offset per partition, so the tracker commits up to the
lowest offset that is still being processed and never past it.
"""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Hashable, Iterable


class OffsetTracker:
    """Per-partition bookkeeping of handed-out and acknowledged offsets."""

    def __init__(self) -> None:
        self._pending: dict[Hashable, set[int]] = defaultdict(set)
        self._acked: dict[Hashable, set[int]] = defaultdict(set)
        self._committed: dict[Hashable, int] = {}

    def track(self, partition: Hashable, offset: int) -> None:
        """Register *offset* as handed out and not yet acknowledged."""
        if offset < self._committed.get(partition, 0):
            return
        self._pending[partition].add(offset)

    def ack(self, partition: Hashable, offset: int) -> int | None:
        """Mark *offset* done and return the next offset to commit.

        ``None`` means the commit point did not move, or that *partition* was
        forgotten after a revocation.  The returned value follows Kafka's
        convention: the offset of the next record to read.
        """
        pending = self._pending.get(partition)
        if pending is None:
            return None
        acked = self._acked[partition]
        pending.discard(offset)
        acked.add(offset)

        commit_point = min(pending) if pending else max(acked) + 1
        acked.difference_update({o for o in acked if o < commit_point})

        if commit_point <= self._committed.get(partition, 0):
            return None
        self._committed[partition] = commit_point
        return commit_point

    def committed(self, partition: Hashable) -> int | None:
        return self._committed.get(partition)

    def pending(self, partition: Hashable) -> set[int]:
        return set(self._pending.get(partition, ()))

    def forget(self, partitions: Iterable[Hashable]) -> None:
        """Drop state of revoked partitions; their new owner starts from the last commit."""
        for partition in partitions:
            self._pending.pop(partition, None)
            self._acked.pop(partition, None)
            self._committed.pop(partition, None)


__all__ = ["OffsetTracker"]
