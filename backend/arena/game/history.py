"""Append-only match history, newest first."""

import logging
from collections.abc import Iterator

from .models import MatchRecord

logger = logging.getLogger(__name__)


class MatchHistory:
    """Sink for completed MatchRecords.

    Records are kept in reverse-chronological order. Past entries are never
    replaced or removed.
    """

    def __init__(self) -> None:
        self._records: list[MatchRecord] = []
        self._ids: set[int] = set()

    def append(self, record: MatchRecord) -> bool:
        """Add a record. Returns False if a record with the same id is already present."""
        if record.id in self._ids:
            logger.debug(f"Match {record.id} already in history, skipping")
            return False
        self._records.insert(0, record)
        self._ids.add(record.id)
        return True

    @property
    def records(self) -> tuple[MatchRecord, ...]:
        return tuple(self._records)

    @property
    def latest(self) -> MatchRecord | None:
        return self._records[0] if self._records else None

    def get(self, match_id: int) -> MatchRecord | None:
        for record in self._records:
            if record.id == match_id:
                return record
        return None

    def __contains__(self, match_id: object) -> bool:
        return match_id in self._ids

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MatchRecord]:
        return iter(tuple(self._records))
