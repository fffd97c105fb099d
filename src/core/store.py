"""
Ordered, append-only container for the records of the active run.
"""

from typing import Iterator, List, Tuple

from src.models.business import BusinessRecord


class ResultStore:
    """Insertion-ordered record list, cleared at the start of each run."""

    def __init__(self) -> None:
        self._records: List[BusinessRecord] = []

    def append(self, record: BusinessRecord) -> None:
        self._records.append(record)

    def clear(self) -> None:
        self._records = []

    def snapshot(self) -> Tuple[BusinessRecord, ...]:
        """Return an immutable copy of the records in insertion order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[BusinessRecord]:
        return iter(self.snapshot())

    def __bool__(self) -> bool:
        return bool(self._records)
