# fuzzymatch/DB/memory_store.py
from __future__ import annotations

from typing import Any, Dict, Hashable, Iterable, Iterator, Mapping, Set, Union

from ..errors import RecordError
from ..models import Record

RecordLike = Union[Record, Mapping[str, Any]]


def as_record(item: RecordLike) -> Record:
    if isinstance(item, Record):
        if item.id is None:
            raise RecordError(f"record is missing an id: {item!r}")
        return item
    return Record.from_mapping(item)


class MemoryStore:
    """
    Direct index: id -> Record, in source insertion order.

    Built once from the full record set. A malformed record or a duplicate id
    aborts construction; nothing partial is kept.
    """

    kind = "direct"

    def __init__(self, records: Iterable[RecordLike] = ()) -> None:
        rows: Dict[Hashable, Record] = {}
        for item in records:
            rec = as_record(item)
            if rec.id in rows:
                raise RecordError(f"duplicate record id: {rec.id!r}")
            rows[rec.id] = rec
        self._rows = rows

    # R
    def read(self, rid: Hashable) -> Record:
        try:
            return self._rows[rid]
        except KeyError:
            raise KeyError(rid)

    def read_many(self, ids: Iterable[Hashable]) -> Iterator[Record]:
        for rid in ids:
            rec = self._rows.get(rid)
            if rec is not None:
                yield rec

    def records(self) -> Iterator[Record]:
        return iter(self._rows.values())

    def count(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, rid: object) -> bool:
        return rid in self._rows

    def candidates(self, query: str) -> Set[Hashable]:
        """No token structure here; every record goes through the fuzzy pass."""
        return set()
