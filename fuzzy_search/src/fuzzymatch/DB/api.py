# fuzzymatch/DB/api.py
from __future__ import annotations

from typing import Hashable, Iterable, Iterator, Protocol, Set

from ..config import INDEX_KIND
from ..errors import InvalidConfiguration
from ..models import Record
from .memory_store import MemoryStore, RecordLike


class RecordIndex(Protocol):
    kind: str

    def read(self, rid: Hashable) -> Record: ...
    def read_many(self, ids: Iterable[Hashable]) -> Iterator[Record]: ...
    def records(self) -> Iterator[Record]: ...
    def count(self) -> int: ...
    def candidates(self, query: str) -> Set[Hashable]: ...


def make_index(records: Iterable[RecordLike], kind: str = INDEX_KIND) -> RecordIndex:
    """
    Factory:
      - "direct"   -> MemoryStore (id -> Record, linear fuzzy scan)
      - "inverted" -> TokenIndex  (token -> ids, plus the fuzzy scan)
    """
    if kind == "direct":
        return MemoryStore(records)
    if kind == "inverted":
        from .index import TokenIndex
        return TokenIndex(records)
    raise InvalidConfiguration(f"Unsupported index kind: {kind!r}")
