# fuzzymatch/DB/index.py
"""
Inverted token index over records.

Maps every normalized token of a record's name and tags (whitespace split,
lower-cased, trimmed) to the set of record ids containing it. Used to
order the matching pass: records holding a query token verbatim are scored
first. Every record still goes through the fuzzy pass, since a typo'd query
will not hit any key.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Hashable, Iterable, Set

from ..normalize import tokenize
from .memory_store import MemoryStore, RecordLike

log = logging.getLogger(__name__)


class TokenIndex(MemoryStore):
    kind = "inverted"

    def __init__(self, records: Iterable[RecordLike] = ()) -> None:
        super().__init__(records)
        postings: Dict[str, Set[Hashable]] = defaultdict(set)
        for rec in self.records():
            for text in rec.fields():
                for tok in tokenize(text):
                    postings[tok].add(rec.id)
        # plain dict: lookups of unknown tokens must not grow the index
        self.postings: Dict[str, Set[Hashable]] = dict(postings)
        log.info("Built token index: records=%d tokens=%d", self.count(), len(self.postings))

    def lookup(self, token: str) -> Set[Hashable]:
        return set(self.postings.get(token, ()))

    def candidates(self, query: str) -> Set[Hashable]:
        """Ids of records holding any token of the query verbatim."""
        out: Set[Hashable] = set()
        for tok in tokenize(query):
            out |= self.postings.get(tok, set())
        return out

    def __iter__(self):
        return iter(self.postings)
