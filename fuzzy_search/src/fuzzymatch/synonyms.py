# fuzzymatch/synonyms.py
from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence, Tuple

from .DB.cache import SYNONYM, ResultCache, cache_key
from .normalize import normalize


class SynonymResolver:
    """
    Expands a normalized word into (word, *synonyms), synonyms ordered by usage
    weight descending. Missing weights count as 1; ties keep table order
    (sorted() is stable).

    Results are memoized per word: in the shared ResultCache under the
    "synonym:" namespace when one is given, otherwise in a private dict.
    """

    def __init__(
        self,
        synonyms: Optional[Mapping[str, Sequence[str]]] = None,
        usage: Optional[Mapping[str, float]] = None,
        *,
        cache: Optional[ResultCache] = None,
    ) -> None:
        self._table: Dict[str, Tuple[str, ...]] = {
            normalize(word): tuple(syns) for word, syns in (synonyms or {}).items()
        }
        self._usage: Dict[str, float] = dict(usage or {})
        self._cache = cache
        self._memo: Dict[str, Tuple[str, ...]] = {}

    def weight(self, word: str) -> float:
        return self._usage.get(word, 1)

    def resolve(self, word: Optional[str]) -> Tuple[Optional[str], ...]:
        if not word:
            return (word,)

        key = cache_key(SYNONYM, word)
        if self._cache is not None:
            hit = self._cache.get(key)
            if hit is not None:
                return hit
        elif word in self._memo:
            return self._memo[word]

        ranked = sorted(self._table.get(word, ()), key=lambda s: -self.weight(s))
        result = (word, *ranked)

        if self._cache is not None:
            self._cache.put(key, result)
        else:
            self._memo[word] = result
        return result

    def __contains__(self, word: str) -> bool:
        return word in self._table

    def __len__(self) -> int:
        return len(self._table)
