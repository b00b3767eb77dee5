# fuzzymatch/similarity.py
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from .algorithms import DISTANCE, SIMILARITY, Algorithm, distance_to_similarity
from .config import PREFIX_SCALE
from .normalize import common_prefix_len

log = logging.getLogger(__name__)

# float slack for threshold comparisons (1 - 1/5 must still reach 0.8)
_EPS = 1e-9

Number = Union[int, float]


class AlgorithmMemo:
    """
    Memo of pairwise results keyed by (kind, algorithm, a, b).

    No eviction of its own; the owning engine clears it on reset(). Locked
    because the search body runs in worker threads.
    """

    def __init__(self) -> None:
        self._data: Dict[Tuple[str, str, str, str], Number] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, kind: str, algorithm: Algorithm, a: str, b: str,
                       fn: Callable[[str, str], Number]) -> Number:
        key = (kind, algorithm.value, a, b)
        with self._lock:
            if key in self._data:
                self.hits += 1
                return self._data[key]
        value = fn(a, b)
        with self._lock:
            self._data[key] = value
            self.misses += 1
        return value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self.hits = self.misses = 0

    def __len__(self) -> int:
        return len(self._data)


class SimilarityEngine:
    """Scores string pairs under one or several algorithms."""

    def __init__(self, memo: Optional[AlgorithmMemo] = None) -> None:
        self.memo = memo if memo is not None else AlgorithmMemo()

    def distance(self, algorithm: Algorithm, a: str, b: str) -> int:
        if not algorithm.is_distance:
            raise ValueError(f"{algorithm.value} is not an edit-distance algorithm")
        return int(self.memo.get_or_compute("distance", algorithm, a, b, DISTANCE[algorithm]))

    def similarity(self, algorithm: Optional[Algorithm], a: str, b: str) -> float:
        """Score in [0, 1] (smith-waterman reaches 2). Unknown algorithms (None) score 0."""
        if algorithm is None:
            return 0.0
        if algorithm.is_distance:
            return distance_to_similarity(self.distance(algorithm, a, b), a, b)
        return float(self.memo.get_or_compute("score", algorithm, a, b, SIMILARITY[algorithm]))

    def combined_score(
        self,
        algorithms: Iterable[Optional[Algorithm]],
        a: str,
        b: str,
        threshold: float,
        *,
        prefix_cap: Optional[int] = None,
        prefix_scale: float = PREFIX_SCALE,
    ) -> Optional[float]:
        """
        Mean of the scores that reach `threshold`, or None when no algorithm
        does. With `prefix_cap`, a common prefix of length p (<= cap) lifts the
        aggregate by p * prefix_scale * (1 - aggregate), capped at 1.0. The
        default scale of 1.0 is the plain p * (1 - aggregate) boost; an
        aggregate already at or above 1.0 is left as is.
        """
        contributing = [
            s for s in (self.similarity(algo, a, b) for algo in algorithms)
            if s >= threshold - _EPS
        ]
        if not contributing:
            return None
        aggregate = sum(contributing) / len(contributing)
        if prefix_cap and aggregate < 1.0:
            p = common_prefix_len(a, b, prefix_cap)
            aggregate = min(1.0, aggregate + p * prefix_scale * (1.0 - aggregate))
        return aggregate

    def is_match(self, algorithms: Iterable[Optional[Algorithm]], a: str, b: str,
                 threshold: float, **kwargs) -> bool:
        score = self.combined_score(algorithms, a, b, threshold, **kwargs)
        return score is not None and score >= threshold - _EPS
