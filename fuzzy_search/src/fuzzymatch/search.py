# fuzzymatch/search.py
"""
Synchronous matching and suggestion passes.

These functions know nothing about debouncing, timeouts or the cache; the
engine runs them in a worker thread and decides what to keep. `checkpoint`
is called once per record and is expected to raise when the query driving
the pass has been superseded or abandoned.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from .algorithms import Algorithm
from .config import PREFIX_SCALE, SearchOptions
from .DB.api import RecordIndex
from .models import Matches, MatchOutcome, Record, Suggestions
from .normalize import normalize
from .similarity import SimilarityEngine
from .synonyms import SynonymResolver

log = logging.getLogger(__name__)

Checkpoint = Callable[[], None]


def no_checkpoint() -> None:
    return None


class Matcher:
    """Match/no-match decision for one (query, word) pair under the options."""

    def __init__(self, scorer: SimilarityEngine, options: SearchOptions) -> None:
        self.scorer = scorer
        self.options = options
        params = options.custom_params
        self._prefix_cap: Optional[int] = int(params["prefix"]) if params.get("prefix") else None
        self._prefix_scale = float(params.get("prefix_scale", PREFIX_SCALE))

    def __call__(self, query: str, word: str) -> bool:
        if self.options.custom_search is not None:
            return bool(self.options.custom_search(query, word))
        return self.scorer.is_match(
            self.options.algorithms, query, word, self.options.threshold,
            prefix_cap=self._prefix_cap, prefix_scale=self._prefix_scale,
        )


def _record_matches(rec: Record, q: str, resolver: SynonymResolver, match: Matcher) -> bool:
    for field in rec.fields():
        f = normalize(field)
        if not f:
            continue
        if any(word and match(q, word) for word in resolver.resolve(f)):
            return True
    return False


def match_records(
    query: str,
    index: RecordIndex,
    resolver: SynonymResolver,
    match: Matcher,
    checkpoint: Checkpoint = no_checkpoint,
) -> Tuple[Record, ...]:
    """
    Records with at least one field (or synonym of it) matching the query,
    in source insertion order.

    Records an inverted index holds under a query token are scored first;
    they pass or fail the same fuzzy policy as every other record, so the
    outcome does not depend on the index kind.
    """
    q = normalize(query)
    ordered = list(enumerate(index.records()))
    hits = index.candidates(q)
    if hits:
        ordered.sort(key=lambda pair: pair[1].id not in hits)
        log.debug("Token hits for %r: %d record(s)", q, len(hits))
    found: List[Tuple[int, Record]] = []
    for pos, rec in ordered:
        checkpoint()
        if _record_matches(rec, q, resolver, match):
            found.append((pos, rec))
    found.sort(key=lambda pair: pair[0])
    return tuple(rec for _, rec in found)


def suggestion_algorithm(options: SearchOptions) -> Algorithm:
    if options.primary is Algorithm.LEVENSHTEIN:
        return Algorithm.LEVENSHTEIN
    return Algorithm.DAMERAU_LEVENSHTEIN


def suggest_records(
    query: str,
    index: RecordIndex,
    scorer: SimilarityEngine,
    options: SearchOptions,
    messages: dict,
    checkpoint: Checkpoint = no_checkpoint,
) -> Suggestions:
    """
    Near misses: each record's best field similarity (edit-distance based)
    must reach suggestion_threshold. Ranked by that similarity, ties in
    insertion order.
    """
    q = normalize(query)
    algo = suggestion_algorithm(options)
    scored: List[Tuple[float, Record]] = []
    for rec in index.records():
        checkpoint()
        best = 0.0
        for field in rec.fields():
            f = normalize(field)
            if not f:
                continue
            sim = scorer.similarity(algo, q, f)
            if sim > best:
                best = sim
        if best > 0 and best >= options.suggestion_threshold:
            scored.append((best, rec))
    scored.sort(key=lambda pair: -pair[0])
    found = tuple(rec for _, rec in scored)
    message = messages["suggest"] if found else messages["noResults"]
    return Suggestions(message=message, suggestions=found)


def run(
    query: str,
    index: RecordIndex,
    resolver: SynonymResolver,
    scorer: SimilarityEngine,
    options: SearchOptions,
    messages: dict,
    checkpoint: Checkpoint = no_checkpoint,
) -> MatchOutcome:
    """Match pass, then the suggestion pass when nothing matched."""
    if not normalize(query):
        return Matches(())
    records = match_records(query, index, resolver, Matcher(scorer, options), checkpoint)
    if records or not options.suggest_on_no_match:
        return Matches(records)
    return suggest_records(query, index, scorer, options, messages, checkpoint)
