"""
Fuzzy Matching Engine

Typo-tolerant lookup over a modest in-memory record set. Given a query and a
collection of records (id, name, tags), the engine returns the matching
records or, when nothing matches, a ranked "did you mean" payload.

The package is split along the pipeline:
- String similarity algorithms and the policy for combining them
- Synonym expansion weighted by usage frequency
- Direct and inverted record indexes
- A bounded, time-expiring result cache
- An asyncio orchestrator (debounce, cancellation, timeout, fallback)

Example Usage:
    import asyncio
    from fuzzymatch import Engine, SearchOptions

    records = [{"id": 1, "name": "apple", "tags": ["fruit"]}]
    engine = Engine(records, options=SearchOptions(debounce_delay=0))
    outcome = asyncio.run(engine.search("aple"))
    print(outcome.to_dict())
"""

# fuzzymatch/__init__.py
from .config import SearchOptions
from .engine import Engine, QueryState
from .errors import (
    FuzzyMatchError,
    InvalidConfiguration,
    RecordError,
    SearchCancelled,
    SearchTimeout,
)
from .models import Matches, MatchOutcome, Record, Suggestions

__version__ = "1.0.0"
__all__ = [
    "Engine", "QueryState", "SearchOptions",
    "Record", "Matches", "Suggestions", "MatchOutcome",
    "FuzzyMatchError", "InvalidConfiguration", "RecordError", "SearchCancelled", "SearchTimeout",
]
