# fuzzymatch/errors.py
from __future__ import annotations


class FuzzyMatchError(Exception):
    """Base class for every error raised by the engine."""


class SearchTimeout(FuzzyMatchError, TimeoutError):
    """The configured timeout elapsed before the search settled."""

    def __init__(self, query: str, timeout: float) -> None:
        super().__init__(f"search for {query!r} timed out after {timeout:g}s")
        self.query = query
        self.timeout = timeout


class SearchCancelled(FuzzyMatchError):
    """A newer query superseded this one before it resolved."""

    def __init__(self, query: str) -> None:
        super().__init__(f"search for {query!r} was superseded")
        self.query = query


class InvalidConfiguration(FuzzyMatchError, ValueError):
    pass


class RecordError(FuzzyMatchError, ValueError):
    """Malformed record (e.g. missing id). Fatal for index construction."""
