# fuzzymatch/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

from .errors import InvalidConfiguration

log = logging.getLogger(__name__)

# Progress logging for the CLI / web entry points (set FUZZYMATCH_VERBOSE=1 to enable)
VERBOSE = os.environ.get("FUZZYMATCH_VERBOSE") == "1"

# /* ~~~ matching ~~~ */
ALGORITHM: str = "damerau-levenshtein"
THRESHOLD: float = 0.8
SUGGEST_ON_NO_MATCH: bool = True
SUGGESTION_THRESHOLD: float = 0.5
NGRAM: int = 2                 # n for the "ngram" similarity

# /* ~~~ orchestration (seconds) ~~~ */
DEBOUNCE_DELAY: float = 0.3
TIMEOUT: float = 5.0

# /* ~~~ result cache ~~~ */
CACHE_SIZE: int = 100
CACHE_TTL: float = 60.0

LANGUAGE: str = "en"

# Index shape: "direct" (id -> record) or "inverted" (token -> ids)
INDEX_KIND: str = "direct"

# Prefix bonus defaults when custom_params["prefix"] is set
PREFIX_CAP: int = 4
PREFIX_SCALE: float = 1.0       # 0.1 gives the gentler Winkler-style boost

# camelCase option names accepted by SearchOptions.from_mapping.
# Durations in that form are milliseconds.
_CAMEL = {
    "algorithm": "algorithm",
    "algorithms": "algorithm",
    "threshold": "threshold",
    "suggestOnNoMatch": "suggest_on_no_match",
    "suggestionThreshold": "suggestion_threshold",
    "customSearch": "custom_search",
    "customMessages": "custom_messages",
    "customParams": "custom_params",
    "debounceDelay": "debounce_delay",
    "cacheSize": "cache_size",
    "cacheTTL": "cache_ttl",
    "timeout": "timeout",
    "language": "language",
}
_MILLIS = {"debounceDelay", "cacheTTL", "timeout"}


@dataclass
class SearchOptions:
    """
    Engine configuration.

    `algorithm` takes one name or an ordered sequence of names; after
    validation it is always a tuple of names and `algorithms` holds the
    resolved Algorithm members (None for names the engine does not know,
    which then contribute a zero score).
    """
    algorithm: Union[str, Sequence[str]] = ALGORITHM
    threshold: float = THRESHOLD
    suggest_on_no_match: bool = SUGGEST_ON_NO_MATCH
    suggestion_threshold: float = SUGGESTION_THRESHOLD
    custom_search: Optional[Callable[[str, str], bool]] = None
    custom_messages: Dict[str, Dict[str, str]] = field(default_factory=dict)
    custom_params: Dict[str, Any] = field(default_factory=dict)
    debounce_delay: float = DEBOUNCE_DELAY
    cache_size: int = CACHE_SIZE
    cache_ttl: float = CACHE_TTL
    timeout: float = TIMEOUT
    language: str = LANGUAGE
    algorithms: Tuple[Any, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        from .algorithms import Algorithm

        names = (self.algorithm,) if isinstance(self.algorithm, str) else tuple(self.algorithm)
        if not names:
            names = (ALGORITHM,)
        self.algorithm = names

        resolved = []
        for name in names:
            algo = Algorithm.parse(name)
            if algo is None:
                log.warning("Unknown algorithm %r: it will contribute a zero score", name)
            resolved.append(algo)
        self.algorithms = tuple(resolved)

        for name in ("threshold", "suggestion_threshold"):
            value = getattr(self, name)
            if not 0.0 <= float(value) <= 1.0:
                raise InvalidConfiguration(f"{name} must be within [0, 1], got {value!r}")
        if int(self.cache_size) <= 0:
            raise InvalidConfiguration(f"cache_size must be positive, got {self.cache_size!r}")
        for name in ("debounce_delay", "cache_ttl", "timeout"):
            if float(getattr(self, name)) < 0:
                raise InvalidConfiguration(f"{name} must not be negative")
        if self.custom_search is not None and not callable(self.custom_search):
            raise InvalidConfiguration("custom_search must be callable (query, word) -> bool")
        prefix = self.custom_params.get("prefix")
        if prefix is not None and (isinstance(prefix, bool) or int(prefix) < 0):
            raise InvalidConfiguration(f"custom_params['prefix'] must be a non-negative int, got {prefix!r}")

    @property
    def primary(self):
        """First known algorithm (drives the distance used for suggestions)."""
        return next((a for a in self.algorithms if a is not None), None)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SearchOptions":
        """
        Build options from a plain mapping (e.g. a JSON options file).
        Accepts snake_case field names (durations in seconds) and the
        JavaScript-style camelCase names (durations in milliseconds).
        "timeout" is spelled the same in both; it is read as milliseconds.
        """
        known = {f.name for f in fields(cls) if f.init}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key in _MILLIS:
                kwargs[_CAMEL[key]] = value / 1000.0
            elif key in known:
                kwargs[key] = value
            elif key in _CAMEL:
                kwargs[_CAMEL[key]] = value
            else:
                raise InvalidConfiguration(f"Unrecognized option: {key!r}")
        return cls(**kwargs)
