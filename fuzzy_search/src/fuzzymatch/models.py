# fuzzymatch/models.py
"""
Data models for the fuzzy matching engine.

- Record: one searchable item (id, name, tags). Owned by the caller; the
  engine only reads it.
- Matches / Suggestions: the two shapes a completed query resolves to.

These classes do not contain matching logic; they only structure the data so
that indexing, matching and caching stay simple and predictable.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Mapping, Tuple, Union

from .errors import RecordError


@dataclass(frozen=True, slots=True)
class Record:
    """
    Attributes
    ----------
    id : Hashable
        Unique, immutable identifier (the index key).
    name : str
        Primary searchable text.
    tags : Tuple[str, ...]
        Additional searchable texts, in the caller's order. May be empty.
    """
    id: Hashable
    name: str
    tags: Tuple[str, ...] = ()

    def fields(self) -> Tuple[str, ...]:
        """Searchable fields: name first, then tags."""
        return (self.name, *self.tags)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Record":
        if not isinstance(data, Mapping):
            raise RecordError(f"record must be a mapping, got {type(data).__name__}")
        if data.get("id") is None:
            raise RecordError(f"record is missing an id: {dict(data)!r}")
        name = data.get("name")
        if not isinstance(name, str):
            raise RecordError(f"record {data['id']!r} has no text name")
        tags = data.get("tags") or ()
        if isinstance(tags, str) or not all(isinstance(t, str) for t in tags):
            raise RecordError(f"record {data['id']!r} tags must be a list of strings")
        return cls(id=data["id"], name=name, tags=tuple(tags))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "tags": list(self.tags)}


@dataclass(frozen=True, slots=True)
class Matches:
    """Matching records in source insertion order (not ranked)."""
    records: Tuple[Record, ...]

    def __bool__(self) -> bool:
        return bool(self.records)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "matches", "results": [r.to_dict() for r in self.records]}


@dataclass(frozen=True, slots=True)
class Suggestions:
    """Did-you-mean payload returned when nothing matched."""
    message: str
    suggestions: Tuple[Record, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "suggestions",
            "message": self.message,
            "suggestions": [r.to_dict() for r in self.suggestions],
        }


MatchOutcome = Union[Matches, Suggestions]
