# fuzzymatch/loader.py
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Mapping

from .errors import RecordError
from .models import Record
from .DB.memory_store import as_record

log = logging.getLogger(__name__)


def _iter_jsonl(path: str) -> Iterable[Any]:
    with open(path, "r", encoding="utf-8") as f:
        for line_no, raw in enumerate(f, start=1):
            raw = raw.strip()
            if not raw:
                continue
            try:
                yield json.loads(raw)
            except json.JSONDecodeError as exc:
                raise RecordError(f"{path}:{line_no}: invalid JSON ({exc.msg})") from exc


def load_records(path: str) -> List[Record]:
    """
    Read records from disk.
      - *.jsonl: one record object per line
      - *.json:  a list of records, or an object with a "records" list
    Any malformed record fails the whole load.
    """
    if path.lower().endswith(".jsonl"):
        items: Iterable[Any] = _iter_jsonl(path)
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, Mapping):
            data = data.get("records", [])
        if not isinstance(data, list):
            raise RecordError(f"{path}: expected a list of records")
        items = data

    records = [as_record(item) for item in items]
    log.info("Loaded %d records from %s", len(records), os.path.basename(path))
    return records


def load_mapping(path: str) -> Dict[str, Any]:
    """JSON object file (synonym table, usage weights or options)."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return data
