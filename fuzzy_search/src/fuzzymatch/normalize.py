# fuzzymatch/normalize.py
from __future__ import annotations

import re
from typing import List, Optional

_LETTERS = re.compile(r"[^a-z]")


def normalize(text: Optional[str]) -> str:
    """Lower-case and trim. Used for queries, fields and synonym keys alike."""
    if not text:
        return ""
    return text.strip().lower()


def tokenize(text: Optional[str]) -> List[str]:
    """Whitespace tokens of the normalized text (empty tokens dropped)."""
    return normalize(text).split()


def letters_only(text: str) -> str:
    """Lower-cased ASCII letters of text; input for the phonetic codes."""
    return _LETTERS.sub("", text.lower())


def kgrams(s: str, k: int) -> set[str]:
    """Return distinct k-grams of s (sliding window, no wraparound)."""
    if k <= 0 or len(s) < k:
        return set()
    return {s[i:i+k] for i in range(len(s) - k + 1)}


def common_prefix_len(a: str, b: str, cap: int) -> int:
    """Length of the shared leading run of a and b, at most cap."""
    n = 0
    for x, y in zip(a, b):
        if x != y or n >= cap:
            break
        n += 1
    return n
