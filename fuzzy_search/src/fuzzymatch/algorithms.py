# fuzzymatch/algorithms.py
"""
String similarity algorithms.

Every function here is pure: two strings in, a number out, no shared state.
Memoization and the policy for combining several algorithms live in
similarity.py.

Edit-distance family
    levenshtein, damerau_levenshtein          -> int distance
    levenshtein_similarity, ...               -> 1 - d / max(len)
Phonetic codes (equality-based similarity)
    soundex, metaphone
Set / vector measures
    jaccard, ngram_similarity, cosine_similarity, tf_idf_similarity
Alignment
    jaro_winkler, smith_waterman
"""
from __future__ import annotations

import math
import re
from collections import Counter
from enum import Enum
from typing import Callable, Dict, List, Optional

from .config import NGRAM
from .normalize import common_prefix_len, kgrams, letters_only


class Algorithm(str, Enum):
    LEVENSHTEIN = "levenshtein"
    DAMERAU_LEVENSHTEIN = "damerau-levenshtein"
    JARO_WINKLER = "jaro-winkler"
    SOUNDEX = "soundex"
    METAPHONE = "metaphone"
    JACCARD = "jaccard"
    NGRAM = "ngram"
    COSINE = "cosine"
    TF_IDF = "tf-idf"
    SMITH_WATERMAN = "smith-waterman"

    @classmethod
    def parse(cls, name: object) -> Optional["Algorithm"]:
        """Algorithm for a configured name, or None when the name is unknown."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        try:
            return cls(name.strip().lower().replace("_", "-"))
        except ValueError:
            return None

    @property
    def is_distance(self) -> bool:
        return self in (Algorithm.LEVENSHTEIN, Algorithm.DAMERAU_LEVENSHTEIN)


# ------------- edit distances -------------

def levenshtein(a: str, b: str) -> int:
    """Minimum number of single-character inserts, deletes and substitutions."""
    if a == b:
        return 0
    if not a or not b:
        return len(a) or len(b)
    prev = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        cur = [i] + [0] * len(b)
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            cur[j] = min(prev[j] + 1, cur[j - 1] + 1, prev[j - 1] + cost)
        prev = cur
    return prev[len(b)]


def damerau_levenshtein(a: str, b: str) -> int:
    """
    Levenshtein plus adjacent transposition at unit cost (optimal string
    alignment). The transposition is considered only when both preceding
    characters exist and are swapped equivalents; its cost comes from two
    rows and two columns back.
    """
    n, m = len(a), len(b)
    dp: List[List[int]] = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n + 1):
        dp[i][0] = i
    for j in range(m + 1):
        dp[0][j] = j

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
                dp[i - 1][j - 1] + cost,
            )
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                dp[i][j] = min(dp[i][j], dp[i - 2][j - 2] + cost)
    return dp[n][m]


def distance_to_similarity(distance: int, a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - distance / longest


def levenshtein_similarity(a: str, b: str) -> float:
    return distance_to_similarity(levenshtein(a, b), a, b)


def damerau_levenshtein_similarity(a: str, b: str) -> float:
    return distance_to_similarity(damerau_levenshtein(a, b), a, b)


# ------------- alignment -------------

def _jaro(a: str, b: str) -> float:
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    window = max(max(len(a), len(b)) // 2 - 1, 0)
    a_hit = [False] * len(a)
    b_hit = [False] * len(b)
    matches = 0
    for i, ch in enumerate(a):
        lo = max(0, i - window)
        hi = min(len(b), i + window + 1)
        for j in range(lo, hi):
            if not b_hit[j] and b[j] == ch:
                a_hit[i] = b_hit[j] = True
                matches += 1
                break
    if matches == 0:
        return 0.0

    # transpositions: matched characters of a and b compared in order
    a_seq = [ch for ch, hit in zip(a, a_hit) if hit]
    b_seq = [ch for ch, hit in zip(b, b_hit) if hit]
    t = sum(1 for x, y in zip(a_seq, b_seq) if x != y) / 2
    return (matches / len(a) + matches / len(b) + (matches - t) / matches) / 3


def jaro_winkler(a: str, b: str, prefix_scale: float = 0.1, max_prefix: int = 4) -> float:
    """Jaro similarity boosted for up to `max_prefix` leading identical characters."""
    jaro = _jaro(a, b)
    prefix = common_prefix_len(a, b, max_prefix)
    return jaro + prefix * prefix_scale * (1.0 - jaro)


def smith_waterman(a: str, b: str, match: int = 2, mismatch: int = -1, gap: int = -1) -> float:
    """
    Best local alignment score (floored at 0) divided by the length of the
    longer string. With the default match score of 2, identical strings
    score 2.0, so this measure is not bounded by 1.
    """
    longest = max(len(a), len(b))
    if not a or not b:
        return 0.0
    prev = [0] * (len(b) + 1)
    best = 0
    for i in range(1, len(a) + 1):
        cur = [0] * (len(b) + 1)
        for j in range(1, len(b) + 1):
            diag = prev[j - 1] + (match if a[i - 1] == b[j - 1] else mismatch)
            cur[j] = max(0, diag, prev[j] + gap, cur[j - 1] + gap)
            if cur[j] > best:
                best = cur[j]
        prev = cur
    return best / longest


# ------------- phonetic codes -------------

_SOUNDEX_CODES: Dict[str, str] = {
    ch: digit
    for letters, digit in (
        ("bfpv", "1"),
        ("cgjkqsxz", "2"),
        ("dt", "3"),
        ("l", "4"),
        ("mn", "5"),
        ("r", "6"),
    )
    for ch in letters
}


def soundex(word: str) -> str:
    """
    American Soundex: first letter kept, remaining consonants coded, vowels
    separate equal codes, h/w are skipped without separating. Always four
    characters for input containing at least one letter, "" otherwise.
    """
    s = letters_only(word)
    if not s:
        return ""
    out = [s[0].upper()]
    prev = _SOUNDEX_CODES.get(s[0], "")
    for ch in s[1:]:
        code = _SOUNDEX_CODES.get(ch)
        if code is None:
            if ch not in "hw":
                prev = ""
            continue
        if code != prev:
            out.append(code)
        prev = code
    return "".join(out)[:4].ljust(4, "0")


# Reduced rule set, applied in order. Not the classical Metaphone.
_METAPHONE_RULES = [
    (re.compile(r"x"), "ks"),
    (re.compile(r"ph"), "f"),
    (re.compile(r"ck"), "k"),
    (re.compile(r"sh"), "x"),
    (re.compile(r"th"), "0"),
    (re.compile(r"c(?=[eiy])"), "s"),
    (re.compile(r"[cq]"), "k"),
    (re.compile(r"z"), "s"),
    (re.compile(r"d"), "t"),
    (re.compile(r"v"), "f"),
    (re.compile(r"g(?=[eiy])"), "j"),
]
_SILENT = re.compile(r"[aeiouhwy]")
_DOUBLED = re.compile(r"(.)\1+")


def metaphone(word: str) -> str:
    s = letters_only(word)
    if not s:
        return ""
    for rx, repl in _METAPHONE_RULES:
        s = rx.sub(repl, s)
    s = s[0] + _SILENT.sub("", s[1:])
    return _DOUBLED.sub(r"\1", s).upper()


def soundex_similarity(a: str, b: str) -> float:
    code = soundex(a)
    return 1.0 if code and code == soundex(b) else 0.0


def metaphone_similarity(a: str, b: str) -> float:
    code = metaphone(a)
    return 1.0 if code and code == metaphone(b) else 0.0


# ------------- set / vector measures -------------

def jaccard(a: str, b: str) -> float:
    """Character-set intersection over union (duplicates collapse)."""
    sa, sb = set(a), set(b)
    union = sa | sb
    if not union:
        return 1.0
    return len(sa & sb) / len(union)


def ngram_similarity(a: str, b: str, n: int = NGRAM) -> float:
    ga, gb = kgrams(a, n), kgrams(b, n)
    if not ga or not gb:
        return 0.0
    return len(ga & gb) / len(ga | gb)


def cosine_similarity(a: str, b: str) -> float:
    va, vb = Counter(a), Counter(b)
    norm = math.sqrt(sum(c * c for c in va.values())) * math.sqrt(sum(c * c for c in vb.values()))
    if norm == 0:
        return 0.0
    dot = sum(count * vb[ch] for ch, count in va.items())
    return dot / norm


def tf_idf_similarity(a: str, b: str) -> float:
    """
    TF-IDF over a two-document corpus made of a and b only.

    idf(t) = log(2 / documents containing t); the score is the dot product of
    the tf*idf vectors over the terms of a. A term shared by both strings has
    idf 0 and a term missing from b has tf 0 there, so this degenerate corpus
    always scores 0.0.
    """
    ta, tb = a.split(), b.split()
    if not ta or not tb:
        return 0.0
    ca, cb = Counter(ta), Counter(tb)
    score = 0.0
    for term, count in ca.items():
        df = 1 + (1 if term in cb else 0)
        idf = math.log(2 / df)
        score += (count / len(ta)) * idf * (cb[term] / len(tb)) * idf
    return score


# ------------- dispatch -------------

SIMILARITY: Dict[Algorithm, Callable[[str, str], float]] = {
    Algorithm.LEVENSHTEIN: levenshtein_similarity,
    Algorithm.DAMERAU_LEVENSHTEIN: damerau_levenshtein_similarity,
    Algorithm.JARO_WINKLER: jaro_winkler,
    Algorithm.SOUNDEX: soundex_similarity,
    Algorithm.METAPHONE: metaphone_similarity,
    Algorithm.JACCARD: jaccard,
    Algorithm.NGRAM: ngram_similarity,
    Algorithm.COSINE: cosine_similarity,
    Algorithm.TF_IDF: tf_idf_similarity,
    Algorithm.SMITH_WATERMAN: smith_waterman,
}

DISTANCE: Dict[Algorithm, Callable[[str, str], int]] = {
    Algorithm.LEVENSHTEIN: levenshtein,
    Algorithm.DAMERAU_LEVENSHTEIN: damerau_levenshtein,
}
