# src/e2e/test_similarity_combination.py

import pytest

from fuzzymatch.algorithms import Algorithm
from fuzzymatch.similarity import AlgorithmMemo, SimilarityEngine

LEV = Algorithm.LEVENSHTEIN
DL = Algorithm.DAMERAU_LEVENSHTEIN


def test_distance_is_memoized_per_algorithm_and_pair():
    eng = SimilarityEngine()
    assert eng.distance(DL, "aple", "apple") == 1
    assert eng.distance(DL, "aple", "apple") == 1
    assert eng.memo.misses == 1 and eng.memo.hits == 1
    eng.distance(LEV, "aple", "apple")
    assert len(eng.memo) == 2

    eng.memo.clear()
    assert len(eng.memo) == 0


def test_distance_rejects_non_edit_algorithms():
    with pytest.raises(ValueError):
        SimilarityEngine().distance(Algorithm.JACCARD, "a", "b")


def test_shared_memo_between_engines():
    memo = AlgorithmMemo()
    SimilarityEngine(memo).similarity(DL, "grape", "grap")
    SimilarityEngine(memo).similarity(DL, "grape", "grap")
    assert memo.hits == 1


def test_mean_of_contributing_scores():
    eng = SimilarityEngine()
    # levenshtein 0.8, jaccard 1.0 (same character set)
    score = eng.combined_score([LEV, Algorithm.JACCARD], "aple", "apple", 0.8)
    assert score == pytest.approx(0.9)


def test_scores_below_threshold_do_not_contribute():
    eng = SimilarityEngine()
    # soundex codes differ -> 0.0, ignored; levenshtein alone decides
    score = eng.combined_score([Algorithm.SOUNDEX, LEV], "aple", "kiwi", 0.2)
    assert score is None
    score = eng.combined_score([Algorithm.SOUNDEX, LEV], "aple", "apple", 0.8)
    # soundex A140 == A140 -> 1.0, levenshtein 0.8
    assert score == pytest.approx(0.9)


def test_no_contributors_means_no_match():
    eng = SimilarityEngine()
    assert eng.combined_score([LEV], "xyz", "apple", 0.8) is None
    assert eng.is_match([LEV], "xyz", "apple", 0.8) is False


def test_unknown_algorithm_scores_zero():
    eng = SimilarityEngine()
    assert eng.similarity(None, "apple", "apple") == 0.0
    assert eng.is_match([None], "apple", "apple", 0.5) is False
    assert eng.is_match([None, DL], "apple", "apple", 0.5) is True


def test_prefix_bonus_lifts_aggregate():
    eng = SimilarityEngine()
    plain = eng.combined_score([LEV], "aple", "apple", 0.8)
    assert plain == pytest.approx(0.8)
    # common prefix "ap": 0.8 + 2 * (1 - 0.8), capped
    assert eng.combined_score([LEV], "aple", "apple", 0.8, prefix_cap=4) == 1.0
    gentle = eng.combined_score([LEV], "aple", "apple", 0.8, prefix_cap=4, prefix_scale=0.1)
    assert gentle == pytest.approx(0.84)


def test_prefix_bonus_never_lowers_scores_above_one():
    eng = SimilarityEngine()
    score = eng.combined_score([Algorithm.SMITH_WATERMAN], "abc", "abc", 0.8, prefix_cap=4)
    assert score == pytest.approx(2.0)


def test_threshold_boundary_is_inclusive():
    eng = SimilarityEngine()
    assert eng.is_match([DL], "aple", "apple", 0.8) is True
