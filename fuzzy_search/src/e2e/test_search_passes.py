# src/e2e/test_search_passes.py

import pytest

from fuzzymatch.DB import make_index
from fuzzymatch.config import SearchOptions
from fuzzymatch.messages import get_messages
from fuzzymatch.models import Matches, Suggestions
from fuzzymatch.search import Matcher, run, suggestion_algorithm
from fuzzymatch.algorithms import Algorithm
from fuzzymatch.similarity import SimilarityEngine
from fuzzymatch.synonyms import SynonymResolver


def _run(query, records, options=None, synonyms=None, usage=None, kind="direct", lang="en"):
    options = options or SearchOptions()
    return run(
        query, make_index(records, kind), SynonymResolver(synonyms, usage),
        SimilarityEngine(), options, dict(get_messages(lang)),
    )


def test_typo_matches_record(fruit):
    out = _run("aple", fruit)
    assert isinstance(out, Matches)
    assert [r.name for r in out.records] == ["apple"]


def test_matches_keep_insertion_order(fruit):
    out = _run("fruit", fruit)
    assert [r.id for r in out.records] == [1, 2]


def test_no_match_and_no_near_miss(fruit):
    out = _run("xyz", fruit)
    assert out == Suggestions(message="No results found.", suggestions=())


def test_near_miss_is_suggested(fruit):
    out = _run("appxyz", fruit)
    assert isinstance(out, Suggestions)
    assert out.message == "Did you mean this?"
    assert [r.name for r in out.suggestions] == ["apple"]


def test_suggestion_message_follows_language(fruit):
    out = _run("xyz", fruit, options=SearchOptions(language="fr"), lang="fr")
    assert out.message == "Aucun résultat trouvé."


def test_suggestions_disabled_gives_empty_matches(fruit):
    out = _run("xyz", fruit, options=SearchOptions(suggest_on_no_match=False))
    assert out == Matches(())
    assert not out


def test_blank_query_matches_nothing(fruit):
    assert _run("   ", fruit) == Matches(())


def test_synonym_of_a_field_matches():
    records = [{"id": "c", "name": "car"}, {"id": "b", "name": "bike"}]
    out = _run("automobil", records, synonyms={"car": ["automobile", "auto"]})
    assert [r.id for r in out.records] == ["c"]


@pytest.mark.parametrize("query", ["apple", "aple", "green apple", "plum", "xyz"])
def test_index_kind_does_not_change_outcome(query):
    records = [{"id": 1, "name": "green apple"}, {"id": 2, "name": "plum"}]
    direct = _run(query, records, kind="direct")
    inverted = _run(query, records, kind="inverted")
    assert direct == inverted


def test_token_hits_keep_insertion_order():
    records = [{"id": 1, "name": "aple"}, {"id": 2, "name": "apple pie", "tags": ["apple"]}]
    out = _run("apple", records, kind="inverted")
    assert [r.id for r in out.records] == [1, 2]


def test_custom_search_overrides_pipeline(fruit):
    opts = SearchOptions(custom_search=lambda q, w: w.startswith(q))
    out = _run("gr", fruit, options=opts)
    assert [r.name for r in out.records] == ["grape"]


def test_custom_search_applies_to_token_hits_too():
    records = [{"id": 1, "name": "green apple"}]
    opts = SearchOptions(custom_search=lambda q, w: False, suggest_on_no_match=False)
    assert _run("apple", records, options=opts, kind="inverted") == Matches(())


def test_prefix_params_reach_the_matcher():
    m = Matcher(SimilarityEngine(), SearchOptions(custom_params={"prefix": 3}))
    assert m._prefix_cap == 3 and m._prefix_scale == 1.0
    assert m("aple", "apple")
    assert not m("kiwi", "apple")
    gentle = Matcher(SimilarityEngine(), SearchOptions(custom_params={"prefix": 3, "prefix_scale": 0.1}))
    assert gentle._prefix_scale == 0.1


@pytest.mark.parametrize("algorithm, expected", [
    ("levenshtein", Algorithm.LEVENSHTEIN),
    ("damerau-levenshtein", Algorithm.DAMERAU_LEVENSHTEIN),
    ("jaro-winkler", Algorithm.DAMERAU_LEVENSHTEIN),
])
def test_suggestion_distance_follows_primary_algorithm(algorithm, expected):
    assert suggestion_algorithm(SearchOptions(algorithm=algorithm)) is expected
