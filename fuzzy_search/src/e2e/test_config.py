# src/e2e/test_config.py

import logging

import pytest

from fuzzymatch.algorithms import Algorithm
from fuzzymatch.config import SearchOptions
from fuzzymatch.errors import InvalidConfiguration


def test_defaults():
    opts = SearchOptions()
    assert opts.algorithm == ("damerau-levenshtein",)
    assert opts.algorithms == (Algorithm.DAMERAU_LEVENSHTEIN,)
    assert opts.threshold == 0.8
    assert opts.suggest_on_no_match is True
    assert opts.suggestion_threshold == 0.5
    assert opts.debounce_delay == 0.3
    assert opts.cache_size == 100
    assert opts.cache_ttl == 60.0
    assert opts.timeout == 5.0
    assert opts.language == "en"


def test_algorithm_list_keeps_order():
    opts = SearchOptions(algorithm=["soundex", "jaro_winkler"])
    assert opts.algorithms == (Algorithm.SOUNDEX, Algorithm.JARO_WINKLER)
    assert opts.primary is Algorithm.SOUNDEX


def test_camel_case_mapping_converts_milliseconds():
    opts = SearchOptions.from_mapping({
        "debounceDelay": 300, "cacheTTL": 60000, "timeout": 5000,
        "suggestOnNoMatch": False, "cacheSize": 10,
    })
    assert opts.debounce_delay == pytest.approx(0.3)
    assert opts.cache_ttl == pytest.approx(60.0)
    assert opts.timeout == pytest.approx(5.0)
    assert opts.suggest_on_no_match is False
    assert opts.cache_size == 10


def test_timeout_in_a_mapping_is_milliseconds():
    # same spelling in both naming styles; the JavaScript unit wins
    opts = SearchOptions.from_mapping({"timeout": 5000, "cacheTTL": 60000, "debounceDelay": 300})
    assert opts.timeout == pytest.approx(5.0)
    assert opts.cache_ttl == pytest.approx(60.0)
    assert opts.debounce_delay == pytest.approx(0.3)
    assert SearchOptions.from_mapping({"timeout": 250}).timeout == pytest.approx(0.25)


def test_snake_case_mapping_is_seconds():
    opts = SearchOptions.from_mapping({"debounce_delay": 0.1, "threshold": 0.6})
    assert opts.debounce_delay == 0.1
    assert opts.threshold == 0.6


def test_unrecognized_option_is_rejected():
    with pytest.raises(InvalidConfiguration):
        SearchOptions.from_mapping({"fuzziness": 2})


@pytest.mark.parametrize("kwargs", [
    {"threshold": 1.5},
    {"suggestion_threshold": -0.1},
    {"cache_size": 0},
    {"timeout": -1},
    {"custom_search": "not callable"},
    {"custom_params": {"prefix": -2}},
])
def test_invalid_values_fail_fast(kwargs):
    with pytest.raises(InvalidConfiguration):
        SearchOptions(**kwargs)


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        SearchOptions(threshold=2)


def test_unknown_algorithm_warns_and_resolves_to_none(caplog):
    with caplog.at_level(logging.WARNING, logger="fuzzymatch.config"):
        opts = SearchOptions(algorithm=["bogus", "levenshtein"])
    assert "bogus" in caplog.text
    assert opts.algorithms == (None, Algorithm.LEVENSHTEIN)
    assert opts.primary is Algorithm.LEVENSHTEIN
