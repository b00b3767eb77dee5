# src/e2e/test_messages.py

from fuzzymatch.messages import MESSAGES, get_messages, resolve_messages


def test_every_language_has_both_messages():
    for lang, entry in MESSAGES.items():
        assert set(entry) == {"suggest", "noResults"}, lang


def test_unknown_language_falls_back_to_english():
    assert get_messages("xx") == MESSAGES["en"]
    assert resolve_messages("xx")["noResults"] == "No results found."


def test_custom_messages_override_per_key():
    msgs = resolve_messages("de", custom={"de": {"suggest": "Vielleicht?"}})
    assert msgs["suggest"] == "Vielleicht?"
    assert msgs["noResults"] == "Keine Ergebnisse gefunden."


def test_custom_messages_for_other_languages_are_ignored():
    msgs = resolve_messages("en", custom={"fr": {"suggest": "Hein?"}})
    assert msgs == MESSAGES["en"]


def test_provider_replaces_catalog():
    def provider(lang):
        return {"suggest": f"[{lang}] maybe?", "noResults": f"[{lang}] none"}

    msgs = resolve_messages("nl", provider, {"nl": {"noResults": "niets"}})
    assert msgs == {"suggest": "[nl] maybe?", "noResults": "niets"}
