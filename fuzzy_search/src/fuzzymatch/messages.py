# fuzzymatch/messages.py
"""Default message catalog: language tag -> {"suggest", "noResults"}."""
from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional

from .config import LANGUAGE

MessageProvider = Callable[[str], Mapping[str, str]]

MESSAGES: Dict[str, Dict[str, str]] = {
    "tr": {"suggest": "Bunu mu demek istediniz?", "noResults": "Sonuç bulunamadı."},
    "en": {"suggest": "Did you mean this?", "noResults": "No results found."},
    "de": {"suggest": "Meinten Sie das?", "noResults": "Keine Ergebnisse gefunden."},
    "az": {"suggest": "Bu sözü demək istədiyinizə əminsiniz?", "noResults": "Heç bir nəticə tapılmadı."},
    "fr": {"suggest": "Vouliez-vous dire ceci?", "noResults": "Aucun résultat trouvé."},
    "es": {"suggest": "¿Quisiste decir esto?", "noResults": "No se encontraron resultados."},
    "it": {"suggest": "Volevi dire questo?", "noResults": "Nessun risultato trovato."},
    "ru": {"suggest": "Вы имели в виду это?", "noResults": "Результатов не найдено."},
    "pt": {"suggest": "Quis dizer isto?", "noResults": "Nenhum resultado encontrado."},
    "ar": {"suggest": "هل كنت تعني هذا؟", "noResults": "لم يتم العثور على نتائج."},
}


def get_messages(language: str) -> Mapping[str, str]:
    """Catalog entry for a language tag; unknown tags fall back to English."""
    return MESSAGES.get(language) or MESSAGES[LANGUAGE]


def resolve_messages(
    language: str,
    provider: Optional[MessageProvider] = None,
    custom: Optional[Mapping[str, Mapping[str, str]]] = None,
) -> Dict[str, str]:
    """Provider entry for `language` with custom[language] merged over it."""
    base = dict((provider or get_messages)(language) or get_messages(language))
    base.update((custom or {}).get(language) or {})
    return base
