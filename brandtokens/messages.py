"""Localized notification strings shown to the host user."""

from __future__ import annotations

from typing import Dict

DEFAULT_LANG = "en"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "fr": {
        "analyzing": "⏳ Analyse en cours...",
        "export_finished": "✅ Export terminé !",
        "init_error": "❌ Erreur d'initialisation : ",
        "export_error": "❌ Erreur d'export : ",
    },
    "en": {
        "analyzing": "⏳ Analysing...",
        "export_finished": "✅ Export finished!",
        "init_error": "❌ Initialization Error: ",
        "export_error": "❌ Export Error: ",
    },
}


def translate(key: str, lang: str | None = None) -> str:
    """Return the string for ``key`` in ``lang``, falling back to English."""
    table = TRANSLATIONS.get(lang or DEFAULT_LANG, TRANSLATIONS[DEFAULT_LANG])
    return table.get(key, TRANSLATIONS[DEFAULT_LANG][key])


__all__ = ["DEFAULT_LANG", "TRANSLATIONS", "translate"]
