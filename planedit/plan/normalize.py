from __future__ import annotations
import re
from collections.abc import Iterable, Mapping
from typing import Any

# "1." / "2)" / "-" / "*" / "•" en tête de ligne
BULLET_RE = re.compile(r"^(\d+[.)]|[-*•])\s*")

# champs sondés dans l'ordre quand une étape arrive sous forme d'objet
STEP_FIELDS = ("text", "content", "title", "description", "step", "value")

_STEPS_KEY_RE = re.compile(r'^"steps"\s*:\s*\[?', re.IGNORECASE)
_LEADING_QUOTES_RE = re.compile(r'^\s*"+')
_TRAILING_QUOTES_RE = re.compile(r'"+\s*$')
_LEADING_COMMAS_RE = re.compile(r"^\s*,+")
_TRAILING_COMMAS_RE = re.compile(r",+\s*$")
_BARE_BRACKET_RE = re.compile(r"^[\[\]{}]+$")

def strip_marker(text: str) -> str:
    """Retire une puce/numérotation de tête et les espaces autour."""
    return BULLET_RE.sub("", (text or "").strip(), count=1).strip()

def coerce_step(entry: Any) -> str:
    """
    Ramène une étape de forme inconnue à une chaîne affichable.
    Ne lève jamais: au pire renvoie "".
    """
    if isinstance(entry, str):
        return entry
    if entry is None:
        return ""
    if isinstance(entry, Mapping):
        for key in STEP_FIELDS:
            candidate = entry.get(key)
            if candidate:
                return str(candidate)
    try:
        return str(entry)
    except Exception:
        return ""

def _clean_once(text: str) -> str:
    cleaned = BULLET_RE.sub("", text, count=1)
    cleaned = _STEPS_KEY_RE.sub("", cleaned)
    cleaned = _LEADING_QUOTES_RE.sub("", cleaned)
    cleaned = _TRAILING_QUOTES_RE.sub("", cleaned)
    cleaned = _LEADING_COMMAS_RE.sub("", cleaned)
    cleaned = _TRAILING_COMMAS_RE.sub("", cleaned)
    return cleaned.strip()

def clean_step(text: str) -> str:
    """Nettoie une étape jusqu'au point fixe (puces, guillemets, virgules, restes de JSON)."""
    current = text.strip()
    while True:
        cleaned = _clean_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned

def normalize_steps(steps: Iterable[Any]) -> list[str]:
    """
    Liste d'étapes prête pour l'édition: chaque entrée devient une chaîne propre,
    les vides et les crochets orphelins disparaissent. Idempotent.
    """
    out: list[str] = []
    for entry in steps:
        cleaned = clean_step(coerce_step(entry))
        if not cleaned or _BARE_BRACKET_RE.match(cleaned):
            continue
        out.append(cleaned)
    return out
