from __future__ import annotations
import json, re
from .normalize import BULLET_RE, coerce_step, normalize_steps

FALLBACK_STEPS = [
    "Summarize the user goal and list key constraints",
    "Design core phases or journeys that satisfy constraints",
    "Outline tasks or features for each phase",
    "Plan validation/testing steps to check the solution in real life",
]

# lignes à ignorer quand le modèle répond en prose au lieu du JSON demandé
_SKIP_LINE_RES = [
    re.compile(r"^here (are|is)\b", re.IGNORECASE),   # "Here are the steps:"
    re.compile(r"^proposed", re.IGNORECASE),          # "Proposed plan:"
    re.compile(r'^"?\s*steps"?\s*:', re.IGNORECASE),  # "steps": [
    re.compile(r"^[\[{]\s*$"),                        # [ ou { seuls
]

_JSON_BLOCK_RE = re.compile(r"\{[\s\S]*\}")

def steps_from_lines(text: str) -> list[str]:
    """Extraction de secours ligne par ligne. Jamais vide: retombe sur FALLBACK_STEPS."""
    lines = [l.strip() for l in (text or "").split("\n")]
    items: list[str] = []
    for line in lines:
        if not line:
            continue
        if any(rx.search(line) for rx in _SKIP_LINE_RES):
            continue
        cleaned = BULLET_RE.sub("", line, count=1).strip()
        if cleaned:
            items.append(cleaned)
    return items if items else list(FALLBACK_STEPS)

def _loads_or_none(raw: str):
    try:
        return json.loads(raw)
    except (ValueError, TypeError, RecursionError):  # RecursionError: imbrication trop profonde
        return None

def parse_json_steps(text: str) -> list[str] | None:
    """
    Lit {"steps": [...]} dans la réponse: d'abord le texte entier, puis le
    premier bloc {...}. None si rien d'exploitable (à distinguer de []).
    """
    candidate = _loads_or_none(text)
    if candidate is None:
        match = _JSON_BLOCK_RE.search(text or "")
        if match:
            candidate = _loads_or_none(match.group(0))
    if isinstance(candidate, dict) and isinstance(candidate.get("steps"), list):
        return [coerce_step(s) for s in candidate["steps"]]
    return None

def extract_steps(text: str) -> list[str]:
    """JSON d'abord, lignes ensuite, puis nettoyage; une liste vide est remplacée par FALLBACK_STEPS."""
    parsed = parse_json_steps(text)
    steps = normalize_steps(parsed if parsed is not None else steps_from_lines(text))
    return steps if steps else list(FALLBACK_STEPS)
