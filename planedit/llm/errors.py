from __future__ import annotations

class LLMCallError(Exception):
    """Échec de l'appel au modèle (statut non-2xx, transport, corps illisible)."""

    def __init__(self, status: int | None, body: str) -> None:
        self.status = status
        self.body = body
        label = status if status is not None else "transport"
        super().__init__(f"LLM error {label}: {body}")
