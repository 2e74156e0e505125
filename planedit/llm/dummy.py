from __future__ import annotations
from collections import deque
from .base import LLM, LLMRequest

class DummyLLM(LLM):
    """
    LLM déterministe pour tests/démo.
    Rejoue les réponses fournies dans l'ordre; une fois épuisées,
    renvoie toujours 3 étapes numérotées en fonction du prompt.
    """
    def __init__(self, replies: list[str] | None = None):
        self.replies = deque(replies or [])
        self.prompts: list[str] = []

    async def generate(self, req: LLMRequest) -> str:
        self.prompts.append(req.prompt)
        if self.replies:
            return self.replies.popleft()
        lines = [l.strip() for l in req.prompt.strip().splitlines() if l.strip()]
        goal = (lines[-1] if lines else "the request")[:200]
        return (
            f"1. Analyze the request: {goal}\n"
            f"2. Draft a minimal answer outline\n"
            f"3. Review the answer and note assumptions\n"
        )
