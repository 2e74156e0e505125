from __future__ import annotations
import re
from collections.abc import Sequence
from typing import Any
from ..plan.normalize import coerce_step

SAMPLE_VERBS = ["Analyze", "Outline", "Draft", "Review", "Refine", "Summarize"]
SAMPLE_FINISHES = [
    "highlighting key trade-offs",
    "keeping it concise",
    "with an example",
    "noting assumptions",
    "with clear bullet points",
]

_LEADING_NUMBER_RE = re.compile(r"^[0-9]+\.\s*")

class MockPlanService:
    """
    Substitut local sans réseau, même interface que PlanService.
    Déterministe: les variations dépendent de la longueur du prompt.
    """
    async def chat(self, prompt: str) -> str:
        summary = prompt.strip()[:80] or "your request"
        finishing = SAMPLE_FINISHES[len(prompt) % len(SAMPLE_FINISHES)]
        return (
            f'Here\'s a quick take on "{summary}": focus on the main intent, '
            f"provide 2-3 crisp points, and close {finishing}."
        )

    async def generate_plan(self, prompt: str) -> list[str]:
        core = prompt.strip() or "the question"
        start = len(prompt) % len(SAMPLE_VERBS)
        verbs = [SAMPLE_VERBS[(start + i) % len(SAMPLE_VERBS)] for i in range(3)]
        return [f"{i}. {verb} {core}" for i, verb in enumerate(verbs, 1)]

    async def execute_plan(self, prompt: str, steps: Sequence[Any]) -> str:
        summary = "; ".join(
            f"{i}) {_LEADING_NUMBER_RE.sub('', coerce_step(s))}" for i, s in enumerate(steps, 1)
        )
        base = prompt.strip() or "the prompt"
        finishing = SAMPLE_FINISHES[len(prompt) % len(SAMPLE_FINISHES)]
        return f'Ran plan for "{base}". Steps: {summary}. Result: coherent answer {finishing}.'
