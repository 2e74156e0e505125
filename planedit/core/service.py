from __future__ import annotations
from collections.abc import Sequence
from typing import Any
from ..llm.base import LLM, LLMRequest
from ..plan.extract import extract_steps
from ..plan.prompts import build_plan_prompt, build_run_prompt

class PlanService:
    """
    Les trois opérations exposées au front: chat direct, génération d'étapes,
    exécution des étapes éditées. Toute erreur du modèle (LLMCallError) remonte.
    """
    def __init__(self, llm: LLM, *, max_tokens: int = 900, temperature: float = 0.4) -> None:
        self.llm = llm
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def _call(self, prompt: str) -> str:
        req = LLMRequest(prompt=prompt, max_tokens=self.max_tokens, temperature=self.temperature)
        return await self.llm.generate(req)

    async def chat(self, prompt: str) -> str:
        return await self._call(prompt)

    async def generate_plan(self, prompt: str) -> list[str]:
        raw = await self._call(build_plan_prompt(prompt))
        return extract_steps(raw)

    async def execute_plan(self, prompt: str, steps: Sequence[Any]) -> str:
        return await self._call(build_run_prompt(prompt, steps))
