from __future__ import annotations
from dataclasses import dataclass

@dataclass
class LLMRequest:
    prompt: str
    max_tokens: int = 900
    temperature: float = 0.4

class LLM:
    async def generate(self, req: LLMRequest) -> str:  # pragma: no cover - interface
        raise NotImplementedError
