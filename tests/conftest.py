import asyncio
from planedit.llm.base import LLM, LLMRequest
from planedit.llm.errors import LLMCallError

PLAN_JSON = (
    '{"steps": ["Pick 3 vegetarian recipes under 30 minutes", '
    '"Buy a whole chicken for stock", '
    '"Write one shopping list", '
    '"Cook and serve each dinner"]}'
)

RUN_RESULT = (
    "Here is your week.\n"
    "Day 1: Dinner\n"
    "- Lentil curry\n"
    "- Rice\n"
    "Notes & assumptions:\n"
    "- Vegetarian only\n"
)

class RoutingLLM(LLM):
    """Répond selon le type de prompt (élicitation, exécution, chat) et garde l'historique."""
    def __init__(self, plan_reply: str = PLAN_JSON, run_reply: str = RUN_RESULT, chat_reply: str = "Sure, here you go."):
        self.plan_reply = plan_reply
        self.run_reply = run_reply
        self.chat_reply = chat_reply
        self.prompts: list[str] = []

    async def generate(self, req: LLMRequest) -> str:
        self.prompts.append(req.prompt)
        if req.prompt.startswith("You are a planning assistant"):
            return self.plan_reply
        if "approved a step-by-step plan" in req.prompt:
            return self.run_reply
        return self.chat_reply

class FailingLLM(LLM):
    def __init__(self, status: int = 502, body: str = "bad gateway"):
        self.status = status
        self.body = body
        self.calls = 0

    async def generate(self, req: LLMRequest) -> str:
        self.calls += 1
        raise LLMCallError(self.status, self.body)

class GatedLLM(RoutingLLM):
    """Comme RoutingLLM, mais l'exécution attend `gate` avant de répondre."""
    def __init__(self, **kw):
        super().__init__(**kw)
        self.gate = asyncio.Event()

    async def generate(self, req: LLMRequest) -> str:
        if "approved a step-by-step plan" in req.prompt:
            await self.gate.wait()
        return await super().generate(req)
