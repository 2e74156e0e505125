from __future__ import annotations
import asyncio
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any, List, Literal, Optional, TypeVar
from ..llm.errors import LLMCallError
from ..plan.blocks import to_display_blocks
from ..plan.extract import FALLBACK_STEPS
from ..plan.normalize import normalize_steps
from ..tools.logs import log_event
from .mock import MockPlanService
from .service import PlanService
from .types import ChatMessage, PlanState

T = TypeVar("T")
Mode = Literal["http", "mock"]

FALLBACK_NOTICE = "HTTP LLM failed; fell back to mock."
RUN_WARNING = "Add at least one step before running."
BUSY_WARNING = "Still working on the previous prompt."

class PlanSession:
    """
    État d'une session de démo: fil de chat, plan éditable, mode LLM.

    Le mode démarre en "http" (ou "mock" si désactivé) et bascule une seule
    fois vers "mock" au premier LLMCallError; il n'y a pas de retour
    automatique vers le backend HTTP pendant la session.
    """
    def __init__(
        self,
        live: PlanService | None,
        mock: MockPlanService | None = None,
        *,
        use_http: bool = True,
        log_dir: str | Path = "data/logs",
    ) -> None:
        self.live = live
        self.mock = mock or MockPlanService()
        self.mode: Mode = "http" if (use_http and live is not None) else "mock"
        self.log_dir = Path(log_dir)
        self.notice = ""
        self.warning = ""
        self.messages: List[ChatMessage] = []
        self.plan = PlanState()
        self.last_prompt = ""
        self.is_responding = False
        self.is_running = False

    # -------- routage http / mock --------
    def _latch_fallback(self, op: str, err: LLMCallError) -> None:
        log_event(self.log_dir, f"HTTP LLM {op} error: {err}", kind="error", data={"status": err.status})
        if self.mode != "mock":
            self.mode = "mock"
            self.notice = FALLBACK_NOTICE
            log_event(self.log_dir, "LLM mode latched to mock", kind="fallback")

    async def _route(self, op: str, live_call: Callable[[], Awaitable[T]], mock_call: Callable[[], Awaitable[T]]) -> T:
        if self.mode == "http":
            try:
                return await live_call()
            except LLMCallError as e:
                self._latch_fallback(op, e)
        return await mock_call()

    async def chat(self, prompt: str) -> str:
        return await self._route("chat", lambda: self.live.chat(prompt), lambda: self.mock.chat(prompt))

    async def generate_plan(self, prompt: str) -> list[str]:
        steps = await self._route(
            "plan", lambda: self.live.generate_plan(prompt), lambda: self.mock.generate_plan(prompt)
        )
        return steps if steps else list(FALLBACK_STEPS)

    async def run_plan(self, prompt: str, steps: Sequence[Any]) -> str:
        return await self._route(
            "run-plan", lambda: self.live.execute_plan(prompt, steps), lambda: self.mock.execute_plan(prompt, steps)
        )

    # -------- actions utilisateur --------
    async def submit(self, prompt: str) -> Optional[ChatMessage]:
        """Envoie le prompt aux deux volets: chat et génération d'étapes en parallèle."""
        trimmed = (prompt or "").strip()
        if not trimmed:
            return None
        if self.is_responding:
            self.warning = BUSY_WARNING
            return None

        question = ChatMessage("user", trimmed)
        previous_prompt = self.last_prompt
        self.messages.append(question)
        self.last_prompt = trimmed
        self.plan.invalidate()
        self.warning = ""

        self.is_responding = True
        try:
            reply, steps = await asyncio.gather(self.chat(trimmed), self.generate_plan(trimmed))
        except Exception:
            # pas de tour "user" orphelin dans le fil de chat
            self.messages.remove(question)
            self.last_prompt = previous_prompt
            raise
        finally:
            self.is_responding = False

        answer = ChatMessage("assistant", reply)
        self.messages.append(answer)
        self.plan.reset(trimmed, normalize_steps(steps) or list(FALLBACK_STEPS))
        return answer

    async def run(self) -> Optional[str]:
        """
        Exécute les étapes courantes. Le résultat n'est affiché que si le plan
        n'a pas changé pendant l'appel; sinon il est jeté.
        """
        if not self.plan.original_prompt or not self.plan.steps or self.is_running:
            self.warning = RUN_WARNING
            return None
        self.warning = ""
        self.plan.clear_result()
        snapshot = self.plan.snapshot()
        prompt = self.plan.original_prompt or self.last_prompt or "your latest prompt"
        steps = list(self.plan.steps)

        self.is_running = True
        try:
            result = await self.run_plan(prompt, steps)
        finally:
            self.is_running = False

        if self.plan.snapshot() != snapshot:
            log_event(self.log_dir, "run-plan result discarded (plan edited meanwhile)", kind="stale",
                      data={"submitted_revision": snapshot[0], "current_revision": self.plan.revision})
            return None
        self.plan.set_result(result)
        log_event(self.log_dir, "run-plan response", kind="run",
                  data={"prompt": prompt, "steps": steps, "result_length": len(result or "")})
        return result

    def add_step(self, text: str = "") -> None:
        self.plan.add_step(text, fallback_prompt=self.last_prompt)

    # -------- vue --------
    def result_blocks(self) -> list:
        if self.plan.has_run and self.plan.result:
            return to_display_blocks(self.plan.result)
        return []

    def state(self) -> dict:
        return {
            "mode": self.mode,
            "notice": self.notice,
            "warning": self.warning,
            "is_responding": self.is_responding,
            "is_running": self.is_running,
            "messages": [m.to_dict() for m in self.messages],
            "plan": self.plan.to_dict(),
            "blocks": [b.to_dict() for b in self.result_blocks()],
        }
