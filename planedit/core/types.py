from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple
from uuid import uuid4

Role = Literal["user", "assistant"]
Snapshot = Tuple[int, Optional[str], Tuple[str, ...]]

def new_id() -> str:
    return uuid4().hex

@dataclass
class ChatMessage:
    role: Role
    content: str
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {"id": self.id, "role": self.role, "content": self.content}

@dataclass
class PlanState:
    """
    Plan éditable. Toute modification des étapes ou du prompt efface le
    résultat (has_run=False) et incrémente `revision`.
    """
    original_prompt: Optional[str] = None
    steps: List[str] = field(default_factory=list)
    has_run: bool = False
    result: Optional[str] = None
    revision: int = 0

    def invalidate(self) -> None:
        self.has_run = False
        self.result = None
        self.revision += 1

    def reset(self, prompt: str, steps: List[str]) -> None:
        self.original_prompt = prompt
        self.steps = list(steps)
        self.invalidate()

    def update_step(self, index: int, text: str) -> None:
        self._check(index)
        self.steps[index] = text
        self.invalidate()

    def remove_step(self, index: int) -> None:
        self._check(index)
        del self.steps[index]
        self.invalidate()

    def add_step(self, text: str = "", *, fallback_prompt: str = "") -> None:
        if self.original_prompt is None:
            self.original_prompt = fallback_prompt
        self.steps.append(text)
        self.invalidate()

    def move_step(self, index: int, direction: Literal["up", "down"]) -> bool:
        """Échange avec le voisin; hors bornes -> rien ne change (False)."""
        target = index - 1 if direction == "up" else index + 1
        if not (0 <= index < len(self.steps)) or not (0 <= target < len(self.steps)):
            return False
        self.steps[index], self.steps[target] = self.steps[target], self.steps[index]
        self.invalidate()
        return True

    def clear_result(self) -> None:
        """Efface l'affichage sans toucher aux étapes (révision inchangée)."""
        self.has_run = False
        self.result = None

    def set_result(self, text: str) -> None:
        self.result = text
        self.has_run = True

    def snapshot(self) -> Snapshot:
        return (self.revision, self.original_prompt, tuple(self.steps))

    def to_dict(self) -> dict:
        return {
            "original_prompt": self.original_prompt,
            "steps": list(self.steps),
            "has_run": self.has_run,
            "result": self.result,
            "revision": self.revision,
        }

    def _check(self, index: int) -> None:
        if not (0 <= index < len(self.steps)):
            raise IndexError(f"étape {index} inexistante ({len(self.steps)} étape(s))")
