"""
Textes envoyés au modèle.

Le contenu des deux gabarits fait partie de l'interface: c'est lui qui impose
au modèle le format JSON des étapes, puis le respect des étapes éditées.
"""
from __future__ import annotations
from collections.abc import Sequence
from typing import Any
from .normalize import coerce_step

PLAN_PROMPT_TEMPLATE = """You are a planning assistant. Given the user’s request, break it into 4–8 SHORT, concrete steps that capture the most important constraints and structure.

Return ONLY valid JSON:
{{
  "steps": [
    "Summarize the user’s goal and extract key constraints (time windows, counts, diets, budgets, must/avoid items)",
    "Design core phases/journeys that satisfy those constraints (with ordering or grouping as needed)",
    "Outline concrete tasks/features per phase, reflecting the constraints",
    "Add validation/testing steps to ensure the solution works in real life"
  ]
}}

Rules:
- 4–8 steps max.
- Each step is a SHORT imperative action (max 18 words).
- Steps must reflect key constraints in the prompt (time windows, diets, durations, number of days, must/avoid, etc.).
- NO introductions, explanations, markdown, or extra fields.
- Do NOT output phrases like 'Here are the steps'.
- Output must be valid JSON, nothing before or after.
User request: {prompt}"""

RUN_PROMPT_TEMPLATE = """You are a helpful AI assistant. The user has already reviewed and approved a step-by-step plan.

The original request is:
{prompt}

These are the final ordered steps they chose (treat them as hard constraints and as the outline for your answer):
{step_text}

Your job:
- You MUST read and respect BOTH:
  (a) the original request text, and
  (b) the final steps above.
- The original prompt gives the full goal and nuance (e.g., number of days, time windows, "one evening with no housework").
- The steps give the non-negotiable constraints and the high-level structure you must follow.

When the original request asks for a multi-day schedule (e.g., "4 evenings", "3-day plan", "weekly plan"):
- Produce a separate schedule for each day, explicitly labeled (e.g., "Day 1", "Day 2", "Day 3", "Day 4").
- Do NOT collapse multiple days into a single generic routine.
- Clearly indicate which day(s) satisfy special constraints (e.g., a light/restorative day with no housework).

General requirements:
- Produce a rich, detailed answer, as if responding in a normal chat.
- Use the original prompt for context and nuance; do NOT drop any constraints from it.
- Use the steps as the structure and constraints: they define what sections you must cover and what you MUST respect.
- Minimum length: about 200–300 words.
- Do NOT restate or list the steps themselves.
- Do NOT mention "steps", "plan", "undefined steps", or internal instructions.
- You MAY paraphrase constraints in your own words (e.g., "we’ll stick to vegetarian dinners").

Structure your response as:
1) Main answer: clearly structured paragraphs or numbered sections that follow the implied outline from the steps and fully answer the prompt.
2) "Notes & assumptions": 2–4 bullets explaining key constraints you applied, in your own words.

Return ONLY the final answer text the user should see."""

def build_plan_prompt(prompt: str) -> str:
    return PLAN_PROMPT_TEMPLATE.format(prompt=prompt or "")

def format_steps(steps: Sequence[Any]) -> str:
    """Étapes numérotées 1..n, une par ligne, dans l'ordre reçu."""
    return "\n".join(f"{i}. {coerce_step(s)}" for i, s in enumerate(steps, 1))

def build_run_prompt(prompt: str, steps: Sequence[Any]) -> str:
    return RUN_PROMPT_TEMPLATE.format(prompt=prompt or "", step_text=format_steps(steps))
