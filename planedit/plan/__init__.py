from .blocks import DisplayBlock, ListBlock, Paragraph, Section, to_display_blocks
from .extract import FALLBACK_STEPS, extract_steps, parse_json_steps, steps_from_lines
from .normalize import coerce_step, normalize_steps, strip_marker
from .prompts import build_plan_prompt, build_run_prompt

__all__ = [
    "DisplayBlock", "ListBlock", "Paragraph", "Section", "to_display_blocks",
    "FALLBACK_STEPS", "extract_steps", "parse_json_steps", "steps_from_lines",
    "coerce_step", "normalize_steps", "strip_marker",
    "build_plan_prompt", "build_run_prompt",
]
