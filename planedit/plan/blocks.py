"""
Découpage de la réponse finale en blocs d'affichage.

Heuristique de mise en page sur de la prose, pas un parseur markdown:
une ligne est classée HEADER, EMPHASIS, BULLET ou PLAIN (dans cet ordre de
priorité), les titres de section venant uniquement de SECTION_LABELS ou
d'une ligne entièrement en **gras** à l'intérieur d'une section ouverte.
Une section ne contient jamais d'autre section.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Union
from .normalize import BULLET_RE

# libellés reconnus comme titres de section (insensible à la casse)
SECTION_LABELS = [
    r"Day \d+",
    r"Evening \d+",
    r"Phase \d+",
    r"Step \d+",
    r"Week \d+",
    r"Section \d+",
    r"Meal Prep",
    r"Breakfast",
    r"Lunch",
    r"Dinner",
    r"Key Decisions",
    r"Assumptions",
    r"Notes",
    r"Conclusion",
]

SECTION_RE = re.compile(
    r"^(" + "|".join(SECTION_LABELS) + r")\b[\s:]*(.*)$", re.IGNORECASE
)
EMPHASIS_RE = re.compile(r"^\*{2}(.*?)\*{2}$")

class LineKind(str, Enum):
    HEADER = "header"
    EMPHASIS = "emphasis"
    BULLET = "bullet"
    PLAIN = "plain"

@dataclass
class Paragraph:
    text: str
    type: str = field(default="paragraph", init=False)

    def to_dict(self) -> dict:
        return {"type": self.type, "text": self.text}

@dataclass
class ListBlock:
    items: list[str]
    type: str = field(default="list", init=False)

    def to_dict(self) -> dict:
        return {"type": self.type, "items": list(self.items)}

@dataclass
class Section:
    title: str
    content: list[Union[Paragraph, ListBlock]]
    type: str = field(default="section", init=False)

    def to_dict(self) -> dict:
        return {"type": self.type, "title": self.title, "content": [b.to_dict() for b in self.content]}

DisplayBlock = Union[Paragraph, ListBlock, Section]

def classify_line(line: str, in_section: bool = False) -> tuple[LineKind, str]:
    """
    Renvoie (type de ligne, contenu utile):
      HEADER   -> libellé de section capturé
      EMPHASIS -> titre sans les ** (seulement dans une section ouverte)
      BULLET   -> texte sans la puce
      PLAIN    -> ligne telle quelle

    Hors section, une ligne entièrement en gras (`**Titre**`) est PLAIN et
    garde ses `**`; seule une ligne dont le gras couvre toute la ligne est
    concernée: `**Gras** suite` commence par `*` et reste une puce.
    """
    m = SECTION_RE.match(line)
    if m:
        return LineKind.HEADER, m.group(1)
    if in_section and EMPHASIS_RE.match(line):
        return LineKind.EMPHASIS, line.replace("**", "").strip()
    if not in_section and EMPHASIS_RE.match(line):
        # gras hors section: paragraphe, pas une puce "*"
        return LineKind.PLAIN, line
    if BULLET_RE.match(line):
        return LineKind.BULLET, BULLET_RE.sub("", line, count=1).strip()
    return LineKind.PLAIN, line

def _segment_flat(lines: list[str]) -> list[Union[Paragraph, ListBlock]]:
    """Paragraphes + listes à puces, sans sections (contenu d'une section)."""
    blocks: list[Union[Paragraph, ListBlock]] = []
    items: list[str] = []
    for line in lines:
        if BULLET_RE.match(line):
            items.append(BULLET_RE.sub("", line, count=1).strip())
            continue
        if items:
            blocks.append(ListBlock(items))
            items = []
        if line:
            blocks.append(Paragraph(line))
    if items:
        blocks.append(ListBlock(items))
    return blocks

def to_display_blocks(text: str) -> list[DisplayBlock]:
    lines = [l.strip() for l in (text or "").split("\n")]
    lines = [l for l in lines if l]

    blocks: list[DisplayBlock] = []
    current_list: list[str] = []
    section_title: str | None = None
    section_lines: list[str] = []

    def flush_list() -> None:
        nonlocal current_list
        if current_list:
            blocks.append(ListBlock(current_list))
            current_list = []

    def flush_section() -> None:
        nonlocal section_title, section_lines
        if section_title is not None:
            content = _segment_flat(section_lines)
            blocks.append(Section(section_title, content or [Paragraph("")]))
            section_title = None
            section_lines = []

    for line in lines:
        in_section = section_title is not None
        kind, payload = classify_line(line, in_section=in_section)
        if kind is LineKind.HEADER:
            flush_list()
            flush_section()
            section_title = payload
        elif kind is LineKind.EMPHASIS:
            flush_list()
            flush_section()
            section_title = payload
        elif in_section:
            section_lines.append(line)
        elif kind is LineKind.BULLET:
            current_list.append(payload)
        else:
            flush_list()
            blocks.append(Paragraph(payload))

    flush_list()
    flush_section()

    return blocks if blocks else [Paragraph(text)]
