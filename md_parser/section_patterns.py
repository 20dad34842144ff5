"""
md_parser/section_patterns.py — wzorce regex do rozpoznawania początków sekcji.

Każdy SectionPattern zawiera:
  - regex        : skompilowany wzorzec (dopasowanie całej linii)
  - extract_title: funkcja wyciągająca tytuł sekcji z Match
  - extract_level: funkcja wyznaczająca głębokość (0 = kotwica bez nagłówka)
  - extract_id   : jawny identyfikator {#id} (None gdy brak)

Wzorce są testowane w kolejności; pierwsza pasująca wygrywa.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class SectionPattern:
    regex: re.Pattern[str]
    extract_title: Callable[[re.Match[str]], str]
    extract_level: Callable[[re.Match[str]], int]
    extract_id: Callable[[re.Match[str]], str | None]


def slugify(text: str) -> str:
    """
    Zamień tekst nagłówka na kotwicę URL.

    Małe litery, usunięcie znaków spoza [\\w\\s-], białe znaki → '-',
    zwinięcie wielokrotnych '-'. Funkcja jest idempotentna.
    """
    text = text.strip().lower()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-{2,}", "-", text)
    return text.strip("-")


# Otwarcie / zamknięcie bloku kodu (``` lub ~~~)
FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})")

# Jawny identyfikator na końcu nagłówka: "## Tytuł {#wlasny-id}"
_TRAILING_ID_RE = re.compile(r"\s*\{#([\w-]+)\}\s*$")


def _heading_title(m: re.Match[str]) -> str:
    title = _TRAILING_ID_RE.sub("", m.group(2))
    # Zamykające # w stylu ATX: "## Tytuł ##"
    title = re.sub(r"\s+#+\s*$", "", title)
    return title.strip()


def _heading_id(m: re.Match[str]) -> str | None:
    id_match = _TRAILING_ID_RE.search(m.group(2))
    return id_match.group(1) if id_match else None


PATTERNS: list[SectionPattern] = [
    # -------------------------------------------------------------------------
    # Nagłówki ATX: "# Tytuł" .. "###### Tytuł"
    # -------------------------------------------------------------------------
    SectionPattern(
        regex=re.compile(r"^(#{1,6})\s+(.+?)\s*$"),
        extract_title=_heading_title,
        extract_level=lambda m: len(m.group(1)),
        extract_id=_heading_id,
    ),

    # -------------------------------------------------------------------------
    # Poziom 0: samodzielna kotwica blokowa: "{#blok-id}"
    # -------------------------------------------------------------------------
    SectionPattern(
        regex=re.compile(r"^\s*\{#([\w-]+)\}\s*$"),
        extract_title=lambda m: m.group(1),
        extract_level=lambda m: 0,
        extract_id=lambda m: m.group(1),
    ),
]


def match_section_start(line: str) -> tuple[str, int, str | None] | None:
    """Zwraca (tytuł, poziom, jawny_id) dla linii otwierającej sekcję albo None."""
    for pattern in PATTERNS:
        m = pattern.regex.match(line)
        if m:
            return pattern.extract_title(m), pattern.extract_level(m), pattern.extract_id(m)
    return None
