"""
md_parser/parser.py — parsowanie dokumentu markdown do płaskiej listy sekcji.

Architektura:
  tekst → split("\\n") → front matter (YAML, opcjonalny)
  → maska bloków kodu (nagłówki wewnątrz ``` są ignorowane)
  → match_section_start() dla każdej linii → lista nagłówków
  → _build_sections() → Section (content = tekst do następnego nagłówka)
  → ekstrakcja: examples / assertions / tables / bindings

Kluczowe funkcje publiczne:
  parse_markdown(text) -> Document          (nigdy nie rzuca wyjątku)
  parse_markdown_file(path) -> Document
  load_spec(spec_path, base_path, throw_on_missing) -> LoadedSpec
  has_anchor / get_section / get_sections   (czytają plik przy każdym wywołaniu)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from data_model.common import Slug
from data_model.documents import Document, LoadedSpec, Section

from .extract import (
    extract_assertions,
    extract_code_examples,
    extract_tables,
    fenced_mask,
    parse_inline_bindings,
)
from .section_patterns import match_section_start, slugify

logger = logging.getLogger(__name__)

_FRONTMATTER_DELIMITERS = ("---",)
_FRONTMATTER_CLOSERS = ("---", "...")


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def parse_markdown(text: str) -> Document:
    """
    Parsuje tekst markdown i zwraca Document.

    Anomalie strukturalne (brak nagłówków, zduplikowane slugi, zepsute tabele
    lub front matter) nie są błędami: wynik jest możliwie pełną strukturą.
    """
    lines = text.split("\n")
    line_count = len(lines) if text else 0

    frontmatter, body_start = _split_frontmatter(lines)
    headings = _find_headings(lines, body_start)
    sections = _build_sections(lines, headings, line_count)

    return Document(
        raw=text,
        sections=sections,
        line_count=line_count,
        frontmatter=frontmatter,
    )


def parse_markdown_file(path: str | Path) -> Document:
    """Czyta plik (UTF-8) i parsuje go; OSError propaguje się do wywołującego."""
    return parse_markdown(Path(path).read_text(encoding="utf-8"))


def load_spec(
    spec_path: str,
    base_path: str | Path | None = None,
    throw_on_missing: bool = True,
) -> LoadedSpec:
    """
    Wczytuje specyfikację "docs/plik.md#kotwica".

    Args:
        spec_path:        ścieżka pliku, opcjonalnie z #kotwicą
        base_path:        katalog bazowy dla ścieżek względnych (domyślnie cwd)
        throw_on_missing: True → FileNotFoundError / KeyError dla brakującego
                          pliku / kotwicy; False → pusty wynik i ostrzeżenie
    """
    file_part, _, anchor = spec_path.partition("#")
    path = Path(file_part)
    if not path.is_absolute():
        path = Path(base_path) if base_path is not None else Path.cwd()
        path = path / file_part
    full_path = str(path.resolve())

    if not path.is_file():
        if throw_on_missing:
            raise FileNotFoundError(f"Spec file not found: {full_path}")
        logger.warning("Pominięto brakującą specyfikację: %s", full_path)
        return LoadedSpec(
            path=full_path,
            document=Document(raw="", sections=[], line_count=0),
            anchor=anchor or None,
        )

    document = parse_markdown_file(path)
    if not anchor:
        return LoadedSpec(path=full_path, document=document)

    target = _find_target(document, anchor)
    if target is None:
        if throw_on_missing:
            raise KeyError(f"Anchor #{anchor} not found in {full_path}")
        logger.warning("Brak kotwicy #%s w %s", anchor, full_path)

    return LoadedSpec(
        path=full_path,
        document=document,
        target_section=target,
        anchor=anchor,
    )


def has_anchor(path: str | Path, slug: Slug) -> bool:
    """True gdy plik istnieje i zawiera sekcję o danym slugu."""
    return get_section(path, slug) is not None


def get_section(path: str | Path, slug: Slug) -> Section | None:
    for section in get_sections(path):
        if section.slug == slug:
            return section
    return None


def get_sections(path: str | Path) -> list[Section]:
    """Sekcje pliku; [] gdy plik nie istnieje."""
    if not Path(path).is_file():
        return []
    return parse_markdown_file(path).sections


# ---------------------------------------------------------------------------
# Wewnętrzna implementacja
# ---------------------------------------------------------------------------

def _find_target(document: Document, anchor: str) -> Section | None:
    """Kotwica pasuje do sluga albo (bez względu na wielkość liter) do tytułu."""
    section = document.get(anchor)
    if section is not None:
        return section
    lowered = anchor.lower()
    for section in document.sections:
        if section.title.lower() == lowered:
            return section
    return None


def _split_frontmatter(lines: list[str]) -> tuple[dict[str, Any], int]:
    """
    Zwraca (front_matter, indeks_pierwszej_linii_treści).

    Front matter to blok YAML otwarty "---" w pierwszej linii; niezamknięty
    blok nie jest front matter.
    """
    if not lines or lines[0].strip() not in _FRONTMATTER_DELIMITERS:
        return {}, 0

    for idx in range(1, len(lines)):
        if lines[idx].strip() in _FRONTMATTER_CLOSERS:
            break
    else:
        return {}, 0

    source = "\n".join(lines[1:idx])
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        logger.warning("Niepoprawny front matter YAML: %s", exc)
        return {}, idx + 1

    if data is None:
        return {}, idx + 1
    if not isinstance(data, dict):
        logger.warning("Front matter nie jest mapowaniem (%s), pominięto", type(data).__name__)
        return {}, idx + 1
    return data, idx + 1


def _find_headings(
    lines: list[str],
    body_start: int,
) -> list[tuple[int, str, int, str | None]]:
    """
    Zwraca (indeks_linii, tytuł, poziom, jawny_id) z pominięciem bloków kodu.

    Kotwica blokowa (poziom 0) otwiera sekcję tylko przed pierwszym
    nagłówkiem; później zostaje w treści bieżącej sekcji.
    """
    mask = fenced_mask(lines)
    headings: list[tuple[int, str, int, str | None]] = []
    seen_heading = False
    for idx in range(body_start, len(lines)):
        if mask[idx]:
            continue
        match = match_section_start(lines[idx])
        if match is None:
            continue
        title, level, explicit_id = match
        if level == 0 and seen_heading:
            continue
        seen_heading = seen_heading or level > 0
        headings.append((idx, title, level, explicit_id))
    return headings


def _build_sections(
    lines: list[str],
    headings: list[tuple[int, str, int, str | None]],
    line_count: int,
) -> list[Section]:
    sections: list[Section] = []
    used: set[str] = set()
    seen: dict[str, int] = {}

    def make_slug(base: str, line: int) -> str:
        base = base or "section"
        if base not in used:
            used.add(base)
            return base
        n = seen.get(base, 0)
        while True:
            n += 1
            candidate = f"{base}-{n}"
            if candidate not in used:
                break
        seen[base] = n
        used.add(candidate)
        logger.warning(
            "Zduplikowany slug %r w linii %d, użyto %r", base, line, candidate
        )
        return candidate

    for pos, (idx, title, level, explicit_id) in enumerate(headings):
        next_idx = headings[pos + 1][0] if pos + 1 < len(headings) else len(lines)
        content = "\n".join(lines[idx + 1:next_idx])
        slug = make_slug(explicit_id or slugify(title), idx + 1)

        sections.append(Section(
            title=title,
            level=level,
            slug=slug,
            line=idx + 1,
            end_line=max(idx + 1, min(next_idx, line_count)),
            content=content,
            examples=extract_code_examples(content),
            assertions=extract_assertions(content),
            tables=extract_tables(content),
            bindings=parse_inline_bindings(content),
        ))

    return sections
