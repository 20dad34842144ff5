"""
data_model/documents.py — model sekcji dokumentu markdown.

Document odpowiada jednemu plikowi; Section to region między nagłówkiem
a następnym nagłówkiem dowolnego poziomu (płaska lista, głębokość jest
tylko metadaną). Pole `slug` jest stabilnym identyfikatorem sekcji używanym
jako kotwica w referencjach `plik.md#slug`.

Elementy wyprowadzane z treści sekcji:
  CodeExample    — blok ``` z językiem, meta i opcjonalną parą input/expected
  Assertion      — twierdzenie (requirement | gherkin | behavior)
  ParsedTable    — tabela markdown; wiersze jako słowniki nagłówek → wartość
  InlineBinding  — instrukcja [wartość](!komenda:pole) specyfikacji wykonywalnej
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, TypeAlias

from .common import Slug

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Wiersz tabeli: nagłówek → wartość (literał JSON lub surowy tekst)
TableRow: TypeAlias = dict[str, Any]


# ---------------------------------------------------------------------------
# CodeExample
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class CodeExample:
    """
    Blok kodu z sekcji.

    - language:   tag języka po otwierającym ``` (domyślnie "text")
    - code:       treść bloku bez otaczających białych znaków
    - raw:        pełny tekst bloku razem z ogrodzeniem
    - line:       1-based linia otwierającego ``` w treści sekcji
    - meta:       sufiks po dwukropku, np. ```python:example → "example"
    - structured: klucze "input" / "expected" z linii `input:` / `output:`
    """
    language: str
    code: str
    raw: str
    line: int
    meta: str | None = None
    structured: dict[str, Any] = field(default_factory=dict)

    @property
    def input(self) -> Any:
        return self.structured.get("input")

    @property
    def expected(self) -> Any:
        return self.structured.get("expected")

    @property
    def is_structured(self) -> bool:
        """True gdy przykład ma zarówno input, jak i expected."""
        return "input" in self.structured and "expected" in self.structured


# ---------------------------------------------------------------------------
# Assertion
# ---------------------------------------------------------------------------

class AssertionType(StrEnum):
    """Rodzaj twierdzenia; kolejność = priorytet dopasowania."""
    REQUIREMENT = "requirement"
    GHERKIN     = "gherkin"
    BEHAVIOR    = "behavior"


@dataclass(slots=True)
class Assertion:
    """
    Twierdzenie wykryte w linii treści.

    - type:    klasa twierdzenia
    - keyword: dopasowane słowo kluczowe, np. "MUST", "Given", "should"
    - text:    tekst po słowie kluczowym
    - context: cała linia (po strip)
    - line:    1-based numer linii w treści sekcji
    """
    type: AssertionType
    keyword: str
    text: str
    context: str
    line: int


# ---------------------------------------------------------------------------
# ParsedTable
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ParsedTable:
    """
    Tabela markdown.

    - headers: komórki pierwszego wiersza
    - rows:    wiersze danych (TableRow) z wartościami po parse_literal
    - cells:   surowe komórki wierszy danych (do ponownego skanu bindingów)
    - raw:     tekst tabeli
    - line:    1-based linia pierwszego wiersza w treści sekcji
    """
    headers: list[str]
    rows: list[TableRow]
    cells: list[list[str]]
    raw: str
    line: int

    @property
    def end_line(self) -> int:
        return self.line + len(self.raw.splitlines()) - 1


# ---------------------------------------------------------------------------
# InlineBinding
# ---------------------------------------------------------------------------

class BindingCommand(StrEnum):
    """Zamknięty zbiór komend bindingów; inne tokeny są pomijane."""
    SET     = "set"
    VERIFY  = "verify"
    EXECUTE = "execute"


@dataclass(frozen=True, slots=True)
class InlineBinding:
    """
    Binding [value](!command:field).

    - value:   literał (zawsze tekst)
    - command: set | verify | execute
    - field:   nazwa pola wejściowego / wyjściowego albo fixture'a
    - raw:     cały dopasowany fragment
    - line:    1-based numer linii w skanowanym tekście
    """
    value: str
    command: BindingCommand
    field: str
    raw: str
    line: int


# ---------------------------------------------------------------------------
# Section / Document
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Section:
    """
    Sekcja dokumentu.

    - title:    tekst nagłówka (dla kotwicy blokowej: jej identyfikator)
    - level:    1..6 dla nagłówków, 0 dla kotwicy {#id} bez nagłówka
    - slug:     unikalny w obrębie dokumentu identyfikator
    - line:     1-based linia nagłówka w całym dokumencie
    - end_line: ostatnia linia należąca do sekcji
    - content:  tekst między nagłówkiem a następnym nagłówkiem
    """
    title: str
    level: int
    slug: Slug
    line: int
    end_line: int
    content: str = ""
    examples: list[CodeExample] = field(default_factory=list)
    assertions: list[Assertion] = field(default_factory=list)
    tables: list[ParsedTable] = field(default_factory=list)
    bindings: list[InlineBinding] = field(default_factory=list)

    def contains_line(self, line: int) -> bool:
        return self.line <= line <= self.end_line


@dataclass(slots=True)
class Document:
    """
    Wynik parsowania jednego dokumentu — tworzony od nowa przy każdym
    parsowaniu, nigdy nie modyfikowany.

    - raw:         pełny tekst źródłowy
    - sections:    sekcje w kolejności dokumentu
    - line_count:  liczba linii tekstu
    - frontmatter: słownik z nagłówka YAML (--- ... ---), pusty gdy brak
    """
    raw: str
    sections: list[Section]
    line_count: int
    frontmatter: dict[str, Any] = field(default_factory=dict)

    @property
    def anchors(self) -> list[Slug]:
        return [s.slug for s in self.sections]

    @property
    def section_map(self) -> dict[Slug, Section]:
        return {s.slug: s for s in self.sections}

    def get(self, slug: Slug) -> Section | None:
        """Szuka sekcji po slugu."""
        for section in self.sections:
            if section.slug == slug:
                return section
        return None

    def has_anchor(self, slug: Slug) -> bool:
        return self.get(slug) is not None


@dataclass(slots=True)
class LoadedSpec:
    """
    Dokument wczytany jako specyfikacja, opcjonalnie zawężony do sekcji.

    - path:           bezwzględna ścieżka pliku
    - document:       sparsowany dokument (pusty gdy plik nie istnieje)
    - target_section: sekcja wskazana przez #kotwicę (None gdy brak kotwicy)
    - anchor:         kotwica z ścieżki specyfikacji, np. "examples"
    """
    path: str
    document: Document
    target_section: Section | None = None
    anchor: str | None = None

    @property
    def sections(self) -> list[Section]:
        """Sekcje do wykonania: wskazana sekcja albo wszystkie."""
        if self.anchor is not None:
            return [self.target_section] if self.target_section else []
        return list(self.document.sections)
