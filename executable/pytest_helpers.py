"""
executable/pytest_helpers.py — testy powiązane z dokumentacją (pytest).

Funkcje zwracają listy `pytest.param` do użycia w `@pytest.mark.parametrize`:

    from executable.pytest_helpers import spec_section, table_params

    SPEC = spec_section("math.md#double")

    @pytest.mark.parametrize("row", table_params(SPEC))
    def test_double(row):
        assert double(row["input"]) == row["expected"]

Katalog dokumentacji: argument docs_root, zmienna DOCS_ROOT albo "./docs".
Gdy sekcja nie zawiera danych, zwracany jest jeden parametr oznaczony skip.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import pytest

from data_model.documents import AssertionType, Section
from md_parser import load_spec
from md_parser.extract import (
    extract_assertions,
    extract_code_examples,
    extract_tables,
    parse_inline_bindings,
)

DEFAULT_DOCS_ROOT = "./docs"

# Maksymalna długość identyfikatora testu
_ID_LIMIT = 60


def _docs_root(docs_root: str | Path | None) -> str | Path:
    return docs_root or os.environ.get("DOCS_ROOT", DEFAULT_DOCS_ROOT)


def _short(text: str) -> str:
    return text if len(text) <= _ID_LIMIT else text[:_ID_LIMIT - 1] + "…"


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def _skip(reason: str, arity: int) -> list[Any]:
    values = (None,) * arity
    return [pytest.param(*values, marks=pytest.mark.skip(reason=reason), id="no-data")]


def spec_section(spec_path: str, docs_root: str | Path | None = None) -> Section:
    """
    Wczytuje sekcję "plik.md#slug" (albo cały plik bez kotwicy).

    Brak pliku lub kotwicy to błąd: test wskazuje dokumentację, która nie
    istnieje (FileNotFoundError / KeyError).
    """
    spec = load_spec(spec_path, base_path=_docs_root(docs_root), throw_on_missing=True)
    if spec.target_section is not None:
        return spec.target_section

    document = spec.document
    raw = document.raw
    return Section(
        title=Path(spec.path).name,
        level=0,
        slug=Path(spec.path).stem,
        line=1,
        end_line=document.line_count,
        content=raw,
        examples=extract_code_examples(raw),
        assertions=extract_assertions(raw),
        tables=extract_tables(raw),
        bindings=parse_inline_bindings(raw),
    )


def example_params(section: Section) -> list[Any]:
    """Parametry (input, expected, example) z ustrukturyzowanych przykładów."""
    examples = [e for e in section.examples if e.is_structured]
    if not examples:
        return _skip("no structured examples found in spec", 3)
    return [
        pytest.param(
            e.input, e.expected, e,
            id=_short(f"example {i}: {_dumps(e.input)} -> {_dumps(e.expected)}"),
        )
        for i, e in enumerate(examples, start=1)
    ]


def table_params(section: Section, table_index: int = 0) -> list[Any]:
    """Parametr (row) dla każdego wiersza wskazanej tabeli sekcji."""
    if not section.tables:
        return _skip("no tables found in spec", 1)
    if table_index >= len(section.tables):
        return _skip(
            f"table index {table_index} not found (only {len(section.tables)} tables)", 1,
        )

    rows = section.tables[table_index].rows
    return [
        pytest.param(
            row,
            id=_short(f"row {i}: " + ", ".join(f"{k}={_dumps(v)}" for k, v in row.items())),
        )
        for i, row in enumerate(rows, start=1)
    ]


def assertion_params(
    section: Section,
    types: tuple[AssertionType, ...] | None = None,
) -> list[Any]:
    """Parametr (assertion) dla twierdzeń sekcji, opcjonalnie tylko wskazanych typów."""
    assertions = [a for a in section.assertions if types is None or a.type in types]
    if not assertions:
        return _skip("no assertions found in spec", 1)
    return [
        pytest.param(a, id=_short(f"{a.keyword}: {a.text}"))
        for a in assertions
    ]
