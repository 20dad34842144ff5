"""Testy pomocników pytest dla testów powiązanych z dokumentacją."""

from __future__ import annotations

from pathlib import Path

import pytest

from data_model.documents import AssertionType
from executable.pytest_helpers import (
    assertion_params,
    example_params,
    spec_section,
    table_params,
)

DOCS = Path(__file__).parent / "docs"
DOUBLE = spec_section("math.md#double", docs_root=DOCS)


def double(value: float) -> float:
    return value * 2


# ---------------------------------------------------------------------------
# Użycie jak w projekcie: parametry prosto z docs/math.md
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("row", table_params(DOUBLE))
def test_double_table(row: dict) -> None:
    assert double(row["input"]) == row["expected"]


@pytest.mark.parametrize("value, expected, example", example_params(DOUBLE))
def test_double_examples(value: int, expected: int, example) -> None:
    assert example.language == "python"
    assert double(value) == expected


@pytest.mark.parametrize("assertion", assertion_params(DOUBLE, types=(AssertionType.REQUIREMENT,)))
def test_double_requirements_are_documented(assertion) -> None:
    assert assertion.keyword == "MUST"
    assert double(-4) < 0


# ---------------------------------------------------------------------------
# Zachowanie pomocników
# ---------------------------------------------------------------------------

def test_param_ids_describe_rows() -> None:
    params = table_params(DOUBLE)
    assert [p.id for p in params] == [
        "row 1: input=1, expected=2",
        "row 2: input=-3, expected=-6",
        "row 3: input=0.5, expected=1.0",
    ]
    assert example_params(DOUBLE)[0].id == "example 1: 21 -> 42"


def test_section_without_data_yields_skip_param() -> None:
    notes = spec_section("math.md#notes", docs_root=DOCS)

    for params in (table_params(notes), example_params(notes), assertion_params(notes)):
        assert len(params) == 1
        assert params[0].id == "no-data"
        assert [m.name for m in params[0].marks] == ["skip"]


def test_table_index_out_of_range_is_skipped() -> None:
    params = table_params(DOUBLE, table_index=3)
    assert params[0].id == "no-data"
    assert "table index 3 not found" in params[0].marks[0].kwargs["reason"]


def test_whole_file_section() -> None:
    section = spec_section("math.md", docs_root=DOCS)
    assert section.level == 0
    assert section.slug == "math"
    assert len(section.tables) == 1
    assert len(section.examples) == 1


def test_docs_root_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCS_ROOT", str(DOCS))
    assert spec_section("math.md#notes").slug == "notes"


def test_missing_anchor_is_an_error() -> None:
    with pytest.raises(KeyError):
        spec_section("math.md#missing", docs_root=DOCS)
