"""Testy walidacji referencji i raportu pokrycia (validator)."""

from __future__ import annotations

from pathlib import Path

import pytest

from data_model.common import LineRange
from data_model.options import DocRefOptions
from data_model.references import DocReference
from validator import (
    ErrorCode,
    ReferenceValidator,
    calculate_coverage,
    find_orphaned_docs,
    find_tests_without_refs,
    generate_report,
    resolve_doc_path,
    validate_reference,
)


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Projekt z dokumentem 100-liniowym; "## How It Works" w linii 50."""
    lines = [f"line {i}" for i in range(1, 101)]
    lines[0] = "# Explainer"
    lines[49] = "## How It Works"
    _write(tmp_path / "docs" / "explainer.md", "\n".join(lines))
    return tmp_path


def _ref(doc_path: str, line_ref: int | LineRange | None = None, anchor: str | None = None) -> DocReference:
    return DocReference(test_file="test_x.py", doc_path=doc_path, raw=doc_path, line_ref=line_ref, anchor_ref=anchor)


# ---------------------------------------------------------------------------
# resolve_doc_path
# ---------------------------------------------------------------------------

def test_resolve_doc_path(tmp_path: Path) -> None:
    assert resolve_doc_path(tmp_path, "docs/a.md") == tmp_path / "docs" / "a.md"
    assert resolve_doc_path(tmp_path, "a.md") == tmp_path / "docs" / "a.md"

    opts = DocRefOptions(docs_dir="documentation")
    assert resolve_doc_path(tmp_path, "guide/a.md", opts) == tmp_path / "documentation" / "guide" / "a.md"


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------

def test_valid_anchor_reference(project: Path) -> None:
    result = validate_reference(_ref("docs/explainer.md", anchor="how-it-works"), project)
    assert result.valid
    assert result.error is None
    assert result.code is None


def test_path_relative_to_docs_dir(project: Path) -> None:
    assert validate_reference(_ref("explainer.md", line_ref=50), project).valid


def test_missing_anchor_lists_available_anchors(project: Path) -> None:
    result = validate_reference(_ref("docs/explainer.md", anchor="nonexistent-section"), project)

    assert not result.valid
    assert result.code == ErrorCode.ANCHOR_NOT_FOUND
    assert "Anchor" in result.error
    assert "Available: explainer, how-it-works" in result.error


def test_missing_document(project: Path) -> None:
    result = validate_reference(_ref("docs/missing.md"), project)
    assert not result.valid
    assert result.code == ErrorCode.DOC_NOT_FOUND
    assert result.error == "Doc file not found: docs/missing.md"


def test_line_out_of_range(project: Path) -> None:
    result = validate_reference(_ref("docs/explainer.md", line_ref=150), project)
    assert not result.valid
    assert result.code == ErrorCode.LINE_OUT_OF_RANGE
    assert result.error == "Line 150 exceeds file length (100 lines)"


def test_line_range_checks_end(project: Path) -> None:
    validator = ReferenceValidator(project)
    assert validator.validate(_ref("docs/explainer.md", line_ref=LineRange(10, 100))).valid
    assert not validator.validate(_ref("docs/explainer.md", line_ref=LineRange(90, 101))).valid


def test_line_check_can_be_disabled(project: Path) -> None:
    opts = DocRefOptions(validate_lines=False, validate_anchors=False)
    validator = ReferenceValidator(project, opts)
    assert validator.validate(_ref("docs/explainer.md", line_ref=150)).valid
    assert validator.validate(_ref("docs/explainer.md", anchor="nope")).valid


def test_anchor_error_without_sections(tmp_path: Path) -> None:
    _write(tmp_path / "docs" / "plain.md", "no headings here\n")
    result = validate_reference(_ref("plain.md", anchor="x"), tmp_path)
    assert result.error.endswith("No anchors found in document")


def test_validate_all_keeps_order(project: Path) -> None:
    refs = [_ref("docs/explainer.md", 1), _ref("docs/gone.md"), _ref("docs/explainer.md", 101)]
    results = ReferenceValidator(project).validate_all(refs)
    assert [r.valid for r in results] == [True, False, False]
    assert [r.code for r in results] == [None, ErrorCode.DOC_NOT_FOUND, ErrorCode.LINE_OUT_OF_RANGE]


# ---------------------------------------------------------------------------
# Pokrycie
# ---------------------------------------------------------------------------

def test_calculate_coverage_counts_and_sorts() -> None:
    refs = [
        DocReference(test_file="t1.py", doc_path="docs/b.md", raw="", line_ref=1),
        DocReference(test_file="t1.py", doc_path="docs/b.md", raw="", line_ref=2),
        DocReference(test_file="t2.py", doc_path="b.md", raw="", anchor_ref="x"),
        DocReference(test_file="t2.py", doc_path="docs/a.md", raw=""),
    ]
    coverage = calculate_coverage(refs, ["a.md", "b.md", "c.md"])

    assert [(c.doc_path, c.ref_count) for c in coverage] == [("b.md", 3), ("a.md", 1), ("c.md", 0)]
    assert coverage[0].referenced_by == ["t1.py", "t2.py"]
    assert find_orphaned_docs(coverage) == ["c.md"]


def test_find_tests_without_refs() -> None:
    refs = [DocReference(test_file="t1.py", doc_path="a.md", raw="")]
    assert find_tests_without_refs(["t1.py", "t2.py"], refs) == ["t2.py"]


# ---------------------------------------------------------------------------
# generate_report
# ---------------------------------------------------------------------------

def test_generate_report(project: Path) -> None:
    _write(project / "docs" / "orphan.md", "# Orphan\n")
    referencing = _write(
        project / "tests" / "test_explainer.py",
        "# DOC: docs/explainer.md#how-it-works\n"
        "def test_x():\n"
        "    # docs/explainer.md:150\n"
        "    pass\n",
    )
    plain = _write(project / "tests" / "test_plain.py", "def test_y():\n    assert True\n")

    report = generate_report(project)

    assert report.total_refs == 2
    assert report.valid_refs == 1
    assert report.invalid_refs == 1
    assert not report.is_valid
    assert report.invalid[0].code == ErrorCode.LINE_OUT_OF_RANGE

    assert [(c.doc_path, c.ref_count) for c in report.coverage] == [("explainer.md", 2), ("orphan.md", 0)]
    assert report.coverage[0].referenced_by == [str(referencing.resolve())]
    assert report.orphaned_docs == ["orphan.md"]
    assert report.tests_without_refs == [str(plain.resolve())]
    assert report.debt is None


def test_generate_report_with_debt(project: Path) -> None:
    _write(project / "docs" / "api.md", "# API\n\nCall `initClient()` first.\n")

    report = generate_report(project, include_debt=True)

    assert report.is_valid
    assert report.debt is not None
    assert report.debt.total_promises == 1
    assert report.debt.debt_count == 1


def test_unreadable_doc_is_reported_not_raised(project: Path) -> None:
    (project / "docs" / "bad.md").write_bytes(b"# T\xff\xfe\n")

    result = validate_reference(_ref("docs/bad.md", anchor="t"), project)

    assert not result.valid
    assert result.code == ErrorCode.DOC_UNREADABLE
    assert result.error.startswith("Cannot read doc file docs/bad.md: ")


def test_generate_report_continues_past_unreadable_doc(project: Path) -> None:
    (project / "docs" / "bad.md").write_bytes(b"# T\xff\xfe\n")
    _write(
        project / "tests" / "test_docs.py",
        "# DOC: docs/bad.md#t\n"
        "# DOC: docs/explainer.md#how-it-works\n",
    )

    report = generate_report(project, include_debt=True)

    assert report.total_refs == 2
    assert report.valid_refs == 1
    assert [r.code for r in report.invalid] == [ErrorCode.DOC_UNREADABLE]
    assert report.debt is not None
