"""
validator/coverage.py — pokrycie dokumentacji testami i raport projektu.

  calculate_coverage(references, doc_files)   -> list[DocCoverage]
  find_orphaned_docs(coverage)                -> list[DocPath]
  find_tests_without_refs(test_files, refs)   -> list[str]
  generate_report(project_dir, options, ...)  -> ValidationReport
"""

from __future__ import annotations

import logging
from pathlib import Path

from data_model.common import DocPath
from data_model.options import DebtOptions, DocRefOptions
from data_model.references import DocReference
from promises import calculate_debt
from scanner import doc_paths_match, get_doc_files, get_test_files, scan_doc_references

from .reference_validator import validate_references
from .types import DocCoverage, ValidationReport

logger = logging.getLogger(__name__)


def calculate_coverage(
    references: list[DocReference],
    doc_files: list[DocPath],
    docs_dir: str = "docs",
) -> list[DocCoverage]:
    """Liczba referencji na dokument; każda referencja trafia do jednego dokumentu."""
    coverage = {doc: DocCoverage(doc_path=doc) for doc in doc_files}

    for ref in references:
        for doc in doc_files:
            if doc_paths_match(doc, ref.doc_path, docs_dir):
                entry = coverage[doc]
                entry.ref_count += 1
                if ref.test_file not in entry.referenced_by:
                    entry.referenced_by.append(ref.test_file)
                break

    return sorted(coverage.values(), key=lambda c: c.ref_count, reverse=True)


def find_orphaned_docs(coverage: list[DocCoverage]) -> list[DocPath]:
    return [c.doc_path for c in coverage if c.ref_count == 0]


def find_tests_without_refs(
    test_files: list[str],
    references: list[DocReference],
) -> list[str]:
    with_refs = {ref.test_file for ref in references}
    return [t for t in test_files if t not in with_refs]


def generate_report(
    project_dir: str | Path,
    options: DocRefOptions | None = None,
    include_debt: bool = False,
    debt_options: DebtOptions | None = None,
) -> ValidationReport:
    """
    Skanuje testy projektu, waliduje referencje i liczy pokrycie.

    include_debt=True dołącza raport długu dokumentacyjnego (promises.calculate_debt).
    """
    opts = options or DocRefOptions()

    references = scan_doc_references(project_dir, opts)
    results    = validate_references(references, project_dir, opts)
    doc_files  = get_doc_files(project_dir, opts)
    test_files = [str(p) for p in get_test_files(project_dir, opts)]
    coverage   = calculate_coverage(references, doc_files, opts.docs_dir)

    valid_count = sum(1 for r in results if r.valid)
    report = ValidationReport(
        project_dir=str(project_dir),
        total_refs=len(references),
        valid_refs=valid_count,
        invalid_refs=len(results) - valid_count,
        results=results,
        coverage=coverage,
        orphaned_docs=find_orphaned_docs(coverage),
        tests_without_refs=find_tests_without_refs(test_files, references),
    )

    if include_debt:
        report.debt = calculate_debt(project_dir, opts, debt_options)

    logger.debug(
        "Raport: %d referencji, %d błędnych, %d dokumentów",
        report.total_refs, report.invalid_refs, len(doc_files),
    )
    return report
