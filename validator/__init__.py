"""
validator — walidacja referencji z testów do dokumentacji i raport pokrycia.

Interfejs publiczny:
    ReferenceValidator  — walidator referencji jednego projektu
    validate_reference / validate_references — skróty funkcyjne
    resolve_doc_path    — ścieżka referencji → plik dokumentu
    calculate_coverage / find_orphaned_docs / find_tests_without_refs
    generate_report     — pełny raport projektu
    ValidationReport, ValidationResult, DocCoverage, ErrorCode — typy raportu

Typowe użycie:
    from validator import generate_report

    report = generate_report("/path/to/project")
    for result in report.invalid:
        print(result.code, result.reference.raw, result.error)
"""

from .types import DocCoverage, ErrorCode, ValidationReport, ValidationResult
from .reference_validator import (
    ReferenceValidator,
    resolve_doc_path,
    validate_reference,
    validate_references,
)
from .coverage import (
    calculate_coverage,
    find_orphaned_docs,
    find_tests_without_refs,
    generate_report,
)

__all__ = [
    "ErrorCode",
    "ValidationResult",
    "DocCoverage",
    "ValidationReport",
    "ReferenceValidator",
    "resolve_doc_path",
    "validate_reference",
    "validate_references",
    "calculate_coverage",
    "find_orphaned_docs",
    "find_tests_without_refs",
    "generate_report",
]
