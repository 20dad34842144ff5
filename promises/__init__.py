"""
promises — obietnice dokumentacji i wykrywanie długu dokumentacyjnego.

Interfejs publiczny:
    extract_promises_from_section / extract_promises_from_doc / extract_promises
    scan_exports / scan_source_definitions — symbole kodu projektu
    SymbolIndex, TestReferenceIndex        — indeksy budowane raz na uruchomienie
    has_test_coverage, verify_promise      — weryfikacja pojedynczej obietnicy
    calculate_severity, generate_suggestion, calculate_debt

Typowe użycie:
    from promises import calculate_debt

    report = calculate_debt("/path/to/project")
    for debt in report.debts:
        print(debt.severity, debt.promise.identifier, debt.suggestion)
"""

from .extractor import (
    extract_promises,
    extract_promises_from_doc,
    extract_promises_from_section,
)
from .symbols import scan_exports, scan_source_definitions
from .verifier import (
    FEATURE_MIN_TOKEN_LENGTH,
    SymbolIndex,
    TestReferenceIndex,
    has_test_coverage,
    verify_promise,
)
from .debt import (
    build_report,
    calculate_debt,
    calculate_severity,
    generate_suggestion,
    promises_to_debts,
)

__all__ = [
    "extract_promises_from_section",
    "extract_promises_from_doc",
    "extract_promises",
    "scan_exports",
    "scan_source_definitions",
    "FEATURE_MIN_TOKEN_LENGTH",
    "SymbolIndex",
    "TestReferenceIndex",
    "has_test_coverage",
    "verify_promise",
    "calculate_severity",
    "generate_suggestion",
    "promises_to_debts",
    "build_report",
    "calculate_debt",
]
