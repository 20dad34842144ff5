"""
validator/types.py — kody błędów i struktury raportu walidacji referencji.

ValidationResult — wynik sprawdzenia jednej referencji (valid + komunikat).
DocCoverage      — liczba referencji do dokumentu i pliki, które go wskazują.
ValidationReport — wynik dla całego projektu: liczniki, wyniki, pokrycie,
    osierocone dokumenty, testy bez referencji, opcjonalnie raport długu.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from data_model.common import DocPath
from data_model.promises import DebtReport
from data_model.references import DocReference


class ErrorCode(StrEnum):
    """Stałe kody błędów walidatora (kolejność = kolejność sprawdzeń)."""

    DOC_NOT_FOUND     = "E_DOC_NOT_FOUND"
    DOC_UNREADABLE    = "E_DOC_UNREADABLE"
    LINE_OUT_OF_RANGE = "E_LINE_OUT_OF_RANGE"
    ANCHOR_NOT_FOUND  = "E_ANCHOR_NOT_FOUND"


@dataclass(slots=True)
class ValidationResult:
    """
    Wynik walidacji pojedynczej referencji.

    - reference: sprawdzana referencja
    - valid:     True gdy dokument istnieje, a linia / kotwica są poprawne
    - error:     czytelny opis błędu (None gdy valid)
    - code:      klasa błędu (None gdy valid)
    """

    reference: DocReference
    valid: bool
    error: str | None = None
    code: ErrorCode | None = None


@dataclass(slots=True)
class DocCoverage:
    """
    Pokrycie dokumentu testami.

    - doc_path:      ścieżka względem katalogu docs
    - ref_count:     liczba referencji wskazujących dokument
    - referenced_by: pliki testowe z referencjami (bez powtórzeń)
    """

    doc_path: DocPath
    ref_count: int = 0
    referenced_by: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ValidationReport:
    """
    Pełny raport walidacji projektu.

    - project_dir:        katalog projektu
    - total_refs:         liczba znalezionych referencji
    - valid_refs / invalid_refs: podział wyników
    - coverage:           pokrycie dokumentów (malejąco po ref_count)
    - orphaned_docs:      dokumenty bez żadnej referencji
    - tests_without_refs: pliki testowe bez referencji
    - debt:               raport długu (None gdy nie liczono)
    """

    project_dir: str
    total_refs: int
    valid_refs: int
    invalid_refs: int
    results: list[ValidationResult] = field(default_factory=list)
    coverage: list[DocCoverage] = field(default_factory=list)
    orphaned_docs: list[DocPath] = field(default_factory=list)
    tests_without_refs: list[str] = field(default_factory=list)
    debt: DebtReport | None = None

    @property
    def is_valid(self) -> bool:
        return self.invalid_refs == 0

    @property
    def invalid(self) -> list[ValidationResult]:
        return [r for r in self.results if not r.valid]
