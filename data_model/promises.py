"""
data_model/promises.py — obietnice dokumentacji i dług dokumentacyjny.

DocPromise      — twierdzenie dokumentacji o kodzie (funkcja, endpoint,
                  wymaganie, funkcjonalność)
PromiseFulfillment — wynik weryfikacji obietnicy w kodzie/testach
DocDebt         — niespełniona obietnica z priorytetem i sugestią naprawy
DebtReport      — zestawienie dla całego projektu
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .common import DocPath, Slug


class PromiseType(StrEnum):
    FUNCTION     = "function"
    API_ENDPOINT = "api-endpoint"
    REQUIREMENT  = "requirement"
    FEATURE      = "feature"


class PromiseConfidence(StrEnum):
    EXPLICIT = "explicit"
    INFERRED = "inferred"


class VerificationMethod(StrEnum):
    """Sposób spełnienia obietnicy; export-exists jest silniejszy niż code-exists."""
    EXPORT_EXISTS = "export-exists"
    CODE_EXISTS   = "code-exists"
    TEST_EXISTS   = "test-exists"
    NOT_FOUND     = "not-found"


class DebtSeverity(StrEnum):
    CRITICAL = "critical"
    WARNING  = "warning"
    INFO     = "info"


@dataclass(frozen=True, slots=True)
class PromiseSource:
    """
    Współrzędne obietnicy w dokumentacji.

    - file:     ścieżka dokumentu względem katalogu docs
    - section:  slug sekcji
    - line:     linia nagłówka sekcji
    - end_line: ostatnia linia sekcji (do dopasowania referencji liniowych)
    """
    file: DocPath
    section: Slug
    line: int = 0
    end_line: int = 0


@dataclass(slots=True)
class DocPromise:
    """
    Obietnica dokumentacji.

    - type:       rodzaj obietnicy
    - identifier: nazwa funkcji, "METHOD /path", treść wymagania lub fraza
    - source:     miejsce w dokumentacji
    - text:       fragment tekstu, z którego wyprowadzono obietnicę
    - confidence: explicit (jawna składnia) | inferred (heurystyka prozy)
    - keyword:    słowo kluczowe wymagania (MUST / SHALL / SHOULD ...)
    """
    type: PromiseType
    identifier: str
    source: PromiseSource
    text: str
    confidence: PromiseConfidence
    keyword: str | None = None

    @property
    def key(self) -> str:
        """Klucz deduplikacji w obrębie sekcji."""
        return f"{self.type}:{self.identifier}"


@dataclass(slots=True)
class PromiseFulfillment:
    promise: DocPromise
    fulfilled: bool
    verification: VerificationMethod
    evidence: str | None = None


@dataclass(slots=True)
class DocDebt:
    promise: DocPromise
    severity: DebtSeverity
    suggestion: str


@dataclass(slots=True)
class DebtReport:
    """
    Raport długu dokumentacyjnego.

    fulfillment_rate = fulfilled / total × 100; 100 gdy brak obietnic.
    """
    total_promises: int
    fulfilled_count: int
    debt_count: int
    fulfillment_rate: float
    fulfillments: list[PromiseFulfillment] = field(default_factory=list)
    debts: list[DocDebt] = field(default_factory=list)

    def by_severity(self, severity: DebtSeverity) -> list[DocDebt]:
        return [d for d in self.debts if d.severity == severity]
