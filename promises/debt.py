"""
promises/debt.py — dług dokumentacyjny: priorytety, sugestie, raport.

calculate_debt(project_dir, doc_options, debt_options) -> DebtReport

Priorytet niespełnionej obietnicy:
  critical — jawna funkcja, wymaganie MUST / SHALL
  warning  — wymaganie SHOULD, endpoint API
  info     — pozostałe (funkcjonalności heurystyczne)
"""

from __future__ import annotations

import logging
from pathlib import Path

from data_model.options import DebtOptions, DocRefOptions
from data_model.promises import (
    DebtReport,
    DebtSeverity,
    DocDebt,
    DocPromise,
    PromiseConfidence,
    PromiseFulfillment,
    PromiseType,
)

from .extractor import extract_promises
from .verifier import SymbolIndex, TestReferenceIndex, verify_promise

logger = logging.getLogger(__name__)


def calculate_severity(promise: DocPromise) -> DebtSeverity:
    keyword = (promise.keyword or "").upper()

    if promise.type == PromiseType.REQUIREMENT and keyword.startswith(("MUST", "SHALL")):
        return DebtSeverity.CRITICAL
    if promise.type == PromiseType.FUNCTION and promise.confidence == PromiseConfidence.EXPLICIT:
        return DebtSeverity.CRITICAL
    if promise.type == PromiseType.REQUIREMENT and keyword.startswith("SHOULD"):
        return DebtSeverity.WARNING
    if promise.type == PromiseType.API_ENDPOINT:
        return DebtSeverity.WARNING
    return DebtSeverity.INFO


def generate_suggestion(promise: DocPromise) -> str:
    match promise.type:
        case PromiseType.FUNCTION:
            return f"Implement {promise.identifier}() or remove from documentation"
        case PromiseType.API_ENDPOINT:
            return f"Implement endpoint {promise.identifier} or update API docs"
        case PromiseType.REQUIREMENT:
            return "Add tests for requirement or clarify documentation"
        case PromiseType.FEATURE:
            return "Verify feature exists or update feature description"
    return "Verify documentation matches implementation"


def promises_to_debts(fulfillments: list[PromiseFulfillment]) -> list[DocDebt]:
    return [
        DocDebt(
            promise=f.promise,
            severity=calculate_severity(f.promise),
            suggestion=generate_suggestion(f.promise),
        )
        for f in fulfillments
        if not f.fulfilled
    ]


def build_report(fulfillments: list[PromiseFulfillment]) -> DebtReport:
    """Raport z gotowych wyników weryfikacji; rate = 100 gdy brak obietnic."""
    debts = promises_to_debts(fulfillments)
    total = len(fulfillments)
    fulfilled = total - len(debts)
    return DebtReport(
        total_promises=total,
        fulfilled_count=fulfilled,
        debt_count=len(debts),
        fulfillment_rate=(fulfilled / total * 100) if total else 100.0,
        fulfillments=fulfillments,
        debts=debts,
    )


def calculate_debt(
    project_dir: str | Path,
    doc_options: DocRefOptions | None = None,
    debt_options: DebtOptions | None = None,
) -> DebtReport:
    doc_opts  = doc_options or DocRefOptions()
    debt_opts = debt_options or DebtOptions()

    promises = extract_promises(project_dir, doc_opts)
    if not debt_opts.include_inferred:
        promises = [p for p in promises if p.confidence == PromiseConfidence.EXPLICIT]

    # Oba indeksy budowane raz na uruchomienie
    symbols = SymbolIndex.build(project_dir, debt_opts)
    tests   = TestReferenceIndex.build(project_dir, doc_opts)

    fulfillments = [verify_promise(p, symbols, tests) for p in promises]
    report = build_report(fulfillments)

    logger.debug(
        "Dług: %d obietnic, %d spełnionych (%.1f%%)",
        report.total_promises, report.fulfilled_count, report.fulfillment_rate,
    )
    return report
