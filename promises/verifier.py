"""
promises/verifier.py — weryfikacja obietnic względem kodu i testów.

  SymbolIndex        — export surface + definicje źródłowe (raz na uruchomienie)
  TestReferenceIndex — referencje z testów do dokumentacji (raz na uruchomienie)
  verify_promise(promise, symbols, tests) -> PromiseFulfillment

Reguły spełnienia:
  function     — nazwa w eksportach (export-exists) albo w definicjach (code-exists)
  requirement  — test wskazuje sekcję wymagania (test-exists)
  feature      — dowolny symbol zawiera token frazy (code-exists, heurystyka)
  api-endpoint — nie jest weryfikowany w kodzie (zawsze not-found)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from data_model.common import LineRange
from data_model.options import DebtOptions, DocRefOptions
from data_model.promises import (
    DocPromise,
    PromiseFulfillment,
    PromiseSource,
    PromiseType,
    VerificationMethod,
)
from data_model.references import DocReference, ReferenceKind
from scanner import doc_paths_match, scan_doc_references

from .symbols import scan_exports, scan_source_definitions

# Heurystyka funkcjonalności: pomijane tokeny frazy
FEATURE_MIN_TOKEN_LENGTH = 3
FEATURE_STOP_WORDS: frozenset[str] = frozenset({
    "the", "and", "for", "with", "all", "any", "your", "you", "our", "its",
    "from", "into", "that", "this", "can", "are", "has", "have", "also",
    "full", "more", "most", "many", "easy", "simple", "both", "each",
})


# ---------------------------------------------------------------------------
# Indeksy
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class SymbolIndex:
    """
    Symbole kodu projektu.

    - exports:     nazwy osiągalne z plików wejściowych (mocniejszy dowód)
    - definitions: definicje najwyższego poziomu w plikach źródłowych
    """
    exports: set[str] = field(default_factory=set)
    definitions: set[str] = field(default_factory=set)

    @classmethod
    def build(
        cls,
        project_dir: str | Path,
        options: DebtOptions | None = None,
    ) -> "SymbolIndex":
        return cls(
            exports=scan_exports(project_dir, options),
            definitions=scan_source_definitions(project_dir, options),
        )

    def lookup(self, name: str) -> VerificationMethod | None:
        if name in self.exports:
            return VerificationMethod.EXPORT_EXISTS
        if name in self.definitions:
            return VerificationMethod.CODE_EXISTS
        return None

    def all_symbols(self) -> list[str]:
        """Wszystkie symbole, posortowane (deterministyczny dowód heurystyki)."""
        return sorted(self.exports | self.definitions)


def _lines_overlap(line_ref: int | LineRange, start: int, end: int) -> bool:
    if isinstance(line_ref, LineRange):
        return line_ref.start <= end and line_ref.end >= start
    return start <= line_ref <= end


@dataclass(slots=True)
class TestReferenceIndex:
    """
    Referencje z plików testowych, zebrane jednym skanem.

    Sekcja jest pokryta, gdy test wskazuje jej dokument i:
      - kotwicę równą slugowi sekcji, albo
      - cały dokument znacznikiem "DOC:", albo
      - linię / zakres nachodzący na linie sekcji.
    Gołe wzmianki "(plik.md)" nie pokrywają sekcji.
    """
    __test__ = False  # nie jest klasą testową pytest

    references: list[DocReference] = field(default_factory=list)
    docs_dir: str = "docs"

    @classmethod
    def build(
        cls,
        project_dir: str | Path,
        options: DocRefOptions | None = None,
    ) -> "TestReferenceIndex":
        opts = options or DocRefOptions()
        return cls(
            references=scan_doc_references(project_dir, opts),
            docs_dir=opts.docs_dir,
        )

    def find_covering_test(self, source: PromiseSource) -> str | None:
        """Plik testowy pokrywający sekcję albo None."""
        for ref in self.references:
            if not doc_paths_match(ref.doc_path, source.file, self.docs_dir):
                continue
            if ref.anchor_ref is not None:
                if ref.anchor_ref == source.section:
                    return ref.test_file
            elif ref.line_ref is not None:
                if _lines_overlap(ref.line_ref, source.line, source.end_line or source.line):
                    return ref.test_file
            elif ref.kind == ReferenceKind.DOC_MARKER:
                return ref.test_file
        return None


def has_test_coverage(
    project_dir: str | Path,
    source: PromiseSource,
    options: DocRefOptions | None = None,
) -> str | None:
    """Jednorazowe sprawdzenie pokrycia sekcji (skanuje testy przy każdym wywołaniu)."""
    return TestReferenceIndex.build(project_dir, options).find_covering_test(source)


# ---------------------------------------------------------------------------
# Weryfikacja
# ---------------------------------------------------------------------------

def feature_tokens(phrase: str) -> list[str]:
    """Tokeny frazy funkcjonalności brane pod uwagę przez heurystykę."""
    return [
        token
        for token in re.findall(r"\w+", phrase.lower())
        if len(token) >= FEATURE_MIN_TOKEN_LENGTH and token not in FEATURE_STOP_WORDS
    ]


def verify_promise(
    promise: DocPromise,
    symbols: SymbolIndex,
    tests: TestReferenceIndex,
) -> PromiseFulfillment:
    match promise.type:
        case PromiseType.FUNCTION:
            method = symbols.lookup(promise.identifier)
            if method is not None:
                evidence = "package exports" if method == VerificationMethod.EXPORT_EXISTS else "source files"
                return PromiseFulfillment(promise, True, method, evidence)

        case PromiseType.REQUIREMENT:
            test_file = tests.find_covering_test(promise.source)
            if test_file is not None:
                return PromiseFulfillment(promise, True, VerificationMethod.TEST_EXISTS, test_file)

        case PromiseType.FEATURE:
            candidates = symbols.all_symbols()
            for token in feature_tokens(promise.identifier):
                for name in candidates:
                    if token in name.lower():
                        return PromiseFulfillment(promise, True, VerificationMethod.CODE_EXISTS, name)

    return PromiseFulfillment(promise, False, VerificationMethod.NOT_FOUND)
