"""
data_model — struktury danych modelu docref.

Użycie:
  from data_model import Document, Section, DocReference, DocPromise, ...

Moduły:
  common     — Slug, DocPath, LineRange
  documents  — Document, Section, CodeExample, Assertion, AssertionType,
               ParsedTable, TableRow, InlineBinding, BindingCommand, LoadedSpec
  references — DocReference, ReferenceKind
  promises   — DocPromise, PromiseSource, PromiseType, PromiseConfidence,
               VerificationMethod, PromiseFulfillment, DebtSeverity,
               DocDebt, DebtReport
  execution  — FixtureContext, AssertionResult, AssertionStatus, ExecutionResult
  options    — DocRefOptions, DebtOptions

Wszystkie struktury są tworzone od nowa przy każdym wywołaniu i nie są
współdzielone między wywołaniami.
"""

from .common import (
    Slug,
    DocPath,
    LineRange,
    last_line,
)
from .documents import (
    TableRow,
    CodeExample,
    AssertionType,
    Assertion,
    ParsedTable,
    BindingCommand,
    InlineBinding,
    Section,
    Document,
    LoadedSpec,
)
from .references import (
    ReferenceKind,
    DocReference,
)
from .promises import (
    PromiseType,
    PromiseConfidence,
    VerificationMethod,
    DebtSeverity,
    PromiseSource,
    DocPromise,
    PromiseFulfillment,
    DocDebt,
    DebtReport,
)
from .execution import (
    AssertionStatus,
    FixtureContext,
    AssertionResult,
    ExecutionResult,
)
from .options import (
    DocRefOptions,
    DebtOptions,
)

__all__ = [
    # common
    "Slug",
    "DocPath",
    "LineRange",
    "last_line",
    # documents
    "TableRow",
    "CodeExample",
    "AssertionType",
    "Assertion",
    "ParsedTable",
    "BindingCommand",
    "InlineBinding",
    "Section",
    "Document",
    "LoadedSpec",
    # references
    "ReferenceKind",
    "DocReference",
    # promises
    "PromiseType",
    "PromiseConfidence",
    "VerificationMethod",
    "DebtSeverity",
    "PromiseSource",
    "DocPromise",
    "PromiseFulfillment",
    "DocDebt",
    "DebtReport",
    # execution
    "AssertionStatus",
    "FixtureContext",
    "AssertionResult",
    "ExecutionResult",
    # options
    "DocRefOptions",
    "DebtOptions",
]
