"""
data_model/execution.py — wyniki wykonania specyfikacji wykonywalnych.

FixtureContext  — migawka wejść przekazywana do fixture'a
AssertionResult — wynik pojedynczego bindingu (verify / execute)
ExecutionResult — liczniki passed / failed / skipped + lista wyników
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .documents import InlineBinding, LoadedSpec


class AssertionStatus(StrEnum):
    """skipped = brak fixture'a; nigdy nie jest liczony jako failed."""
    PASSED  = "passed"
    FAILED  = "failed"
    SKIPPED = "skipped"


@dataclass(slots=True)
class FixtureContext:
    """
    Kontekst wywołania fixture'a.

    - inputs: kopia wartości zebranych przez bindingi `set`
    - spec:   wczytana specyfikacja (None przy uruchomieniu samych bindingów)
    """
    inputs: dict[str, Any] = field(default_factory=dict)
    spec: LoadedSpec | None = None


@dataclass(slots=True)
class AssertionResult:
    binding: InlineBinding
    status: AssertionStatus
    expected: Any = None
    actual: Any = None
    error: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == AssertionStatus.PASSED


@dataclass(slots=True)
class ExecutionResult:
    """
    Zagregowany wynik uruchomienia specyfikacji.

    - spec_path: ścieżka specyfikacji (z #kotwicą jeśli podana)
    - duration:  czas wykonania w milisekundach
    """
    spec_path: str
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    results: list[AssertionResult] = field(default_factory=list)
    duration: float = 0.0

    @classmethod
    def from_results(
        cls,
        spec_path: str,
        results: list[AssertionResult],
        duration: float = 0.0,
    ) -> "ExecutionResult":
        return cls(
            spec_path=spec_path,
            passed=sum(1 for r in results if r.status == AssertionStatus.PASSED),
            failed=sum(1 for r in results if r.status == AssertionStatus.FAILED),
            skipped=sum(1 for r in results if r.status == AssertionStatus.SKIPPED),
            results=results,
            duration=duration,
        )

    @property
    def ok(self) -> bool:
        return self.failed == 0
