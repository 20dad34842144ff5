"""
executable/runner.py — silnik specyfikacji wykonywalnych.

Architektura:
  load_spec(ścieżka#kotwica) → sekcje
  → run_section(): bindingi sekcji (poza tabelami) jako jedna sekwencja
                   + każdy wiersz tabeli jako osobna, izolowana sekwencja
  → execute_bindings(): set / execute / verify ściśle po kolei
  → ExecutionResult (passed / failed / skipped)

Kolejność bindingów w sekcji jest istotna: fixture asynchroniczny jest
oczekiwany przed przejściem do następnego bindingu. Wyjątki fixture'ów są
zapisywane jako wyniki failed, brakujące fixture'y jako skipped.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from data_model.documents import BindingCommand, InlineBinding, LoadedSpec, Section
from data_model.execution import (
    AssertionResult,
    AssertionStatus,
    ExecutionResult,
    FixtureContext,
)
from md_parser import load_spec, parse_inline_bindings

from .compare import values_equal
from .registry import Fixture, FixtureRegistry

logger = logging.getLogger(__name__)

# Brak wyjścia z fixture'a (żadnego execute albo fixture zwrócił None)
_NO_OUTPUT = object()
# Wyjście istnieje, ale nie ma w nim pola
_MISSING = object()

_DIRECT_TYPES = (str, bytes, int, float, bool, list, tuple)


# ---------------------------------------------------------------------------
# Wykonanie sekwencji bindingów
# ---------------------------------------------------------------------------

async def _invoke(fixture: Fixture, inputs: dict[str, Any], spec: LoadedSpec | None) -> Any:
    """Wywołuje fixture z kopią wejść; wynik awaitable jest oczekiwany."""
    result = fixture(FixtureContext(inputs=dict(inputs), spec=spec))
    if inspect.isawaitable(result):
        result = await result
    return result


def _error_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _select_actual(output: Any, field: str) -> Any:
    if output is _NO_OUTPUT:
        return _NO_OUTPUT
    if isinstance(output, Mapping):
        return output.get(field, _MISSING)
    if isinstance(output, _DIRECT_TYPES):
        return output
    return getattr(output, field, _MISSING)


async def _verify(
    binding: InlineBinding,
    inputs: dict[str, Any],
    last_output: Any,
    registry: FixtureRegistry,
    spec: LoadedSpec | None,
) -> AssertionResult:
    expected = binding.value
    actual = _select_actual(last_output, binding.field)

    if actual is _NO_OUTPUT or actual is _MISSING:
        fixture = registry.get(binding.field)
        if fixture is not None:
            try:
                actual = await _invoke(fixture, inputs, spec)
            except Exception as exc:
                logger.info("Fixture %r zgłosił wyjątek: %s", binding.field, exc)
                return AssertionResult(
                    binding, AssertionStatus.FAILED,
                    expected=expected, error=_error_message(exc),
                )
        elif actual is _NO_OUTPUT:
            logger.debug("Brak fixture'a %r, pominięto verify", binding.field)
            return AssertionResult(
                binding, AssertionStatus.SKIPPED,
                expected=expected, error=f"Fixture not found: {binding.field}",
            )
        else:
            return AssertionResult(
                binding, AssertionStatus.FAILED,
                expected=expected,
                error=f'Field "{binding.field}" missing from fixture output',
            )

    if values_equal(expected, actual):
        return AssertionResult(binding, AssertionStatus.PASSED, expected=expected, actual=actual)
    return AssertionResult(
        binding, AssertionStatus.FAILED,
        expected=expected, actual=actual,
        error=f'Expected "{expected}" but got "{actual}"',
    )


async def execute_bindings(
    bindings: list[InlineBinding],
    registry: FixtureRegistry,
    spec: LoadedSpec | None = None,
) -> list[AssertionResult]:
    """
    Odtwarza bindingi jednej sekwencji (sekcji albo wiersza tabeli).

    set     — zapisuje literał w akumulatorze wejść (późniejszy set nadpisuje)
    execute — wywołuje fixture o nazwie pola, wynik staje się "ostatnim wyjściem"
    verify  — porównuje literał z polem ostatniego wyjścia (albo z wynikiem
              fixture'a o nazwie pola, gdy brak wyjścia)
    """
    results: list[AssertionResult] = []
    inputs: dict[str, Any] = {}
    last_output: Any = _NO_OUTPUT

    for binding in bindings:
        match binding.command:
            case BindingCommand.SET:
                inputs[binding.field] = binding.value

            case BindingCommand.EXECUTE:
                fixture = registry.get(binding.field)
                if fixture is None:
                    logger.debug("Brak fixture'a %r, pominięto execute", binding.field)
                    results.append(AssertionResult(
                        binding, AssertionStatus.SKIPPED,
                        error=f"Fixture not found: {binding.field}",
                    ))
                    continue
                try:
                    output = await _invoke(fixture, inputs, spec)
                except Exception as exc:
                    logger.info("Fixture %r zgłosił wyjątek: %s", binding.field, exc)
                    results.append(AssertionResult(
                        binding, AssertionStatus.FAILED, error=_error_message(exc),
                    ))
                    last_output = _NO_OUTPUT
                    continue
                last_output = _NO_OUTPUT if output is None else output

            case BindingCommand.VERIFY:
                results.append(await _verify(binding, inputs, last_output, registry, spec))

    return results


# ---------------------------------------------------------------------------
# Sekcje i specyfikacje
# ---------------------------------------------------------------------------

async def run_section(
    section: Section,
    registry: FixtureRegistry,
    spec: LoadedSpec | None = None,
) -> list[AssertionResult]:
    """Bindingi prozy sekcji, potem każdy wiersz każdej tabeli osobno."""
    def in_table(binding: InlineBinding) -> bool:
        return any(t.line <= binding.line <= t.end_line for t in section.tables)

    results = await execute_bindings(
        [b for b in section.bindings if not in_table(b)], registry, spec,
    )

    for table in section.tables:
        for cells in table.cells:
            row_bindings = parse_inline_bindings(" | ".join(cells))
            if row_bindings:
                results.extend(await execute_bindings(row_bindings, registry, spec))

    return results


async def run_spec(
    spec_path: str,
    registry: FixtureRegistry,
    base_path: str | Path | None = None,
    throw_on_missing: bool = True,
) -> ExecutionResult:
    """
    Wykonuje specyfikację "docs/plik.md#kotwica" względem rejestru.

    Bez kotwicy wykonywane są wszystkie sekcje; duration w milisekundach.
    """
    started = time.perf_counter()
    spec = load_spec(spec_path, base_path=base_path, throw_on_missing=throw_on_missing)

    results: list[AssertionResult] = []
    for section in spec.sections:
        results.extend(await run_section(section, registry, spec))

    duration = (time.perf_counter() - started) * 1000
    result = ExecutionResult.from_results(spec_path, results, duration)
    logger.debug(
        "%s: %d passed, %d failed, %d skipped (%.1f ms)",
        spec_path, result.passed, result.failed, result.skipped, duration,
    )
    return result


def run_spec_sync(
    spec_path: str,
    registry: FixtureRegistry,
    base_path: str | Path | None = None,
    throw_on_missing: bool = True,
) -> ExecutionResult:
    """Synchroniczna otoczka run_spec (nie wolno wywoływać wewnątrz pętli zdarzeń)."""
    return asyncio.run(run_spec(spec_path, registry, base_path, throw_on_missing))


# ---------------------------------------------------------------------------
# SpecRunner: płynne API
# ---------------------------------------------------------------------------

class SpecRunner:
    """
    Użycie:
        result = await (
            SpecRunner()
            .fixture("pricing", pricing)
            .base_path("docs")
            .run("pricing.md#examples")
        )
    """

    def __init__(
        self,
        registry: FixtureRegistry | None = None,
        base_path: str | Path | None = None,
        throw_on_missing: bool = True,
    ) -> None:
        self._registry         = registry if registry is not None else FixtureRegistry()
        self._base_path        = base_path
        self._throw_on_missing = throw_on_missing

    @property
    def registry(self) -> FixtureRegistry:
        return self._registry

    def fixture(self, name: str, fn: Fixture) -> "SpecRunner":
        self._registry.register(name, fn)
        return self

    def base_path(self, path: str | Path) -> "SpecRunner":
        self._base_path = path
        return self

    def throw_on_missing(self, value: bool) -> "SpecRunner":
        self._throw_on_missing = value
        return self

    async def run(self, spec_path: str) -> ExecutionResult:
        return await run_spec(
            spec_path, self._registry, self._base_path, self._throw_on_missing,
        )

    async def run_all(self, spec_paths: list[str]) -> list[ExecutionResult]:
        """Specyfikacje są niezależne, więc mogą biec współbieżnie."""
        return list(await asyncio.gather(*(self.run(p) for p in spec_paths)))
