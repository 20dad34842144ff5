"""
executable — specyfikacje wykonywalne: bindingi [wartość](!komenda:pole)
odtwarzane względem rejestru fixture'ów.

Interfejs publiczny:
    FixtureRegistry — jawny rejestr nazwa → fixture
    values_equal    — tolerancyjne porównanie oczekiwane / faktyczne
    execute_bindings, run_section, run_spec (async), run_spec_sync
    SpecRunner      — płynne API nad run_spec

Pomocniki pytest (wymagają pakietu pytest): executable.pytest_helpers

Typowe użycie:
    from executable import FixtureRegistry, run_spec_sync

    registry = FixtureRegistry()
    registry.register("pricing", lambda ctx: {"total": ...})

    result = run_spec_sync("docs/pricing.md#examples", registry)
    assert result.failed == 0
"""

from .compare import values_equal
from .registry import Fixture, FixtureRegistry
from .runner import (
    SpecRunner,
    execute_bindings,
    run_section,
    run_spec,
    run_spec_sync,
)

__all__ = [
    "Fixture",
    "FixtureRegistry",
    "values_equal",
    "execute_bindings",
    "run_section",
    "run_spec",
    "run_spec_sync",
    "SpecRunner",
]
