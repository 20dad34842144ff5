"""
executable/registry.py — rejestr fixture'ów specyfikacji wykonywalnych.

Rejestr to jawny kontener nazwa → funkcja, przekazywany do silnika przy
każdym uruchomieniu (brak globalnego stanu). Wyszukiwanie rozróżnia wielkość
liter i nigdy nie tworzy fixture'ów automatycznie.

Fixture: (FixtureContext) -> wartość | awaitable[wartość]
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterator, TypeAlias

from data_model.execution import FixtureContext

Fixture: TypeAlias = Callable[[FixtureContext], Any | Awaitable[Any]]


class FixtureRegistry:
    """
    Użycie:
        registry = FixtureRegistry()

        @registry.fixture("pricing")
        def pricing(ctx):
            qty = int(ctx.inputs["qty"])
            return {"total": qty * 10}

        registry.register("tax", lambda ctx: {"rate": "23%"})
    """

    def __init__(self, fixtures: dict[str, Fixture] | None = None) -> None:
        self._fixtures: dict[str, Fixture] = dict(fixtures or {})

    def register(self, name: str, fn: Fixture) -> None:
        """Rejestruje fixture; ponowna rejestracja nazwy nadpisuje poprzednią."""
        self._fixtures[name] = fn

    def fixture(self, name: str | None = None) -> Callable[[Fixture], Fixture]:
        """Dekorator; domyślna nazwa = nazwa funkcji."""
        def decorator(fn: Fixture) -> Fixture:
            self.register(name or fn.__name__, fn)
            return fn
        return decorator

    def get(self, name: str) -> Fixture | None:
        return self._fixtures.get(name)

    def has(self, name: str) -> bool:
        return name in self._fixtures

    def names(self) -> list[str]:
        return list(self._fixtures)

    def __contains__(self, name: object) -> bool:
        return name in self._fixtures

    def __len__(self) -> int:
        return len(self._fixtures)

    def __iter__(self) -> Iterator[str]:
        return iter(self._fixtures)
