"""md_parser/literals.py — parsowanie literałów z komórek tabel i przykładów."""

from __future__ import annotations

import json
from typing import Any


def _reject_constant(name: str) -> Any:
    # NaN / Infinity zostają tekstem
    raise ValueError(name)


def parse_literal(text: str) -> Any:
    """
    Parsuje wartość jako literał JSON (liczba, bool, null, lista, obiekt);
    w razie niepowodzenia zwraca tekst po strip().

        parse_literal("1")       -> 1
        parse_literal("[1, 2]")  -> [1, 2]
        parse_literal("Alice")   -> "Alice"
    """
    value = text.strip()
    if not value:
        return value
    try:
        return json.loads(value, parse_constant=_reject_constant)
    except ValueError:
        return value
