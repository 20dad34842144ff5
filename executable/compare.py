"""
executable/compare.py — tolerancyjne porównanie wartości oczekiwanej z faktyczną.

Wartość oczekiwana pochodzi z bindingu, więc zwykle jest tekstem. Kolejne
próby porównania (pierwsza udana kończy):
  1. dokładna równość
  2. tekst vs tekst po strip()
  3. liczby: z tekstu usuwane są znaki spoza [0-9.-] ("$50.00" → 50.0)
  4. bool: "true" / "false" bez względu na wielkość liter
  5. struktury: tekst parsowany jako JSON, porównanie głębokie
  6. None: "null" / "None"
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def coerce_number(text: str) -> float | None:
    """'$1,234.50' → 1234.5; None gdy po oczyszczeniu nie ma liczby."""
    cleaned = _NON_NUMERIC_RE.sub("", text)
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def _numbers_equal(text: str, number: int | float) -> bool:
    parsed = coerce_number(text)
    return parsed is not None and math.isclose(parsed, number, rel_tol=1e-9, abs_tol=1e-9)


def _normalize(value: Any) -> Any:
    """Krotki → listy, żeby porównanie z JSON-em było symetryczne."""
    if isinstance(value, dict):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def values_equal(expected: Any, actual: Any) -> bool:
    if type(expected) is type(actual) and expected == actual:
        return True

    if isinstance(expected, str) and isinstance(actual, str):
        return expected.strip() == actual.strip()

    if isinstance(expected, str) and isinstance(actual, bool):
        return expected.strip().lower() == str(actual).lower()
    if isinstance(actual, str) and isinstance(expected, bool):
        return actual.strip().lower() == str(expected).lower()

    if isinstance(expected, str) and _is_number(actual):
        return _numbers_equal(expected, actual)
    if isinstance(actual, str) and _is_number(expected):
        return _numbers_equal(actual, expected)
    if _is_number(expected) and _is_number(actual):
        return math.isclose(expected, actual)

    if isinstance(expected, str) and isinstance(actual, (dict, list, tuple)):
        try:
            expected = json.loads(expected)
        except ValueError:
            return False

    if isinstance(expected, (dict, list, tuple)) and isinstance(actual, (dict, list, tuple)):
        return _normalize(expected) == _normalize(actual)

    if actual is None and isinstance(expected, str):
        return expected.strip() in ("null", "None")

    return False
