"""docref/_output.py — wspólne wyjście komend (JSON i komunikaty błędów)."""

from __future__ import annotations

import dataclasses
import json
from typing import Any, NoReturn

from rich.console import Console
from rich.markup import escape

console = Console()


def _to_plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_plain(v) for v in value]
    return value


def print_json(value: Any) -> None:
    """Wypisuje dataclass / listę / słownik jako JSON (bez formatowania rich)."""
    print(json.dumps(_to_plain(value), ensure_ascii=False, indent=2, default=str))


def fail(message: str, detail: object = "") -> NoReturn:
    console.print(f"[red]{message}[/red] {escape(str(detail))}".rstrip())
    raise SystemExit(1)
