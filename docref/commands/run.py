"""Komenda: docref run — wykonanie specyfikacji wykonywalnej."""

from __future__ import annotations

import argparse
import importlib
import os
import sys
from collections.abc import Mapping

from rich import box
from rich.markup import escape
from rich.table import Table

from data_model.execution import AssertionStatus, ExecutionResult
from docref import _config
from docref._output import console, fail, print_json
from executable import FixtureRegistry, run_spec_sync

_STATUS_STYLE: dict[AssertionStatus, str] = {
    AssertionStatus.PASSED:  "green",
    AssertionStatus.FAILED:  "bold red",
    AssertionStatus.SKIPPED: "yellow",
}


def load_fixtures(specs: list[str]) -> FixtureRegistry:
    """
    Buduje rejestr z "moduł:atrybut".

    Atrybut może być FixtureRegistry albo mapowaniem nazwa → funkcja.
    """
    registry = FixtureRegistry()
    # Moduły fixture'ów projektu są importowane względem bieżącego katalogu
    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())
    for spec in specs:
        module_name, sep, attr = spec.partition(":")
        if not sep or not module_name or not attr:
            fail("Oczekiwano formatu moduł:atrybut, otrzymano:", spec)
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            fail("Nie można zaimportować modułu fixture'ów:", exc)
        source = getattr(module, attr, None)

        if isinstance(source, FixtureRegistry):
            for name in source.names():
                registry.register(name, source.get(name))
        elif isinstance(source, Mapping):
            for name, fn in source.items():
                registry.register(str(name), fn)
        else:
            fail(f"{spec} nie jest FixtureRegistry ani słownikiem fixture'ów.")
    return registry


def _show_result(result: ExecutionResult, verbose: bool) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        expand=False,
    )
    table.add_column("STATUS",   no_wrap=True)
    table.add_column("LINIA",    justify="right", no_wrap=True, style="dim")
    table.add_column("BINDING",  no_wrap=True, style="bold cyan")
    table.add_column("OCZEKIWANO", no_wrap=False, max_width=30)
    table.add_column("OTRZYMANO",  no_wrap=False, max_width=30)
    table.add_column("BŁĄD",     no_wrap=False, max_width=50)

    for r in result.results:
        if r.passed and not verbose:
            continue
        table.add_row(
            f"[{_STATUS_STYLE[r.status]}]{r.status}[/]",
            str(r.binding.line),
            escape(r.binding.raw),
            escape("" if r.expected is None else str(r.expected)),
            escape("" if r.actual is None else str(r.actual)),
            escape(r.error or ""),
        )

    if table.row_count:
        console.print(table)
    console.print(
        f"{result.spec_path}: [green]{result.passed} passed[/green]  "
        f"[red]{result.failed} failed[/red]  "
        f"[yellow]{result.skipped} skipped[/yellow]  "
        f"[dim]({result.duration:.0f} ms)[/dim]"
    )


def run(args: argparse.Namespace) -> None:
    registry = load_fixtures(args.fixtures)

    try:
        result = run_spec_sync(
            args.spec,
            registry,
            base_path=_config.docs_root(args.base_path),
            throw_on_missing=not args.no_strict,
        )
    except FileNotFoundError as exc:
        fail("Brak specyfikacji:", exc)
    except KeyError as exc:
        fail("Brak sekcji:", exc.args[0] if exc.args else exc)

    if args.json_output:
        print_json(result)
    else:
        _show_result(result, args.verbose)

    if not result.ok:
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "run",
        help="Wykonuje specyfikację wykonywalną względem fixture'ów.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Odtwarza bindingi [wartość](!komenda:pole) z dokumentu względem fixture'ów
wczytanych z modułów Pythona. Brakujące fixture'y dają wynik skipped.

Przykłady:
  docref run docs/pricing.md#examples --fixtures tests.fixtures:registry
  docref run pricing.md --base-path docs --fixtures app.spec:FIXTURES
        """,
    )
    p.add_argument(
        "spec",
        metavar="SPEC",
        help="Ścieżka specyfikacji, opcjonalnie z kotwicą sekcji.",
    )
    p.add_argument(
        "--fixtures",
        metavar="MODUŁ:ATRYBUT",
        action="append",
        default=[],
        help="Źródło fixture'ów (można powtarzać).",
    )
    p.add_argument(
        "--base-path",
        metavar="DIR",
        default=None,
        help="Katalog bazowy specyfikacji (domyślnie: DOCS_ROOT albo bieżący).",
    )
    p.add_argument(
        "--no-strict",
        action="store_true",
        help="Brak pliku / kotwicy nie jest błędem (pusty wynik).",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz wynik jako JSON.",
    )
    p.set_defaults(func=run)
