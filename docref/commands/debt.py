"""Komenda: docref debt — wykrywanie długu dokumentacyjnego."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich import box
from rich.markup import escape
from rich.table import Table

from data_model.promises import DebtReport, DebtSeverity
from docref import _config
from docref._output import console, fail, print_json
from promises import calculate_debt

_SEVERITY_STYLE: dict[DebtSeverity, str] = {
    DebtSeverity.CRITICAL: "bold red",
    DebtSeverity.WARNING:  "yellow",
    DebtSeverity.INFO:     "dim",
}


def _show_report(report: DebtReport) -> None:
    console.print(
        f"\nObietnice: [bold]{report.total_promises}[/bold]  "
        f"[green]spełnione {report.fulfilled_count}[/green]  "
        f"[red]dług {report.debt_count}[/red]  "
        f"({report.fulfillment_rate:.1f}%)"
    )
    if not report.debts:
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        expand=False,
    )
    table.add_column("PRIORYTET", no_wrap=True)
    table.add_column("TYP",       no_wrap=True, style="dim")
    table.add_column("OBIETNICA", no_wrap=False, max_width=40, style="bold cyan")
    table.add_column("ŹRÓDŁO",    no_wrap=True)
    table.add_column("SUGESTIA",  no_wrap=False, max_width=50)

    for severity in DebtSeverity:
        for debt in report.by_severity(severity):
            source = debt.promise.source
            table.add_row(
                f"[{_SEVERITY_STYLE[severity]}]{severity}[/]",
                str(debt.promise.type),
                escape(debt.promise.identifier),
                f"{source.file}#{source.section}",
                escape(debt.suggestion),
            )

    console.print(table)


def run(args: argparse.Namespace) -> None:
    project = Path(args.project)
    if not project.is_dir():
        fail("Katalog projektu nie istnieje:", project)

    report = calculate_debt(
        project,
        _config.doc_options(args.docs_dir),
        _config.debt_options(include_inferred=args.include_inferred),
    )

    if args.json_output:
        print_json(report)
    else:
        _show_report(report)

    if args.fail_on_critical and report.by_severity(DebtSeverity.CRITICAL):
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "debt",
        help="Wykrywa obietnice dokumentacji bez pokrycia w kodzie.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyciąga obietnice z dokumentacji (funkcje, endpointy, wymagania,
funkcjonalności) i sprawdza je względem eksportów, definicji i testów.

Przykłady:
  docref debt
  docref debt --include-inferred
  docref debt ../projekt --fail-on-critical --json-output
        """,
    )
    p.add_argument(
        "project",
        metavar="KATALOG",
        nargs="?",
        default=".",
        help="Katalog projektu (domyślnie: bieżący).",
    )
    p.add_argument(
        "--docs-dir",
        metavar="DIR",
        default=None,
        help="Katalog dokumentacji względem projektu (domyślnie: docs).",
    )
    p.add_argument(
        "--include-inferred",
        action="store_true",
        help="Uwzględnij obietnice heurystyczne (feature).",
    )
    p.add_argument(
        "--fail-on-critical",
        action="store_true",
        help="Kod wyjścia 1 gdy istnieje dług o priorytecie critical.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport jako JSON.",
    )
    p.set_defaults(func=run)
