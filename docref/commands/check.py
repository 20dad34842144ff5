"""Komenda: docref check — walidacja referencji z testów do dokumentacji."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich import box
from rich.markup import escape
from rich.table import Table

from docref import _config
from docref._output import console, fail, print_json
from validator import ValidationReport, generate_report


def _show_invalid(report: ValidationReport) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        expand=False,
    )
    table.add_column("KOD",      no_wrap=True, style="red")
    table.add_column("TEST",     no_wrap=True, style="dim")
    table.add_column("REFERENCJA", no_wrap=True, style="bold cyan")
    table.add_column("BŁĄD",     no_wrap=False, max_width=70)

    for result in report.invalid:
        table.add_row(
            str(result.code or "-"),
            Path(result.reference.test_file).name,
            escape(result.reference.raw),
            escape(result.error or ""),
        )
    console.print(table)


def _show_coverage(report: ValidationReport) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("DOKUMENT", no_wrap=True, style="bold cyan")
    table.add_column("REF",      justify="right", no_wrap=True)
    table.add_column("TESTY",    justify="right", no_wrap=True)

    for cov in report.coverage:
        style = "yellow" if cov.ref_count == 0 else ""
        table.add_row(cov.doc_path, str(cov.ref_count), str(len(cov.referenced_by)), style=style)
    console.print(table)


def _show_report(report: ValidationReport) -> None:
    console.print(
        f"\nReferencje: [bold]{report.total_refs}[/bold]  "
        f"[green]poprawne {report.valid_refs}[/green]  "
        f"[red]błędne {report.invalid_refs}[/red]"
    )
    if report.invalid_refs:
        _show_invalid(report)
    if report.coverage:
        _show_coverage(report)
    if report.orphaned_docs:
        console.print(f"[yellow]Dokumenty bez testów:[/yellow] {', '.join(report.orphaned_docs)}")
    if report.tests_without_refs:
        console.print(f"[dim]Testy bez referencji: {len(report.tests_without_refs)}[/dim]")
    if report.debt is not None:
        console.print(
            f"Dług: {report.debt.debt_count} / {report.debt.total_promises} obietnic "
            f"(spełnienie {report.debt.fulfillment_rate:.1f}%)"
        )


def run(args: argparse.Namespace) -> None:
    project = Path(args.project)
    if not project.is_dir():
        fail("Katalog projektu nie istnieje:", project)

    report = generate_report(
        project,
        _config.doc_options(args.docs_dir),
        include_debt=args.debt,
        debt_options=_config.debt_options(),
    )

    if args.json_output:
        print_json(report)
    else:
        _show_report(report)
        if report.is_valid:
            console.print("[green]OK[/green]  Wszystkie referencje są poprawne.")

    if not report.is_valid:
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "check",
        help="Waliduje referencje z testów do dokumentacji.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Skanuje pliki testowe, sprawdza każdą referencję do dokumentacji
(plik, linia, kotwica) i liczy pokrycie dokumentów testami.
Kod wyjścia 1 oznacza co najmniej jedną błędną referencję.

Przykłady:
  docref check
  docref check ../projekt --docs-dir documentation
  docref check --debt --json-output
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
        "--debt",
        action="store_true",
        help="Dołącz raport długu dokumentacyjnego.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport jako JSON.",
    )
    p.set_defaults(func=run)
