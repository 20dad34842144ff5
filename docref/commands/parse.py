"""Komenda: docref parse — parsowanie dokumentu markdown do sekcji."""

from __future__ import annotations

import argparse
from pathlib import Path

import requests
from rich import box
from rich.markup import escape
from rich.table import Table

from data_model.documents import Document, Section
from docref._output import console, fail, print_json
from md_parser import fetch_markdown, parse_markdown_file


def _load(source: str) -> Document:
    if source.startswith(("http://", "https://")):
        try:
            return fetch_markdown(source)
        except requests.RequestException as exc:
            fail("Błąd pobierania dokumentu:", exc)

    path = Path(source)
    if not path.is_file():
        fail("Plik nie istnieje:", path)
    try:
        return parse_markdown_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        fail("Nie można odczytać pliku:", exc)


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_sections(document: Document) -> None:
    if not document.sections:
        console.print(f"[yellow]Brak sekcji.[/yellow] ({document.line_count} linii)")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("LVL",    justify="right", no_wrap=True, style="dim")
    table.add_column("SLUG",   no_wrap=True, style="bold cyan")
    table.add_column("LINIE",  justify="center", no_wrap=True)
    table.add_column("EX",     justify="right", no_wrap=True)
    table.add_column("AS",     justify="right", no_wrap=True)
    table.add_column("TAB",    justify="right", no_wrap=True)
    table.add_column("BIND",   justify="right", no_wrap=True)
    table.add_column("TYTUŁ",  no_wrap=False, max_width=50)

    for section in document.sections:
        indent = "  " * max(section.level - 1, 0)
        table.add_row(
            str(section.level),
            indent + section.slug,
            f"{section.line}–{section.end_line}",
            str(len(section.examples)),
            str(len(section.assertions)),
            str(len(section.tables)),
            str(len(section.bindings)),
            escape(section.title[:80]),
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(document.sections)} sekcji, {document.line_count} linii[/dim]\n")


def _show_section_detail(section: Section) -> None:
    console.print(f"\n[bold]{escape(section.title)}[/bold]  [dim]#{section.slug}, linia {section.line}[/dim]")
    for example in section.examples:
        tag = f"{example.language}:{example.meta}" if example.meta else example.language
        console.print(f"  [cyan]przykład[/cyan] {tag} (linia {example.line})")
    for assertion in section.assertions:
        console.print(f"  [magenta]{assertion.type}[/magenta] {escape(assertion.keyword)} {escape(assertion.text)}")
    for table in section.tables:
        console.print(f"  [green]tabela[/green] {', '.join(table.headers)} ({len(table.rows)} wierszy)")
    for binding in section.bindings:
        console.print(f"  [yellow]{binding.command}[/yellow] {binding.field} = {binding.value!r}")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    document = _load(args.source)

    section: Section | None = None
    if args.section:
        section = document.get(args.section)
        if section is None:
            fail(f"Brak sekcji #{args.section}. Dostępne:", ", ".join(document.anchors))

    if args.json_output:
        print_json(section if section is not None else document)
        return

    if section is not None:
        _show_section_detail(section)
    else:
        if document.frontmatter:
            console.print(f"[dim]front matter: {', '.join(map(str, document.frontmatter))}[/dim]")
        _show_sections(document)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "parse",
        help="Parsuje dokument markdown (plik lub URL) i pokazuje sekcje.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Parsuje dokument markdown na sekcje i pokazuje wyekstrahowane elementy.

Przykłady:
  docref parse docs/api.md
  docref parse docs/api.md --section rate-limits
  docref parse https://example.com/README.md --json-output
        """,
    )
    p.add_argument(
        "source",
        metavar="ŹRÓDŁO",
        help="Ścieżka do pliku .md albo adres http(s).",
    )
    p.add_argument(
        "--section",
        metavar="SLUG",
        default=None,
        help="Pokaż szczegóły jednej sekcji.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz wynik jako JSON.",
    )
    p.set_defaults(func=run)
