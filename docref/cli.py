"""
docref — narzędzie CLI dla dokumentacji jako testów.

Użycie:
  docref [--verbose] <komenda> [opcje]

Komendy:
  parse   Parsuje dokument markdown (plik lub URL) i pokazuje sekcje.
  check   Waliduje referencje z testów do dokumentacji i liczy pokrycie.
  debt    Wykrywa dług dokumentacyjny (obietnice bez pokrycia w kodzie).
  run     Wykonuje specyfikację wykonywalną względem fixture'ów.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, więc wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from docref import _config
from docref.commands import parse as cmd_parse
from docref.commands import check as cmd_check
from docref.commands import debt as cmd_debt
from docref.commands import run as cmd_run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docref",
        description="docref — dokumentacja jako testy.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="docref 0.1.0"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Włącz logowanie diagnostyczne (DEBUG).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_parse.add_parser(subparsers)
    cmd_check.add_parser(subparsers)
    cmd_debt.add_parser(subparsers)
    cmd_run.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _config.load_environment()
    _config.configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
