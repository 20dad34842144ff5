"""
docref/_config.py — konfiguracja CLI ze zmiennych środowiskowych.

Zmienne środowiskowe (listy rozdzielane przecinkami):
  DOCREF_DOCS_DIR       katalog dokumentacji (domyślnie "docs")
  DOCREF_TEST_PATTERNS  globy plików testowych
  DOCREF_SRC_PATTERNS   globy plików źródłowych
  DOCREF_ENTRY_POINTS   pliki wejściowe pakietu (export surface)
  DOCS_ROOT             katalog bazowy dla `docref run`

Opcjonalnie plik .env w bieżącym katalogu:
  DOCREF_DOCS_DIR=documentation
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from data_model.options import DebtOptions, DocRefOptions

_ENV_DOCS_DIR      = "DOCREF_DOCS_DIR"
_ENV_TEST_PATTERNS = "DOCREF_TEST_PATTERNS"
_ENV_SRC_PATTERNS  = "DOCREF_SRC_PATTERNS"
_ENV_ENTRY_POINTS  = "DOCREF_ENTRY_POINTS"
_ENV_DOCS_ROOT     = "DOCS_ROOT"

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def load_environment(env_file: Path | None = None) -> None:
    """Wczytuje .env; zmienne już ustawione w środowisku mają pierwszeństwo."""
    load_dotenv(env_file or Path.cwd() / ".env", override=False)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
    )


def _env_list(name: str) -> tuple[str, ...] | None:
    raw = os.environ.get(name, "")
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or None


def doc_options(docs_dir: str | None = None) -> DocRefOptions:
    """DocRefOptions: argument CLI > zmienna środowiskowa > wartość domyślna."""
    opts = DocRefOptions()
    opts.docs_dir = docs_dir or os.environ.get(_ENV_DOCS_DIR) or opts.docs_dir
    opts.test_patterns = _env_list(_ENV_TEST_PATTERNS) or opts.test_patterns
    return opts


def debt_options(include_inferred: bool = False) -> DebtOptions:
    opts = DebtOptions(include_inferred=include_inferred)
    opts.src_patterns = _env_list(_ENV_SRC_PATTERNS) or opts.src_patterns
    opts.entry_points = _env_list(_ENV_ENTRY_POINTS) or opts.entry_points
    return opts


def docs_root(base_path: str | None = None) -> str | None:
    return base_path or os.environ.get(_ENV_DOCS_ROOT)
