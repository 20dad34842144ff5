"""
data_model/options.py — opcje skanowania, walidacji i wykrywania długu.

Wartości domyślne obejmują projekty Pythona i JS/TS. Warstwa CLI nadpisuje
je zmiennymi środowiskowymi (docref/_config.py); funkcje rdzenia dostają
opcje wyłącznie jawnie.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_DOCS_DIR = "docs"

DEFAULT_TEST_PATTERNS: tuple[str, ...] = (
    "**/test_*.py",
    "**/*_test.py",
    "**/*.test.ts",
    "**/*.test.js",
    "**/*.spec.ts",
    "**/*.spec.js",
)

DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    ".git",
    "node_modules",
    "dist",
    "build",
    ".venv",
    "venv",
    "__pycache__",
    ".tox",
    ".pytest_cache",
)

DEFAULT_ENTRY_POINTS: tuple[str, ...] = (
    "__init__.py",
    "src/__init__.py",
    "*/__init__.py",
    "src/*/__init__.py",
    "index.ts",
    "src/index.ts",
)

DEFAULT_SRC_PATTERNS: tuple[str, ...] = (
    "**/*.py",
    "src/**/*.ts",
    "src/**/*.tsx",
    "src/**/*.js",
)


@dataclass(slots=True)
class DocRefOptions:
    """
    Opcje skanera referencji i walidatora.

    - docs_dir:         katalog dokumentacji względem projektu
    - doc_extensions:   rozszerzenia plików uznawanych za dokumenty
    - test_patterns:    globy plików testowych (względem projektu)
    - exclude_dirs:     nazwy katalogów pomijanych przy przeszukiwaniu
    - validate_lines:   czy sprawdzać numery linii
    - validate_anchors: czy sprawdzać kotwice
    """
    docs_dir: str = DEFAULT_DOCS_DIR
    doc_extensions: tuple[str, ...] = (".md",)
    test_patterns: tuple[str, ...] = DEFAULT_TEST_PATTERNS
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    validate_lines: bool = True
    validate_anchors: bool = True


@dataclass(slots=True)
class DebtOptions:
    """
    Opcje wykrywania długu dokumentacyjnego.

    - entry_points:     pliki definiujące publiczny interfejs pakietu
                        (wpisy z "*" są globami)
    - src_patterns:     globy plików źródłowych
    - include_inferred: czy liczyć obietnice heurystyczne (feature)
    - exclude_dirs:     nazwy katalogów pomijanych przy przeszukiwaniu
    """
    entry_points: tuple[str, ...] = DEFAULT_ENTRY_POINTS
    src_patterns: tuple[str, ...] = DEFAULT_SRC_PATTERNS
    include_inferred: bool = False
    exclude_dirs: tuple[str, ...] = field(default=DEFAULT_EXCLUDE_DIRS)
