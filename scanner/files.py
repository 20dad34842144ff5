"""scanner/files.py — wyszukiwanie plików dokumentacji, testów i źródeł."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from data_model.options import DocRefOptions


def find_files(
    root: str | Path,
    patterns: Iterable[str],
    exclude_dirs: Iterable[str] = (),
) -> list[Path]:
    """
    Pliki pasujące do dowolnego z globów (względem root), posortowane.

    Pliki leżące w katalogu o nazwie z exclude_dirs są pomijane.
    """
    root = Path(root)
    if not root.is_dir():
        return []

    excluded = set(exclude_dirs)
    found: set[Path] = set()
    for pattern in patterns:
        for path in root.glob(pattern):
            if not path.is_file():
                continue
            if excluded.intersection(path.relative_to(root).parts[:-1]):
                continue
            found.add(path)
    return sorted(found)


def get_doc_files(
    project_dir: str | Path,
    options: DocRefOptions | None = None,
) -> list[str]:
    """Ścieżki dokumentów względem katalogu docs (format posix)."""
    opts = options or DocRefOptions()
    docs_path = Path(project_dir) / opts.docs_dir
    patterns = [f"**/*{ext}" for ext in opts.doc_extensions]
    return [
        path.relative_to(docs_path).as_posix()
        for path in find_files(docs_path, patterns, opts.exclude_dirs)
    ]


def get_test_files(
    project_dir: str | Path,
    options: DocRefOptions | None = None,
) -> list[Path]:
    """Bezwzględne ścieżki plików testowych projektu."""
    opts = options or DocRefOptions()
    root = Path(project_dir).resolve()
    return find_files(root, opts.test_patterns, opts.exclude_dirs)


def _strip_docs_prefix(path: str, docs_dir: str) -> str:
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    prefix = docs_dir.strip("/") + "/"
    if prefix != "/" and path.startswith(prefix):
        path = path[len(prefix):]
    return path


def doc_paths_match(a: str, b: str, docs_dir: str = "docs") -> bool:
    """
    Porównuje ścieżki dokumentów zapisane różnie:
    "docs/guide/api.md" ≡ "guide/api.md" ≡ "api.md" (dopasowanie sufiksu).
    """
    a = _strip_docs_prefix(a, docs_dir)
    b = _strip_docs_prefix(b, docs_dir)
    return a == b or a.endswith("/" + b) or b.endswith("/" + a)
