"""
scanner/references.py — wyszukiwanie referencji do dokumentów w tekście.

  scan_text(text, test_file)           -> list[DocReference]
  scan_test_file(path)                 -> list[DocReference]
  scan_doc_references(project, opts)   -> list[DocReference]

Wszystkie rodziny wzorców są stosowane do całego tekstu; wynik jest
deduplikowany po DocReference.key i uporządkowany wg pozycji w pliku.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from data_model.common import LineRange
from data_model.options import DocRefOptions
from data_model.references import DocReference, ReferenceKind

from .files import get_test_files
from .patterns import PATTERNS

logger = logging.getLogger(__name__)


def _build_reference(
    m: re.Match[str],
    kind: ReferenceKind,
    test_file: str,
) -> DocReference:
    groups = m.groupdict()
    line_ref: int | LineRange | None = None
    if groups.get("start"):
        start = int(groups["start"])
        line_ref = LineRange(start, int(groups["end"])) if groups.get("end") else start

    return DocReference(
        test_file=test_file,
        doc_path=groups["path"],
        raw=m.group(0),
        line_ref=line_ref,
        anchor_ref=groups.get("anchor") or None,
        kind=kind,
    )


def parse_doc_reference(raw: str, test_file: str = "") -> DocReference | None:
    """Pierwsza referencja w tekście wg priorytetu wzorców albo None."""
    for pattern in PATTERNS:
        m = pattern.regex.search(raw)
        if m:
            return _build_reference(m, pattern.kind, test_file)
    return None


def scan_text(text: str, test_file: str = "") -> list[DocReference]:
    """
    Zwraca unikalne referencje z tekstu.

    Dwie wzmianki tego samego dokumentu i sekcji dają jedną referencję;
    różne numery linii w tym samym dokumencie pozostają osobne.
    """
    found: dict[str, tuple[int, DocReference]] = {}
    for pattern in PATTERNS:
        for m in pattern.regex.finditer(text):
            ref = _build_reference(m, pattern.kind, test_file)
            if ref.key not in found:
                found[ref.key] = (m.start(), ref)

    return [ref for _, ref in sorted(found.values(), key=lambda item: item[0])]


def scan_test_file(path: str | Path) -> list[DocReference]:
    """Skanuje jeden plik; nieczytelny plik jest logowany i pomijany."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Pominięto plik %s: %s", path, exc)
        return []
    return scan_text(text, str(path))


def scan_doc_references(
    project_dir: str | Path,
    options: DocRefOptions | None = None,
) -> list[DocReference]:
    """Referencje ze wszystkich plików testowych projektu."""
    refs: list[DocReference] = []
    test_files = get_test_files(project_dir, options)
    for test_file in test_files:
        refs.extend(scan_test_file(test_file))
    logger.debug("Znaleziono %d referencji w %d plikach testowych", len(refs), len(test_files))
    return refs
