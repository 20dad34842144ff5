"""
data_model/references.py — referencje z plików testowych/źródłowych do dokumentów.

DocReference to zaobserwowany wskaźnik: plik źródłowy → dokument, opcjonalnie
z numerem linii (lub zakresem) albo kotwicą sekcji. Referencje są deduplikowane
po kluczu (doc_path, line_ref, anchor_ref).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .common import DocPath, LineRange, Slug


class ReferenceKind(StrEnum):
    """Rodzina wzorca, który znalazł referencję (w kolejności pewności)."""
    DOC_MARKER = "doc-marker"   # DOC: docs/api.md
    LINE       = "line"         # api.md:10 / api.md:10-20
    ANCHOR     = "anchor"       # api.md#rate-limits
    BARE       = "bare"         # (api.md)


@dataclass(frozen=True, slots=True)
class DocReference:
    """
    Pojedyncza referencja do dokumentu.

    - test_file:  plik, w którym znaleziono referencję
    - doc_path:   ścieżka dokumentu tak, jak została zapisana
    - raw:        dopasowany fragment tekstu
    - line_ref:   numer linii lub zakres (None gdy brak)
    - anchor_ref: slug sekcji (None gdy brak)
    - kind:       rodzina wzorca, który dał tę referencję
    """
    test_file: str
    doc_path: DocPath
    raw: str
    line_ref: int | LineRange | None = None
    anchor_ref: Slug | None = None
    kind: ReferenceKind = ReferenceKind.BARE

    @property
    def key(self) -> str:
        """Klucz deduplikacji: doc_path|linia|kotwica."""
        line = "" if self.line_ref is None else str(self.line_ref)
        return f"{self.doc_path}|{line}|{self.anchor_ref or ''}"

    @property
    def is_whole_document(self) -> bool:
        return self.line_ref is None and self.anchor_ref is None
