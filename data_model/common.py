"""
Wspólne typy pierwotne używane przez documents, references i promises.

  Slug       — identyfikator sekcji (kotwica URL), np. "how-it-works"
  DocPath    — ścieżka dokumentu względna do katalogu docs lub projektu
  LineRange  — zakres linii "N-M" z referencji do dokumentu
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Wzorzec: ^[\w-]+$  np. "rate-limits"
Slug: TypeAlias = str

# np. "docs/public/reference/api.md" lub "api.md"
DocPath: TypeAlias = str


# ---------------------------------------------------------------------------
# LineRange
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LineRange:
    """
    Zakres linii dokumentu (1-based, obustronnie domknięty).

    - start: pierwsza linia zakresu
    - end:   ostatnia linia zakresu (to ona jest sprawdzana przez walidator)
    """
    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"

    def __contains__(self, line: object) -> bool:
        return isinstance(line, int) and self.start <= line <= self.end


def last_line(line_ref: int | LineRange) -> int:
    """Zwraca linię decydującą o poprawności referencji (koniec zakresu)."""
    return line_ref.end if isinstance(line_ref, LineRange) else line_ref
