"""
scanner/patterns.py — wzorce referencji do dokumentów w plikach testowych.

Każdy ReferencePattern zawiera:
  - kind  : rodzina wzorca (ReferenceKind)
  - regex : skompilowany wzorzec z grupami nazwanymi
            path / start / end / anchor (brakujące grupy = None)

Wzorce są testowane w kolejności pewności; przy kolizji klucza referencji
wygrywa wcześniejszy wzorzec.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from data_model.references import ReferenceKind

# Ścieżka dokumentu: "api.md", "docs/guide/api.md", "../docs/api.md".
# Lookbehind odrzuca fragmenty URL-i i dłuższych ścieżek ("https://x/a.md").
_PATH = r"(?<![\w./-])(?P<path>(?:[\w.-]+/)*[\w-][\w.-]*\.md)(?!\w)"

_LINES  = r":(?P<start>\d+)(?:-(?P<end>\d+))?\b"
_ANCHOR = r"#(?P<anchor>[\w-]+)"


@dataclass(frozen=True, slots=True)
class ReferencePattern:
    kind: ReferenceKind
    regex: re.Pattern[str]


PATTERNS: list[ReferencePattern] = [
    # -------------------------------------------------------------------------
    # 1. Znacznik "DOC: docs/api.md" (opcjonalnie z #kotwicą lub :linią)
    # -------------------------------------------------------------------------
    ReferencePattern(
        kind=ReferenceKind.DOC_MARKER,
        regex=re.compile(rf"\bDOC:[ \t]*{_PATH}(?:{_ANCHOR}|{_LINES})?"),
    ),

    # -------------------------------------------------------------------------
    # 2. Referencja liniowa: api.md:10, "docs/api.md:10-20"
    # -------------------------------------------------------------------------
    ReferencePattern(
        kind=ReferenceKind.LINE,
        regex=re.compile(rf"{_PATH}{_LINES}"),
    ),

    # -------------------------------------------------------------------------
    # 3. Referencja do kotwicy: docs/explainer.md#how-it-works
    # -------------------------------------------------------------------------
    ReferencePattern(
        kind=ReferenceKind.ANCHOR,
        regex=re.compile(rf"{_PATH}{_ANCHOR}"),
    ),

    # -------------------------------------------------------------------------
    # 4. Goła referencja w nawiasach: (docs/api.md)
    # -------------------------------------------------------------------------
    ReferencePattern(
        kind=ReferenceKind.BARE,
        regex=re.compile(rf"\({_PATH}\)"),
    ),
]
