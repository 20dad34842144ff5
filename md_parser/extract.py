"""
md_parser/extract.py — ekstrakcja elementów sprawdzalnych z treści sekcji.

Cztery niezależne, bezstanowe funkcje (każda dostaje surowy tekst sekcji):
  extract_code_examples(content) -> list[CodeExample]
  extract_assertions(content)    -> list[Assertion]
  extract_tables(content)        -> list[ParsedTable]
  parse_inline_bindings(content) -> list[InlineBinding]

Numery linii są 1-based względem przekazanego tekstu. Linie wewnątrz bloków
kodu są pomijane przez asercje, tabele i bindingi.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from data_model.documents import (
    Assertion,
    AssertionType,
    BindingCommand,
    CodeExample,
    InlineBinding,
    ParsedTable,
    TableRow,
)

from .literals import parse_literal
from .section_patterns import FENCE_RE


# ---------------------------------------------------------------------------
# Bloki kodu
# ---------------------------------------------------------------------------

def fenced_mask(lines: list[str]) -> list[bool]:
    """Dla każdej linii: True gdy leży w bloku kodu (łącznie z liniami ```)."""
    mask: list[bool] = []
    fence: str | None = None
    for line in lines:
        m = FENCE_RE.match(line)
        if fence is None:
            if m:
                fence = m.group(1)
                mask.append(True)
            else:
                mask.append(False)
        else:
            mask.append(True)
            if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence) \
                    and not line.strip()[len(m.group(1)):].strip():
                fence = None
    return mask


def _split_info(info: str) -> tuple[str, str | None]:
    """'typescript:example' → ('typescript', 'example'); '' → ('text', None)."""
    info = info.strip()
    if not info:
        return "text", None
    token, _, rest = info.partition(" ")
    lang, sep, meta = token.partition(":")
    if sep:
        return lang or "text", meta or None
    return lang or "text", rest.strip() or None


_INPUT_RE    = re.compile(r"^\s*input\s*:\s*(.+?)\s*$", re.IGNORECASE | re.MULTILINE)
_EXPECTED_RE = re.compile(r"^\s*(?:output|expected)\s*:\s*(.+?)\s*$", re.IGNORECASE | re.MULTILINE)


def parse_structured_example(code: str) -> dict[str, Any]:
    """
    Wyciąga parę input / expected z linii `klucz: wartość`.

    Wartości są parsowane jako literały JSON, w razie niepowodzenia zostają
    tekstem. Zwraca słownik tylko z kluczami, które wystąpiły.
    """
    result: dict[str, Any] = {}
    m = _INPUT_RE.search(code)
    if m:
        result["input"] = parse_literal(m.group(1))
    m = _EXPECTED_RE.search(code)
    if m:
        result["expected"] = parse_literal(m.group(1))
    return result


def extract_code_examples(content: str) -> list[CodeExample]:
    """Zwraca zamknięte bloki ```; niezamknięty blok jest pomijany."""
    lines = content.split("\n")
    examples: list[CodeExample] = []

    i = 0
    while i < len(lines):
        m = FENCE_RE.match(lines[i])
        if not m:
            i += 1
            continue

        fence = m.group(1)
        info = lines[i].strip()[len(fence):]
        start = i
        j = i + 1
        close: int | None = None
        while j < len(lines):
            cm = FENCE_RE.match(lines[j])
            if cm and cm.group(1)[0] == fence[0] and len(cm.group(1)) >= len(fence) \
                    and not lines[j].strip()[len(cm.group(1)):].strip():
                close = j
                break
            j += 1

        if close is None:
            break  # niezamknięty blok do końca tekstu

        language, meta = _split_info(info)
        code = "\n".join(lines[start + 1:close]).strip()
        examples.append(CodeExample(
            language=language,
            code=code,
            raw="\n".join(lines[start:close + 1]),
            line=start + 1,
            meta=meta,
            structured=parse_structured_example(code),
        ))
        i = close + 1

    return examples


# ---------------------------------------------------------------------------
# Asercje
# ---------------------------------------------------------------------------

_REQUIREMENT_WORDS = r"(MUST\s+NOT|MUST|SHALL\s+NOT|SHALL|SHOULD\s+NOT|SHOULD|REQUIRES)"

# Forma "KEYWORD: tekst" (dowolna wielkość liter) albo RFC 2119 wielkimi literami
_REQUIREMENT_COLON_RE = re.compile(rf"\b{_REQUIREMENT_WORDS}\s*:\s*(.*)$", re.IGNORECASE)
_REQUIREMENT_UPPER_RE = re.compile(rf"\b{_REQUIREMENT_WORDS}\b\s*(.*)$")

_GHERKIN_RE  = re.compile(
    r"^\s*(?:[-*+]\s+)?(Given|When|Then|And|But)\b\s+(.*)$", re.IGNORECASE
)
_BEHAVIOR_RE = re.compile(
    r"^\s*[-*+]\s+(should|must|will|shall|can|cannot|does|never|always"
    r"|returns?|throws?|raises?)\b\s*(.*)$",
    re.IGNORECASE,
)


def _requirement_keyword(word: str) -> str:
    return " ".join(word.upper().split())


# (typ, wzorce, normalizacja słowa kluczowego); kolejność = priorytet
_ASSERTION_PATTERNS: list[tuple[AssertionType, tuple[re.Pattern[str], ...], Callable[[str], str]]] = [
    (AssertionType.REQUIREMENT, (_REQUIREMENT_COLON_RE, _REQUIREMENT_UPPER_RE), _requirement_keyword),
    (AssertionType.GHERKIN,     (_GHERKIN_RE,),                                 str.capitalize),
    (AssertionType.BEHAVIOR,    (_BEHAVIOR_RE,),                                str.lower),
]


def _match_assertion(line: str, line_no: int) -> Assertion | None:
    for kind, regexes, normalize in _ASSERTION_PATTERNS:
        for regex in regexes:
            m = regex.search(line)
            if m:
                return Assertion(
                    type=kind,
                    keyword=normalize(m.group(1)),
                    text=m.group(2).strip(),
                    context=line.strip(),
                    line=line_no,
                )
    return None


def extract_assertions(content: str) -> list[Assertion]:
    """Jedno twierdzenie na linię; pierwsze dopasowanie wygrywa."""
    lines = content.split("\n")
    mask = fenced_mask(lines)
    assertions: list[Assertion] = []
    for i, line in enumerate(lines):
        if mask[i] or not line.strip():
            continue
        assertion = _match_assertion(line, i + 1)
        if assertion is not None:
            assertions.append(assertion)
    return assertions


# ---------------------------------------------------------------------------
# Tabele
# ---------------------------------------------------------------------------

_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")
_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")


def _is_table_line(line: str) -> bool:
    s = line.strip()
    return len(s) >= 2 and s.startswith("|") and s.endswith("|")


def split_row(line: str) -> list[str]:
    """'| a | b\\|c |' → ['a', 'b|c']"""
    s = line.strip()[1:-1]
    return [cell.strip().replace("\\|", "|") for cell in _CELL_SPLIT_RE.split(s)]


def _is_separator(cells: list[str]) -> bool:
    return bool(cells) and all(_SEPARATOR_CELL_RE.match(c.replace(" ", "")) for c in cells)


def _parse_table_rows(rows: list[str], start_line: int) -> ParsedTable | None:
    if len(rows) < 2:
        return None

    headers = split_row(rows[0])
    body = rows[2:] if _is_separator(split_row(rows[1])) else rows[1:]

    table_rows: list[TableRow] = []
    table_cells: list[list[str]] = []
    for raw_row in body:
        cells = split_row(raw_row)
        if not any(cells):
            continue
        row: TableRow = {}
        for idx, header in enumerate(headers):
            if not header:
                continue  # kolumna bez nagłówka
            row[header] = parse_literal(cells[idx]) if idx < len(cells) else ""
        table_rows.append(row)
        table_cells.append(cells)

    return ParsedTable(
        headers=[h for h in headers if h],
        rows=table_rows,
        cells=table_cells,
        raw="\n".join(rows),
        line=start_line,
    )


def extract_tables(content: str) -> list[ParsedTable]:
    """Maksymalne ciągi linii ograniczonych '|' → tabele (min. 2 wiersze)."""
    lines = content.split("\n")
    mask = fenced_mask(lines)
    tables: list[ParsedTable] = []

    current: list[str] = []
    start_line = 0
    for i, line in enumerate(lines):
        if not mask[i] and _is_table_line(line):
            if not current:
                start_line = i + 1
            current.append(line.strip())
            continue
        if current:
            parsed = _parse_table_rows(current, start_line)
            if parsed:
                tables.append(parsed)
            current = []

    if current:
        parsed = _parse_table_rows(current, start_line)
        if parsed:
            tables.append(parsed)

    return tables


def parse_table(text: str) -> list[TableRow]:
    """Wiersze pierwszej tabeli w tekście; [] gdy brak tabeli."""
    tables = extract_tables(text)
    return tables[0].rows if tables else []


# ---------------------------------------------------------------------------
# Bindingi [value](!command:field)
# ---------------------------------------------------------------------------

_BINDING_RE = re.compile(r"\[([^\]]+)\]\(!(\w+):([^)]+)\)")
_COMMANDS: dict[str, BindingCommand] = {c.value: c for c in BindingCommand}


def parse_inline_bindings(content: str, skip_fenced: bool = True) -> list[InlineBinding]:
    """
    Zwraca bindingi w kolejności źródła (kolejność ma znaczenie semantyczne).

    Nieznane komendy są po cichu pomijane.
    """
    lines = content.split("\n")
    mask = fenced_mask(lines) if skip_fenced else [False] * len(lines)
    bindings: list[InlineBinding] = []
    for i, line in enumerate(lines):
        if mask[i]:
            continue
        for m in _BINDING_RE.finditer(line):
            command = _COMMANDS.get(m.group(2))
            if command is None:
                continue
            bindings.append(InlineBinding(
                value=m.group(1),
                command=command,
                field=m.group(3).strip(),
                raw=m.group(0),
                line=i + 1,
            ))
    return bindings
