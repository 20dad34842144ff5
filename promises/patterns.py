"""
promises/patterns.py — wzorce obietnic dokumentacji.

Każdy PromisePattern zawiera:
  - type           : rodzaj obietnicy (PromiseType)
  - confidence     : explicit | inferred
  - regex          : skompilowany wzorzec stosowany do prozy sekcji
  - get_identifier : funkcja wyciągająca identyfikator z Match
  - get_keyword    : słowo kluczowe wymagania (None dla pozostałych typów)

Kolejność listy = kolejność ekstrakcji; przy duplikacie (type, identifier)
w sekcji wygrywa wcześniejszy wzorzec.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from data_model.promises import PromiseConfidence, PromiseType


@dataclass(frozen=True, slots=True)
class PromisePattern:
    type: PromiseType
    confidence: PromiseConfidence
    regex: re.Pattern[str]
    get_identifier: Callable[[re.Match[str]], str]
    get_keyword: Callable[[re.Match[str]], str | None] = lambda m: None


def _normalize_keyword(m: re.Match[str]) -> str:
    return " ".join(m.group(1).upper().split())


# Nagłówek w kształcie sygnatury: "registerSchema(name, schema)" lub "`foo()`"
HEADING_SIGNATURE_RE = re.compile(r"^`?(\w+)\s*\([^)]*\)`?$")

# Wywołania funkcji w blokach kodu
CODE_CALL_RE = re.compile(r"\b(\w+)\s*\(")

# Języki bloków kodu skanowanych pod kątem wywołań ("text" = blok bez tagu)
CODE_LANGUAGES: frozenset[str] = frozenset({
    "python", "py",
    "typescript", "ts", "tsx",
    "javascript", "js", "jsx",
    "text",
})

# Słowa kluczowe, wbudowane i nazwy frameworków testowych
CODE_CALL_DENYLIST: frozenset[str] = frozenset({
    # sterowanie / składnia
    "if", "elif", "else", "for", "while", "switch", "case", "catch", "with",
    "function", "def", "class", "return", "new", "typeof", "instanceof",
    "import", "export", "require", "await", "async", "yield", "lambda",
    "not", "and", "or", "in", "is", "assert", "raise", "except", "super",
    # wbudowane JS
    "console", "Error", "Array", "Object", "String", "Number", "Boolean",
    "Promise", "Map", "Set", "Date", "JSON", "Math", "setTimeout",
    "setInterval", "parseInt", "parseFloat",
    # wbudowane Pythona
    "print", "len", "range", "str", "int", "float", "bool", "dict", "list",
    "set", "tuple", "type", "isinstance", "open", "sorted", "enumerate",
    "zip", "map", "filter", "min", "max", "sum", "any", "all", "repr",
    "getattr", "setattr", "hasattr",
    # frameworki testowe
    "describe", "it", "test", "expect", "beforeEach", "afterEach",
    "beforeAll", "afterAll", "pytest", "fixture", "parametrize",
})


PATTERNS: list[PromisePattern] = [
    # -------------------------------------------------------------------------
    # Funkcja w kodzie inline: `validateSchema(data)`
    # -------------------------------------------------------------------------
    PromisePattern(
        type=PromiseType.FUNCTION,
        confidence=PromiseConfidence.EXPLICIT,
        regex=re.compile(r"`(\w+)\s*\([^)`]*\)`"),
        get_identifier=lambda m: m.group(1),
    ),

    # -------------------------------------------------------------------------
    # Endpoint HTTP: GET /api/users, POST /api/users/:id
    # -------------------------------------------------------------------------
    PromisePattern(
        type=PromiseType.API_ENDPOINT,
        confidence=PromiseConfidence.EXPLICIT,
        regex=re.compile(r"\b(GET|POST|PUT|PATCH|DELETE|HEAD|OPTIONS)\s+(/[\w/:.{}-]*)"),
        get_identifier=lambda m: f"{m.group(1)} {m.group(2)}",
    ),

    # -------------------------------------------------------------------------
    # Wymaganie: "MUST: ...", "- SHALL NOT: ...", "should: ..."
    # -------------------------------------------------------------------------
    PromisePattern(
        type=PromiseType.REQUIREMENT,
        confidence=PromiseConfidence.EXPLICIT,
        regex=re.compile(
            r"^\s*(?:[-*+]\s+)?(MUST(?:\s+NOT)?|SHALL(?:\s+NOT)?|SHOULD(?:\s+NOT)?)\s*:\s*(.+?)\s*$",
            re.IGNORECASE | re.MULTILINE,
        ),
        get_identifier=lambda m: m.group(2),
        get_keyword=_normalize_keyword,
    ),

    # -------------------------------------------------------------------------
    # Funkcjonalność (heurystyka): "provides automatic validation"
    # -------------------------------------------------------------------------
    PromisePattern(
        type=PromiseType.FEATURE,
        confidence=PromiseConfidence.INFERRED,
        regex=re.compile(
            r"\b(?:provides?|supports?|includes?|offers?|enables?)\s+(\w+(?:[ \t]+\w+){0,3})",
            re.IGNORECASE,
        ),
        get_identifier=lambda m: m.group(1).strip(),
    ),
]
