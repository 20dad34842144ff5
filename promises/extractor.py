"""
promises/extractor.py — wyciąganie obietnic z sekcji dokumentacji.

Źródła obietnic w sekcji (w kolejności):
  1. nagłówek w kształcie sygnatury  → function (explicit)
  2. wzorce prozy (patterns.PATTERNS) → function / api-endpoint / requirement / feature
  3. wywołania w blokach kodu        → function (explicit), po odfiltrowaniu deny-listy

Deduplikacja w obrębie sekcji po kluczu "type:identifier".
"""

from __future__ import annotations

import logging
from pathlib import Path

from data_model.documents import Document, Section
from data_model.options import DocRefOptions
from data_model.promises import DocPromise, PromiseConfidence, PromiseSource, PromiseType
from md_parser import parse_markdown_file
from md_parser.extract import fenced_mask
from scanner import get_doc_files

from .patterns import (
    CODE_CALL_DENYLIST,
    CODE_CALL_RE,
    CODE_LANGUAGES,
    HEADING_SIGNATURE_RE,
    PATTERNS,
)

logger = logging.getLogger(__name__)

# Kontekst (znaki) wokół wywołania zapisywany jako tekst obietnicy
_CALL_CONTEXT = 20


def _prose(content: str) -> str:
    """Treść sekcji z wyczyszczonymi liniami bloków kodu (numeracja zachowana)."""
    lines = content.split("\n")
    mask = fenced_mask(lines)
    return "\n".join("" if fenced else line for line, fenced in zip(lines, mask))


def extract_promises_from_section(section: Section, doc_file: str) -> list[DocPromise]:
    source = PromiseSource(
        file=doc_file,
        section=section.slug,
        line=section.line,
        end_line=section.end_line,
    )
    promises: dict[str, DocPromise] = {}

    def add(promise: DocPromise) -> None:
        if promise.key not in promises:
            promises[promise.key] = promise

    m = HEADING_SIGNATURE_RE.match(section.title)
    if m:
        add(DocPromise(
            type=PromiseType.FUNCTION,
            identifier=m.group(1),
            source=source,
            text=section.title,
            confidence=PromiseConfidence.EXPLICIT,
        ))

    prose = _prose(section.content)
    for pattern in PATTERNS:
        for m in pattern.regex.finditer(prose):
            add(DocPromise(
                type=pattern.type,
                identifier=pattern.get_identifier(m),
                source=source,
                text=m.group(0).strip(),
                confidence=pattern.confidence,
                keyword=pattern.get_keyword(m),
            ))

    for example in section.examples:
        if example.language.lower() not in CODE_LANGUAGES:
            continue
        code = example.code
        for m in CODE_CALL_RE.finditer(code):
            name = m.group(1)
            if name in CODE_CALL_DENYLIST or len(name) <= 1 or name[0].isdigit():
                continue
            add(DocPromise(
                type=PromiseType.FUNCTION,
                identifier=name,
                source=source,
                text=code[max(0, m.start() - _CALL_CONTEXT):m.end() + _CALL_CONTEXT],
                confidence=PromiseConfidence.EXPLICIT,
            ))

    return list(promises.values())


def extract_promises_from_doc(document: Document, doc_file: str) -> list[DocPromise]:
    promises: list[DocPromise] = []
    for section in document.sections:
        promises.extend(extract_promises_from_section(section, doc_file))
    return promises


def extract_promises(
    project_dir: str | Path,
    options: DocRefOptions | None = None,
) -> list[DocPromise]:
    """Obietnice ze wszystkich dokumentów projektu (doc_file względem katalogu docs)."""
    opts = options or DocRefOptions()
    docs_path = Path(project_dir) / opts.docs_dir
    promises: list[DocPromise] = []

    for doc_file in get_doc_files(project_dir, opts):
        try:
            document = parse_markdown_file(docs_path / doc_file)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Pominięto dokument %s: %s", doc_file, exc)
            continue
        promises.extend(extract_promises_from_doc(document, doc_file))

    return promises
