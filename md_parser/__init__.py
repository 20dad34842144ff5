"""
md_parser — parser dokumentów markdown i ekstrakcja elementów sprawdzalnych.

Użycie:
  from md_parser import parse_markdown, load_spec, extract_tables, ...

Moduły:
  section_patterns — slugify, wzorce nagłówków i kotwic {#id}
  parser           — parse_markdown, parse_markdown_file, load_spec, lookupy
  extract          — przykłady kodu, asercje, tabele, bindingi
  literals         — parse_literal (JSON z fallbackiem na tekst)
  remote           — fetch_markdown (requests)
"""

from data_model.documents import LoadedSpec

from .extract import (
    extract_assertions,
    extract_code_examples,
    extract_tables,
    parse_inline_bindings,
    parse_structured_example,
    parse_table,
)
from .literals import parse_literal
from .parser import (
    get_section,
    get_sections,
    has_anchor,
    load_spec,
    parse_markdown,
    parse_markdown_file,
)
from .remote import fetch_markdown
from .section_patterns import slugify

__all__ = [
    "slugify",
    "parse_markdown",
    "parse_markdown_file",
    "load_spec",
    "LoadedSpec",
    "has_anchor",
    "get_section",
    "get_sections",
    "extract_code_examples",
    "parse_structured_example",
    "extract_assertions",
    "extract_tables",
    "parse_table",
    "parse_inline_bindings",
    "parse_literal",
    "fetch_markdown",
]
