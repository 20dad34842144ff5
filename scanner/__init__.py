"""
scanner — wyszukiwanie referencji z plików testowych do dokumentacji.

Interfejs publiczny:
    scan_text / scan_test_file / scan_doc_references — referencje DocReference
    parse_doc_reference — pojedyncza referencja z fragmentu tekstu
    find_files / get_doc_files / get_test_files      — wyszukiwanie plików
    doc_paths_match     — porównanie ścieżek dokumentów

Typowe użycie:
    from scanner import scan_doc_references

    refs = scan_doc_references("/path/to/project")
    for ref in refs:
        print(ref.test_file, ref.doc_path, ref.line_ref, ref.anchor_ref)
"""

from .files import doc_paths_match, find_files, get_doc_files, get_test_files
from .patterns import PATTERNS, ReferencePattern
from .references import (
    parse_doc_reference,
    scan_doc_references,
    scan_test_file,
    scan_text,
)

__all__ = [
    "PATTERNS",
    "ReferencePattern",
    "parse_doc_reference",
    "scan_text",
    "scan_test_file",
    "scan_doc_references",
    "find_files",
    "get_doc_files",
    "get_test_files",
    "doc_paths_match",
]
