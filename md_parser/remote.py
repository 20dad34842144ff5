"""md_parser/remote.py — pobieranie dokumentu markdown z URL."""

from __future__ import annotations

import requests

from data_model.documents import Document

from .parser import parse_markdown

_HEADERS = {
    "User-Agent": "docref/0.1 (+markdown fetch)",
    "Accept": "text/markdown, text/plain;q=0.9, */*;q=0.5",
}


def fetch_markdown(url: str, timeout: float = 30) -> Document:
    """Pobiera dokument z podanego URL i parsuje go; błędy HTTP są propagowane."""
    resp = requests.get(url, timeout=timeout, headers=_HEADERS)
    resp.raise_for_status()
    resp.encoding = resp.encoding or resp.apparent_encoding or "utf-8"
    return parse_markdown(resp.text)
