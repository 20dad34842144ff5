"""
validator/reference_validator.py — sprawdzanie referencji względem dokumentów.

ReferenceValidator.validate(reference) -> ValidationResult

Kolejność sprawdzeń (pierwszy błąd kończy walidację referencji):
  1 — istnienie pliku      (E_DOC_NOT_FOUND; nieczytelny plik: E_DOC_UNREADABLE)
  2 — zakres linii         (E_LINE_OUT_OF_RANGE; dla zakresu liczy się koniec)
  3 — istnienie kotwicy    (E_ANCHOR_NOT_FOUND; komunikat podaje przykładowe kotwice)

Błędy są zwracane jako dane, nigdy jako wyjątki.
"""

from __future__ import annotations

from pathlib import Path

from data_model.common import last_line
from data_model.options import DocRefOptions
from data_model.references import DocReference
from md_parser import parse_markdown_file

from .types import ErrorCode, ValidationResult

# Liczba kotwic pokazywanych w komunikacie o brakującej kotwicy
ANCHOR_SAMPLE_SIZE = 5


def resolve_doc_path(
    project_dir: str | Path,
    doc_path: str,
    options: DocRefOptions | None = None,
) -> Path:
    """Ścieżka już pod katalogiem docs → względem projektu; inaczej względem docs."""
    opts = options or DocRefOptions()
    docs_dir = opts.docs_dir.strip("/")
    if doc_path.startswith("docs/") or doc_path.startswith(f"{docs_dir}/"):
        return Path(project_dir) / doc_path
    return Path(project_dir) / docs_dir / doc_path


class ReferenceValidator:
    """
    Walidator referencji dla jednego projektu.

    Użycie:
        validator = ReferenceValidator("/path/to/project")
        results   = validator.validate_all(refs)
        broken    = [r for r in results if not r.valid]
    """

    def __init__(
        self,
        project_dir: str | Path,
        options: DocRefOptions | None = None,
    ) -> None:
        self._project_dir = Path(project_dir)
        self._options     = options or DocRefOptions()

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate(self, reference: DocReference) -> ValidationResult:
        full_path = resolve_doc_path(self._project_dir, reference.doc_path, self._options)

        if not full_path.is_file():
            return self._fail(
                reference,
                ErrorCode.DOC_NOT_FOUND,
                f"Doc file not found: {reference.doc_path}",
            )

        try:
            document = parse_markdown_file(full_path)
        except (OSError, UnicodeDecodeError) as exc:
            return self._fail(
                reference,
                ErrorCode.DOC_UNREADABLE,
                f"Cannot read doc file {reference.doc_path}: {exc}",
            )

        if reference.line_ref is not None and self._options.validate_lines:
            line = last_line(reference.line_ref)
            if line > document.line_count or line < 1:
                return self._fail(
                    reference,
                    ErrorCode.LINE_OUT_OF_RANGE,
                    f"Line {line} exceeds file length ({document.line_count} lines)",
                )

        if reference.anchor_ref is not None and self._options.validate_anchors:
            anchors = document.anchors
            if reference.anchor_ref not in anchors:
                return self._fail(
                    reference,
                    ErrorCode.ANCHOR_NOT_FOUND,
                    f"Anchor #{reference.anchor_ref} not found in {reference.doc_path}. "
                    f"{_describe_anchors(anchors)}",
                )

        return ValidationResult(reference=reference, valid=True)

    def validate_all(self, references: list[DocReference]) -> list[ValidationResult]:
        return [self.validate(ref) for ref in references]

    # ------------------------------------------------------------------
    # Pomocnicze
    # ------------------------------------------------------------------

    @staticmethod
    def _fail(reference: DocReference, code: ErrorCode, message: str) -> ValidationResult:
        return ValidationResult(reference=reference, valid=False, error=message, code=code)


def _describe_anchors(anchors: list[str]) -> str:
    if not anchors:
        return "No anchors found in document"
    sample = ", ".join(anchors[:ANCHOR_SAMPLE_SIZE])
    more = "..." if len(anchors) > ANCHOR_SAMPLE_SIZE else ""
    return f"Available: {sample}{more}"


def validate_reference(
    reference: DocReference,
    project_dir: str | Path,
    options: DocRefOptions | None = None,
) -> ValidationResult:
    return ReferenceValidator(project_dir, options).validate(reference)


def validate_references(
    references: list[DocReference],
    project_dir: str | Path,
    options: DocRefOptions | None = None,
) -> list[ValidationResult]:
    return ReferenceValidator(project_dir, options).validate_all(references)
