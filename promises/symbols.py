"""
promises/symbols.py — skanowanie symboli kodu źródłowego (Python i JS/TS).

Dwa zbiory budowane raz na uruchomienie:
  export surface      — nazwy osiągalne z plików wejściowych pakietu
                        (__all__, re-eksporty "import x as y", export {a as b})
  source definitions  — definicje najwyższego poziomu w plikach źródłowych
                        (bez plików testowych i deklaracji .d.ts)

Python jest analizowany przez `ast`, pozostałe języki wyrażeniami regularnymi.
"""

from __future__ import annotations

import ast
import logging
import re
from pathlib import Path

from data_model.options import DebtOptions
from scanner import find_files

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Python
# ---------------------------------------------------------------------------

def _parse_python(source: str, origin: str) -> ast.Module | None:
    try:
        return ast.parse(source)
    except SyntaxError as exc:
        logger.warning("Nie można sparsować %s: %s", origin, exc)
        return None


def _assigned_names(node: ast.stmt) -> list[str]:
    if isinstance(node, ast.Assign):
        return [t.id for t in node.targets if isinstance(t, ast.Name)]
    if isinstance(node, (ast.AnnAssign, ast.AugAssign)) and isinstance(node.target, ast.Name):
        return [node.target.id]
    return []


def python_definitions(source: str, origin: str = "<source>") -> set[str]:
    """def / async def / class / przypisania / aliasy `type` najwyższego poziomu."""
    module = _parse_python(source, origin)
    if module is None:
        return set()

    names: set[str] = set()
    for node in module.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            names.add(node.name)
        elif isinstance(node, ast.TypeAlias) and isinstance(node.name, ast.Name):
            names.add(node.name.id)
        else:
            names.update(_assigned_names(node))
    names.discard("__all__")
    return names


def _literal_names(node: ast.expr | None) -> list[str]:
    try:
        value = ast.literal_eval(node) if node is not None else None
    except (ValueError, TypeError):
        return []
    if isinstance(value, (list, tuple)):
        return [v for v in value if isinstance(v, str)]
    return []


def python_exports(source: str, origin: str = "<source>") -> set[str]:
    """
    Publiczny interfejs modułu wejściowego.

    Nazwy z __all__, nazwy wprowadzone przez `from x import a as b` (liczy
    się nazwa po `as`) oraz publiczne definicje najwyższego poziomu.
    """
    module = _parse_python(source, origin)
    if module is None:
        return set()

    names: set[str] = set()
    for node in module.body:
        if isinstance(node, ast.ImportFrom):
            for alias in node.names:
                if alias.name != "*":
                    names.add(alias.asname or alias.name)
        elif "__all__" in _assigned_names(node):
            names.update(_literal_names(node.value))

    names.update(n for n in python_definitions(source, origin) if not n.startswith("_"))
    return names


def python_star_imports(source: str, origin: str = "<source>") -> list[tuple[int, str | None]]:
    """(poziom, moduł) dla każdego `from moduł import *` najwyższego poziomu."""
    module = _parse_python(source, origin)
    if module is None:
        return []
    return [
        (node.level, node.module)
        for node in module.body
        if isinstance(node, ast.ImportFrom) and any(a.name == "*" for a in node.names)
    ]


# ---------------------------------------------------------------------------
# JavaScript / TypeScript
# ---------------------------------------------------------------------------

_TS_NAMED_EXPORT_RE  = re.compile(r"export\s*(?:type\s*)?\{([^}]+)\}")
_TS_DIRECT_EXPORT_RE = re.compile(
    r"export\s+(?:default\s+)?(?:declare\s+)?(?:abstract\s+)?(?:async\s+)?"
    r"(?:const|let|var|function\*?|class|interface|type|enum)\s+(\w+)"
)

_TS_DEFINITION_RES: list[re.Pattern[str]] = [
    re.compile(r"\bfunction\*?\s+(\w+)"),
    re.compile(r"\b(?:const|let|var)\s+(\w+)\s*[=:]"),
    re.compile(r"\bclass\s+(\w+)"),
    re.compile(r"\b(?:interface|type|enum)\s+(\w+)"),
]


def ts_exports(source: str) -> set[str]:
    names: set[str] = set()
    for m in _TS_NAMED_EXPORT_RE.finditer(source):
        for part in m.group(1).split(","):
            # "foo as bar" → bar
            name = re.split(r"\s+as\s+", part.strip())[-1].strip()
            if name:
                names.add(name)
    names.update(m.group(1) for m in _TS_DIRECT_EXPORT_RE.finditer(source))
    return names


def ts_definitions(source: str) -> set[str]:
    names: set[str] = set()
    for regex in _TS_DEFINITION_RES:
        names.update(m.group(1) for m in regex.finditer(source))
    return names


# ---------------------------------------------------------------------------
# Pliki i projekt
# ---------------------------------------------------------------------------

_TEST_FILE_RE = re.compile(
    r"(^test_.*\.py$|_test\.py$|^conftest\.py$|\.(test|spec)\.[cm]?[jt]sx?$|\.d\.ts$)"
)


def is_test_or_declaration(path: Path) -> bool:
    """Pliki testowe i deklaracje typów nie definiują publicznego kodu."""
    return bool(_TEST_FILE_RE.search(path.name)) or "tests" in path.parts[:-1]


def _read(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Pominięto plik %s: %s", path, exc)
        return None


def file_exports(path: Path) -> set[str]:
    source = _read(path)
    if source is None:
        return set()
    if path.suffix == ".py":
        return python_exports(source, str(path))
    return ts_exports(source)


def file_definitions(path: Path) -> set[str]:
    source = _read(path)
    if source is None:
        return set()
    if path.suffix == ".py":
        return python_definitions(source, str(path))
    return ts_definitions(source)


def _entry_files(root: Path, opts: DebtOptions) -> list[Path]:
    """Pliki wejściowe; wpisy z `*` są globami (np. "*/__init__.py")."""
    found: dict[Path, None] = {}
    for entry in opts.entry_points:
        candidates = sorted(root.glob(entry)) if "*" in entry else [root / entry]
        for path in candidates:
            rel = path.relative_to(root)
            if not path.is_file() or is_test_or_declaration(rel):
                continue
            if any(part in opts.exclude_dirs for part in rel.parts[:-1]):
                continue
            found[path] = None
    return list(found)


def _star_module_path(entry: Path, root: Path, level: int, module: str | None) -> Path | None:
    """Plik modułu wskazanego przez `from moduł import *` albo None."""
    if level:
        base = entry.parent
        for _ in range(level - 1):
            base = base.parent
    else:
        base = root
    if not module:
        init = base / "__init__.py"
        return init if init.is_file() and init != entry else None

    parts = module.split(".")
    for candidate in (
        base.joinpath(*parts[:-1], f"{parts[-1]}.py"),
        base.joinpath(*parts, "__init__.py"),
    ):
        if candidate.is_file():
            return candidate
    return None


def scan_exports(
    project_dir: str | Path,
    options: DebtOptions | None = None,
) -> set[str]:
    """
    Export surface ze wszystkich istniejących plików wejściowych.

    `from moduł import *` w pliku wejściowym dokłada eksporty wskazanego
    modułu (jeden poziom, bez dalszego rozwijania).
    """
    opts = options or DebtOptions()
    root = Path(project_dir)
    exports: set[str] = set()
    for path in _entry_files(root, opts):
        exports |= file_exports(path)
        if path.suffix != ".py":
            continue
        source = _read(path)
        if source is None:
            continue
        for level, module in python_star_imports(source, str(path)):
            target = _star_module_path(path, root, level, module)
            if target is None:
                logger.debug("Nie znaleziono modułu dla `from %s import *` w %s", module, path)
                continue
            exports |= file_exports(target)
    return exports


def scan_source_definitions(
    project_dir: str | Path,
    options: DebtOptions | None = None,
) -> set[str]:
    opts = options or DebtOptions()
    root = Path(project_dir)
    definitions: set[str] = set()
    for path in find_files(root, opts.src_patterns, opts.exclude_dirs):
        if is_test_or_declaration(path.relative_to(root)):
            continue
        definitions |= file_definitions(path)
    return definitions
