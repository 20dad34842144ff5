"""Testy komend CLI docref (parse, check, debt, run)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docref.cli import build_parser, main
from docref.commands.run import load_fixtures

FIXTURES_MODULE = """\
from executable import FixtureRegistry

registry = FixtureRegistry()


@registry.fixture("pricing")
def pricing(ctx):
    return {"total": int(ctx.inputs["qty"]) * 10}


BROKEN = {"pricing": lambda ctx: {"total": 0}}
"""


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DOCREF_DOCS_DIR", "DOCREF_TEST_PATTERNS", "DOCREF_SRC_PATTERNS",
                 "DOCREF_ENTRY_POINTS", "DOCS_ROOT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    _write(tmp_path / "docs" / "api.md", "# API\n\n## Auth\n\nCall `login()` first.\n")
    _write(tmp_path / "docs" / "pricing.md",
           "# Pricing\n\n## Examples\n\n[3](!set:qty) [c](!execute:pricing) [30](!verify:total)\n")
    _write(tmp_path / "tests" / "test_api.py", "# DOC: docs/api.md#auth\n")
    return tmp_path


def _exit_code(argv: list[str]) -> int | str | None:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def test_command_is_required() -> None:
    assert _exit_code([]) == 2


def test_parser_registers_commands() -> None:
    args = build_parser().parse_args(["check", "--debt"])
    assert args.command == "check"
    assert args.debt is True
    assert args.project == "."


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------

def test_parse_json(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["parse", str(project / "docs" / "api.md"), "--json-output"])
    data = json.loads(capsys.readouterr().out)

    assert data["line_count"] == 6
    assert [s["slug"] for s in data["sections"]] == ["api", "auth"]


def test_parse_table_output(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["parse", str(project / "docs" / "api.md")])
    out = capsys.readouterr().out
    assert "auth" in out
    assert "2 sekcji" in out


def test_parse_single_section(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["parse", str(project / "docs" / "api.md"), "--section", "auth", "--json-output"])
    data = json.loads(capsys.readouterr().out)
    assert data["title"] == "Auth"


def test_parse_unknown_section_fails(project: Path) -> None:
    assert _exit_code(["parse", str(project / "docs" / "api.md"), "--section", "nope"]) == 1


def test_parse_missing_file_fails(tmp_path: Path) -> None:
    assert _exit_code(["parse", str(tmp_path / "missing.md")]) == 1


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------

def test_check_valid_project(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["check", str(project)])
    assert "OK" in capsys.readouterr().out


def test_check_json_with_debt(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["check", str(project), "--debt", "--json-output"])
    data = json.loads(capsys.readouterr().out)

    assert data["total_refs"] == 1
    assert data["invalid_refs"] == 0
    assert data["orphaned_docs"] == ["pricing.md"]
    assert data["debt"]["debt_count"] == 1


def test_check_broken_reference_exits_1(project: Path) -> None:
    _write(project / "tests" / "test_broken.py", "# docs/api.md#missing-section\n")
    assert _exit_code(["check", str(project)]) == 1


def test_check_missing_project(tmp_path: Path) -> None:
    assert _exit_code(["check", str(tmp_path / "nope")]) == 1


def test_check_docs_dir_from_environment(project: Path, monkeypatch: pytest.MonkeyPatch,
                                         capsys: pytest.CaptureFixture[str]) -> None:
    (project / "docs").rename(project / "documentation")
    _write(project / "tests" / "test_api.py", "# DOC: documentation/api.md#auth\n")
    monkeypatch.setenv("DOCREF_DOCS_DIR", "documentation")

    main(["check", str(project), "--json-output"])
    data = json.loads(capsys.readouterr().out)
    assert data["valid_refs"] == 1


# ---------------------------------------------------------------------------
# debt
# ---------------------------------------------------------------------------

def test_debt_json(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["debt", str(project), "--json-output"])
    data = json.loads(capsys.readouterr().out)

    assert data["total_promises"] == 1
    assert data["debts"][0]["severity"] == "critical"
    assert data["debts"][0]["promise"]["identifier"] == "login"


def test_debt_fail_on_critical(project: Path) -> None:
    assert _exit_code(["debt", str(project), "--fail-on-critical"]) == 1

    _write(project / "__init__.py", "def login():\n    pass\n")
    main(["debt", str(project), "--fail-on-critical"])


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

@pytest.fixture
def fixtures_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    name = f"docref_fixtures_{tmp_path.name}"
    _write(tmp_path / f"{name}.py", FIXTURES_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


def test_run_passes(project: Path, fixtures_module: str, capsys: pytest.CaptureFixture[str]) -> None:
    main([
        "run", "pricing.md#examples",
        "--base-path", str(project / "docs"),
        "--fixtures", f"{fixtures_module}:registry",
        "--json-output",
    ])
    data = json.loads(capsys.readouterr().out)
    assert (data["passed"], data["failed"], data["skipped"]) == (1, 0, 0)


def test_run_failure_exits_1(project: Path, fixtures_module: str) -> None:
    code = _exit_code([
        "run", "pricing.md#examples",
        "--base-path", str(project / "docs"),
        "--fixtures", f"{fixtures_module}:BROKEN",
    ])
    assert code == 1


def test_run_base_path_from_environment(project: Path, fixtures_module: str,
                                        monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCS_ROOT", str(project / "docs"))
    main(["run", "pricing.md#examples", "--fixtures", f"{fixtures_module}:registry"])


def test_run_missing_spec(project: Path) -> None:
    assert _exit_code(["run", "missing.md", "--base-path", str(project / "docs")]) == 1
    main(["run", "missing.md", "--base-path", str(project / "docs"), "--no-strict"])


def test_load_fixtures_merges_sources(fixtures_module: str) -> None:
    registry = load_fixtures([f"{fixtures_module}:registry"])
    assert registry.names() == ["pricing"]


def test_load_fixtures_rejects_bad_specs(fixtures_module: str) -> None:
    for spec in ("no_colon", f"{fixtures_module}:missing_attr", "no_such_module_xyz:registry"):
        with pytest.raises(SystemExit):
            load_fixtures([spec])
