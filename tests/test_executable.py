"""Testy specyfikacji wykonywalnych (executable)."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import pytest

from data_model.documents import BindingCommand, InlineBinding
from data_model.execution import AssertionStatus, FixtureContext
from executable import (
    FixtureRegistry,
    SpecRunner,
    execute_bindings,
    run_spec,
    run_spec_sync,
    values_equal,
)
from md_parser import parse_inline_bindings

PRICING_DOC = """\
# Pricing

## Examples

Ordering [3](!set:qty) items [calculate](!execute:pricing) costs [$30.00](!verify:total).
"""

DOUBLE_DOC = """\
# Math

## Double

| n | result |
|---|--------|
| [2](!set:n) [go](!execute:double) | [4](!verify:result) |
| [3](!set:n) [go](!execute:double) | [6](!verify:result) |
| [go](!execute:double) | [0](!verify:result) |
"""


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _pricing(ctx: FixtureContext) -> dict[str, Any]:
    return {"total": int(ctx.inputs["qty"]) * 10}


def _run(text: str, registry: FixtureRegistry) -> list:
    return asyncio.run(execute_bindings(parse_inline_bindings(text), registry))


@pytest.fixture
def docs(tmp_path: Path) -> Path:
    _write(tmp_path / "pricing.md", PRICING_DOC)
    _write(tmp_path / "math.md", DOUBLE_DOC)
    return tmp_path


# ---------------------------------------------------------------------------
# values_equal
# ---------------------------------------------------------------------------

def test_values_equal_tolerant_matches() -> None:
    assert values_equal("30", 30)
    assert values_equal("$1,234.50", 1234.5)
    assert values_equal(" x ", "x")
    assert values_equal("true", True)
    assert values_equal("FALSE", False)
    assert values_equal('{"a": 1}', {"a": 1})
    assert values_equal("[1, 2]", (1, 2))
    assert values_equal("null", None)
    assert values_equal(0.1 + 0.2, 0.3)


def test_values_equal_mismatches() -> None:
    assert not values_equal("abc", 1)
    assert not values_equal("1", 2)
    assert not values_equal("yes", True)
    assert not values_equal("{broken", {"a": 1})
    assert not values_equal("x", None)


# ---------------------------------------------------------------------------
# FixtureRegistry
# ---------------------------------------------------------------------------

def test_registry_lookup_is_case_sensitive() -> None:
    registry = FixtureRegistry()

    @registry.fixture()
    def pricing(ctx: FixtureContext) -> int:
        return 1

    registry.register("tax", lambda ctx: 2)

    assert registry.names() == ["pricing", "tax"]
    assert "pricing" in registry
    assert registry.has("tax")
    assert registry.get("Pricing") is None
    assert len(registry) == 2
    assert list(registry) == ["pricing", "tax"]


def test_registry_from_mapping_and_override() -> None:
    registry = FixtureRegistry({"a": lambda ctx: 1})
    replacement = lambda ctx: 2  # noqa: E731
    registry.register("a", replacement)
    assert registry.get("a") is replacement


# ---------------------------------------------------------------------------
# execute_bindings
# ---------------------------------------------------------------------------

def test_set_execute_verify_passes() -> None:
    registry = FixtureRegistry({"pricing": _pricing})
    results = _run(PRICING_DOC, registry)

    assert [r.status for r in results] == [AssertionStatus.PASSED]
    assert results[0].expected == "$30.00"
    assert results[0].actual == 30


def test_multiple_inputs_feed_one_fixture() -> None:
    def pricing(ctx: FixtureContext) -> dict[str, Any]:
        qty = int(ctx.inputs["qty"])
        price = float(ctx.inputs["price"].lstrip("$"))
        return {"total": qty * price}

    text = "[5](!set:qty) at [$10.00](!set:price) [calc](!execute:pricing) is [$50.00](!verify:total)"
    results = _run(text, FixtureRegistry({"pricing": pricing}))

    assert [r.status for r in results] == [AssertionStatus.PASSED]


def test_mismatch_is_reported() -> None:
    registry = FixtureRegistry({"pricing": lambda ctx: {"total": 25}})
    results = _run(PRICING_DOC, registry)

    assert results[0].status == AssertionStatus.FAILED
    assert results[0].error == 'Expected "$30.00" but got "25"'


def test_missing_fixture_is_skipped_not_failed() -> None:
    results = _run(PRICING_DOC, FixtureRegistry())

    assert [r.status for r in results] == [AssertionStatus.SKIPPED, AssertionStatus.SKIPPED]
    assert results[0].error == "Fixture not found: pricing"
    assert results[1].error == "Fixture not found: total"


def test_verify_without_output_calls_fixture_by_field() -> None:
    registry = FixtureRegistry({"answer": lambda ctx: 42})
    results = _run("The answer is [42](!verify:answer).", registry)
    assert results[0].status == AssertionStatus.PASSED


def test_scalar_output_is_compared_directly() -> None:
    registry = FixtureRegistry({"count": lambda ctx: 7})
    results = _run("[run](!execute:count) gives [7](!verify:items)", registry)
    assert results[0].status == AssertionStatus.PASSED


def test_object_output_uses_attributes() -> None:
    class Quote:
        total = 99

    registry = FixtureRegistry({"quote": lambda ctx: Quote()})
    results = _run("[q](!execute:quote) [99](!verify:total)", registry)
    assert results[0].status == AssertionStatus.PASSED


def test_missing_field_in_output_fails() -> None:
    registry = FixtureRegistry({"pricing": lambda ctx: {"subtotal": 1}})
    results = _run("[p](!execute:pricing) [1](!verify:total)", registry)

    assert results[0].status == AssertionStatus.FAILED
    assert results[0].error == 'Field "total" missing from fixture output'


def test_missing_field_falls_back_to_named_fixture() -> None:
    registry = FixtureRegistry({
        "pricing": lambda ctx: {"subtotal": 1},
        "total": lambda ctx: 5,
    })
    results = _run("[p](!execute:pricing) [5](!verify:total)", registry)
    assert results[0].status == AssertionStatus.PASSED


def test_fixture_exception_becomes_failure() -> None:
    def broken(ctx: FixtureContext) -> None:
        raise ValueError("database offline")

    registry = FixtureRegistry({"broken": broken, "total": lambda ctx: 1})
    results = _run("[x](!execute:broken) [1](!verify:total)", registry)

    assert results[0].status == AssertionStatus.FAILED
    assert results[0].error == "database offline"
    # Nieudany execute kasuje ostatnie wyjście; verify woła fixture "total"
    assert results[1].status == AssertionStatus.PASSED


def test_async_fixture_is_awaited() -> None:
    async def pricing(ctx: FixtureContext) -> dict[str, Any]:
        await asyncio.sleep(0)
        return {"total": int(ctx.inputs["qty"]) * 10}

    results = _run(PRICING_DOC, FixtureRegistry({"pricing": pricing}))
    assert results[0].status == AssertionStatus.PASSED


def test_fixture_receives_copy_of_inputs() -> None:
    seen: list[dict[str, Any]] = []

    def spy(ctx: FixtureContext) -> dict[str, Any]:
        seen.append(dict(ctx.inputs))
        ctx.inputs["qty"] = "999"
        return {}

    _run("[1](!set:qty) [a](!execute:spy) [2](!set:qty) [b](!execute:spy)", FixtureRegistry({"spy": spy}))
    assert seen == [{"qty": "1"}, {"qty": "2"}]


def test_bindings_can_be_built_by_hand() -> None:
    bindings = [
        InlineBinding("5", BindingCommand.SET, "n", "[5](!set:n)", 1),
        InlineBinding("go", BindingCommand.EXECUTE, "square", "[go](!execute:square)", 1),
        InlineBinding("25", BindingCommand.VERIFY, "value", "[25](!verify:value)", 1),
    ]
    registry = FixtureRegistry({"square": lambda ctx: {"value": int(ctx.inputs["n"]) ** 2}})
    results = asyncio.run(execute_bindings(bindings, registry))
    assert results[0].passed


# ---------------------------------------------------------------------------
# run_spec / SpecRunner
# ---------------------------------------------------------------------------

def test_run_spec_sync_with_anchor(docs: Path) -> None:
    result = run_spec_sync("pricing.md#examples", FixtureRegistry({"pricing": _pricing}), base_path=docs)

    assert (result.passed, result.failed, result.skipped) == (1, 0, 0)
    assert result.ok
    assert result.spec_path == "pricing.md#examples"
    assert result.duration >= 0


def test_missing_fixture_keeps_result_ok(docs: Path) -> None:
    result = run_spec_sync("pricing.md#examples", FixtureRegistry(), base_path=docs)
    assert result.failed == 0
    assert result.skipped == 2
    assert result.ok


def test_table_rows_run_in_isolation(docs: Path) -> None:
    registry = FixtureRegistry({"double": lambda ctx: {"result": int(ctx.inputs.get("n", 0)) * 2}})
    result = run_spec_sync("math.md#double", registry, base_path=docs)

    assert result.passed == 3
    assert result.failed == 0
    assert [r.binding.field for r in result.results] == ["result", "result", "result"]


def test_run_spec_without_anchor_runs_every_section(docs: Path) -> None:
    _write(docs / "all.md", "# One\n[1](!verify:one)\n# Two\n[2](!verify:two)\n")
    registry = FixtureRegistry({"one": lambda ctx: 1, "two": lambda ctx: 3})

    result = asyncio.run(run_spec("all.md", registry, base_path=docs))
    assert (result.passed, result.failed) == (1, 1)
    assert not result.ok


def test_run_spec_missing_file(docs: Path) -> None:
    with pytest.raises(FileNotFoundError):
        run_spec_sync("missing.md", FixtureRegistry(), base_path=docs)

    result = run_spec_sync("missing.md", FixtureRegistry(), base_path=docs, throw_on_missing=False)
    assert result.results == []
    assert result.ok


def test_run_spec_missing_anchor(docs: Path) -> None:
    with pytest.raises(KeyError):
        run_spec_sync("pricing.md#nope", FixtureRegistry(), base_path=docs)


def test_fixture_context_carries_spec(docs: Path) -> None:
    seen: list[str] = []

    def pricing(ctx: FixtureContext) -> dict[str, Any]:
        seen.append(ctx.spec.path)
        return _pricing(ctx)

    run_spec_sync("pricing.md#examples", FixtureRegistry({"pricing": pricing}), base_path=docs)
    assert seen == [str((docs / "pricing.md").resolve())]


def test_spec_runner_fluent_api(docs: Path) -> None:
    runner = SpecRunner().fixture("pricing", _pricing).base_path(docs)
    result = asyncio.run(runner.run("pricing.md#examples"))
    assert result.passed == 1


def test_spec_runner_run_all(docs: Path) -> None:
    runner = (
        SpecRunner()
        .fixture("pricing", _pricing)
        .fixture("double", lambda ctx: {"result": int(ctx.inputs.get("n", 0)) * 2})
        .base_path(docs)
    )
    results = asyncio.run(runner.run_all(["pricing.md#examples", "math.md#double"]))
    assert [r.passed for r in results] == [1, 3]


def test_spec_runner_keeps_given_registry(docs: Path) -> None:
    registry = FixtureRegistry()
    runner = SpecRunner(registry=registry, base_path=docs).throw_on_missing(False)
    assert runner.registry is registry

    runner.fixture("pricing", _pricing)
    assert registry.has("pricing")

    result = asyncio.run(runner.run("missing.md"))
    assert result.results == []
