"""Mutation unit: exclusivity, callbacks, error propagation."""
from __future__ import annotations

import asyncio

import pytest

from school_console.hooks import MutationUnit, ResultState
from school_console.tests.helpers import Gate, run, settle


def test_second_call_while_in_flight_is_a_silent_no_op(captured_events):
    async def scenario():
        gate = Gate()
        unit = MutationUnit(gate)
        first = asyncio.ensure_future(unit.mutate({"amount": 500}))
        await settle()
        assert await unit.mutate({"amount": 500}) is None
        assert gate.count == 1

        gate.resolve(0, {"id": 7})
        assert await first == {"id": 7}

        third = asyncio.ensure_future(unit.mutate({"amount": 600}))
        await settle()
        assert gate.count == 2
        gate.resolve(1, {"id": 8})
        assert await third == {"id": 8}

    run(scenario())
    rejected = [e for e in captured_events if e["event"] == "mutation.rejected"]
    assert len(rejected) == 1
    assert rejected[0]["_level"] == "WARNING"


def test_failure_records_message_and_reraises():
    async def scenario():
        async def save(payload):
            raise ValueError("amount required")

        unit = MutationUnit(save)
        with pytest.raises(ValueError, match="amount required"):
            await unit.mutate({"amount": ""})
        assert unit.state == ResultState(data=None, loading=False, error="amount required")
        assert unit.in_progress is False

    run(scenario())


def test_guard_is_released_after_failure():
    async def scenario():
        calls = []

        async def save(payload):
            calls.append(payload)
            if len(calls) == 1:
                raise RuntimeError("conflict")
            return "ok"

        unit = MutationUnit(save)
        with pytest.raises(RuntimeError):
            await unit.mutate(1)
        assert await unit.mutate(2) == "ok"
        assert calls == [1, 2]

    run(scenario())


def test_success_callbacks_receive_result_and_arguments_in_order():
    async def scenario():
        order = []

        async def generate(student_id, month):
            return {"voucher": f"{student_id}-{month}"}

        unit = MutationUnit(
            generate,
            on_success=lambda result, *args: order.append(("success", result, args)),
            on_settled=lambda result, error, *args: order.append(("settled", result, error, args)),
        )
        result = await unit.mutate(12, "2026-10")
        assert result == {"voucher": "12-2026-10"}
        assert order == [
            ("success", result, (12, "2026-10")),
            ("settled", result, None, (12, "2026-10")),
        ]
        assert unit.data == result

    run(scenario())


def test_error_callbacks_run_before_reraise():
    async def scenario():
        order = []
        boom = RuntimeError("Forbidden")

        async def delete(voucher_id):
            raise boom

        unit = MutationUnit(
            delete,
            on_error=lambda error, *args: order.append(("error", error, args)),
            on_settled=lambda result, error, *args: order.append(("settled", result, error, args)),
        )
        with pytest.raises(RuntimeError):
            await unit.mutate(5)
        assert order == [("error", boom, (5,)), ("settled", None, boom, (5,))]

    run(scenario())


def test_start_clears_previous_data_and_error():
    async def scenario():
        gate = Gate()
        unit = MutationUnit(gate)
        task = asyncio.ensure_future(unit.mutate())
        await settle()
        gate.fail(0, RuntimeError("first failed"))
        with pytest.raises(RuntimeError):
            await task
        assert unit.error == "first failed"

        asyncio.ensure_future(unit.mutate())
        await settle()
        assert unit.state == ResultState(data=None, loading=True, error=None)

    run(scenario())


def test_reset_clears_state_without_releasing_guard():
    async def scenario():
        gate = Gate()
        unit = MutationUnit(gate)
        task = asyncio.ensure_future(unit.mutate())
        await settle()
        unit.reset()
        assert unit.state == ResultState()
        assert unit.in_progress is True
        assert await unit.mutate() is None
        gate.resolve(0, "done")
        assert await task == "done"
        assert unit.is_idle is False

    run(scenario())


def test_closed_unit_still_returns_result_but_writes_nothing():
    async def scenario():
        gate = Gate()
        seen = []
        unit = MutationUnit(gate, on_success=lambda *a: seen.append(a))
        task = asyncio.ensure_future(unit.mutate("x"))
        await settle()
        snapshot = unit.state
        unit.close()
        gate.resolve(0, "saved")
        assert await task == "saved"
        assert unit.state == snapshot
        assert seen == []

    run(scenario())


def test_execute_alias_and_updated_operation():
    async def scenario():
        async def v1():
            return 1

        async def v2():
            return 2

        unit = MutationUnit(v1)
        unit.update(mutation_fn=v2)
        assert await unit.execute() == 2

    run(scenario())
