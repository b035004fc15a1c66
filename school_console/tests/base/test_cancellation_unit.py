"""Unit tests for cooperative cancellation primitives.

Covers idempotent cancel, cascade to children, late link of child after
parent cancel, callbacks, and raise_if_cancelled behavior.
"""
from __future__ import annotations

import pytest

from school_console.base.cancellation import CancellationToken, CancelledError


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child1 = parent.child()
    child2 = parent.child()

    parent.cancel(reason="unit closed")
    parent.cancel(reason="ignored")

    assert parent.cancelled is True and parent.reason == "unit closed"  # nosec B101 - pytest assert in tests
    assert child1.cancelled is True and child1.reason == "unit closed"  # nosec B101 - pytest assert in tests
    assert child2.cancelled is True and child2.reason == "unit closed"  # nosec B101 - pytest assert in tests


def test_link_child_after_parent_cancel_immediately_cancels_child():
    parent = CancellationToken()
    parent.cancel("superseded")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled is True and late_child.reason == "superseded"  # nosec B101 - pytest assert in tests


def test_cancelling_child_leaves_parent_alone():
    parent = CancellationToken()
    child = parent.child()
    child.cancel("done")
    assert parent.cancelled is False  # nosec B101 - pytest assert in tests


def test_callbacks_run_once_and_late_callbacks_run_immediately():
    token = CancellationToken()
    seen = []
    token.add_callback(lambda reason: seen.append(("early", reason)))
    token.cancel("superseded")
    token.cancel("again")
    token.add_callback(lambda reason: seen.append(("late", reason)))
    assert seen == [("early", "superseded"), ("late", "superseded")]  # nosec B101 - pytest assert in tests


def test_failing_callback_does_not_block_the_rest():
    token = CancellationToken()
    seen = []

    def broken(_reason):
        raise RuntimeError("listener bug")

    token.add_callback(broken)
    token.add_callback(seen.append)
    token.cancel("stop")
    assert seen == ["stop"]  # nosec B101 - pytest assert in tests


def test_raise_if_cancelled_raises_custom_error():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(CancelledError, match="terminate"):
        token.raise_if_cancelled()


def test_cancelled_error_is_a_runtime_error():
    assert issubclass(CancelledError, RuntimeError)  # nosec B101 - pytest assert in tests
