"""ToolCallAssembler: builder resolution, emission triggers and at-most-once."""
from __future__ import annotations

import pytest

from gateway_providers.base.logging import get_logger
from gateway_providers.base.streaming import ToolCallAssembler, ToolCallDelta


def _assembler(**kwargs):
    emitted = []
    return ToolCallAssembler(emitted.append, **kwargs), emitted


def test_fragments_concatenate_in_arrival_order():
    asm, emitted = _assembler(parse_heuristic=False)
    for fragment in ['{"a"', ": [1,", " 2]", "}"]:
        asm.apply(ToolCallDelta(index=0, id="c1" if fragment.startswith("{") else None, name="f", args_fragment=fragment))
    asm.sweep()

    assert [c.arguments for c in emitted] == ['{"a": [1, 2]}']  # nosec B101


def test_name_is_immutable_once_set():
    asm, emitted = _assembler(parse_heuristic=False)
    asm.apply(ToolCallDelta(index=0, id="c1", name="first"))
    asm.apply(ToolCallDelta(index=0, name="second", args_fragment="{}"))
    asm.sweep()

    assert emitted[0].name == "first"  # nosec B101


def test_index_fallback_picks_latest_builder_with_index():
    asm, emitted = _assembler(parse_heuristic=False)
    asm.apply(ToolCallDelta(index=0, id="old", name="a"))
    asm.apply(ToolCallDelta(index=0, id="new", name="b"))
    asm.apply(ToolCallDelta(index=0, args_fragment="{}"))
    asm.sweep()

    args = {c.id: c.arguments for c in emitted}
    assert args == {"old": "", "new": "{}"}  # nosec B101


def test_orphan_fragments_are_dropped(log_capture, log_events):
    emitted = []
    asm = ToolCallAssembler(emitted.append, logger=get_logger("gateway.test.tools"))
    asm.apply(ToolCallDelta(index=3, args_fragment="{}"))
    asm.apply(ToolCallDelta(index=None, args_fragment="{}"))
    asm.sweep()

    assert emitted == []  # nosec B101
    assert asm.builders == ()  # nosec B101
    orphans = [e for e in log_events(log_capture) if e["event"] == "stream.tool_call.orphan"]
    assert len(orphans) == 2  # nosec B101


def test_parse_heuristic_requires_object_or_array():
    asm, emitted = _assembler()
    asm.apply(ToolCallDelta(index=0, id="c1", name="f", args_fragment="12"))
    assert emitted == []  # nosec B101
    asm.apply(ToolCallDelta(index=0, args_fragment="3"))
    asm.apply(ToolCallDelta(index=1, id="c2", name="g", args_fragment="[1]"))
    assert [c.id for c in emitted] == ["c2"]  # nosec B101


def test_heuristic_waits_for_name():
    asm, emitted = _assembler()
    asm.apply(ToolCallDelta(index=0, id="c1", args_fragment="{}"))
    assert emitted == []  # nosec B101
    asm.apply(ToolCallDelta(index=0, name="late_name"))
    asm.sweep()
    assert [(c.name, c.arguments) for c in emitted] == [("late_name", "{}")]  # nosec B101


def test_unnamed_builders_are_never_emitted():
    asm, emitted = _assembler()
    asm.apply(ToolCallDelta(index=0, id="c1", args_fragment='{"x": 1}'))
    asm.finish_choice()
    asm.sweep()
    assert emitted == []  # nosec B101


def test_end_call_emits_only_that_call():
    asm, emitted = _assembler(parse_heuristic=False)
    asm.apply(ToolCallDelta(index=0, id="a", name="fa", args_fragment='{"x"'))
    asm.apply(ToolCallDelta(index=1, id="b", name="fb", args_fragment="{}"))
    asm.end_call(1)
    assert [c.id for c in emitted] == ["b"]  # nosec B101
    asm.end_call(1)
    asm.end_call(7)
    assert len(emitted) == 1  # nosec B101


def test_duplicate_triggers_emit_once():
    asm, emitted = _assembler()
    asm.apply(ToolCallDelta(index=0, id="c1", name="f", args_fragment="{}"))
    asm.end_call(0)
    asm.finish_choice()
    asm.sweep()
    asm.sweep()
    assert len(emitted) == 1  # nosec B101
    assert len(asm.emitted) == 1  # nosec B101


def test_late_fragments_append_but_do_not_reemit():
    asm, emitted = _assembler()
    asm.apply(ToolCallDelta(index=0, id="c1", name="f", args_fragment="{}"))
    asm.apply(ToolCallDelta(index=0, args_fragment="{}"))
    asm.sweep()
    assert len(emitted) == 1  # nosec B101
    assert asm.builders[0].arguments == "{}{}"  # nosec B101
    assert emitted[0].arguments == "{}"  # nosec B101


def test_sweep_follows_creation_order():
    asm, emitted = _assembler(parse_heuristic=False)
    for index, call_id in ((2, "z"), (0, "a"), (1, "m")):
        asm.apply(ToolCallDelta(index=index, id=call_id, name=call_id))
    asm.sweep()
    assert [c.id for c in emitted] == ["z", "a", "m"]  # nosec B101


def test_builder_marked_sent_before_sink_runs():
    calls = []

    def failing_sink(call):
        calls.append(call)
        raise RuntimeError("sink down")

    asm = ToolCallAssembler(failing_sink, parse_heuristic=False)
    asm.apply(ToolCallDelta(index=0, id="c1", name="f"))
    with pytest.raises(RuntimeError):
        asm.sweep()
    asm.sweep()
    assert len(calls) == 1  # nosec B101
    assert asm.builders[0].sent is True  # nosec B101
