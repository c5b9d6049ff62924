"""Tool-call assembly from fragmented, interleaved stream deltas.

Vendors stream a tool call as a sequence of fragments: the first one carries
the call id (and usually the name), later ones often carry only the call's
``index`` plus a piece of the argument text. Fragments of several calls may
interleave. :class:`ToolCallAssembler` keeps one :class:`ToolCallBuilder` per
call id and emits each call to the sink at most once.

Emission triggers, strongest first:

1. an explicit end signal: a per-call end (:meth:`ToolCallAssembler.end_call`)
   or the choice finishing with tool calls (:meth:`ToolCallAssembler.finish_choice`);
2. the parse heuristic, when enabled: the accumulated arguments parse as a
   JSON object or array;
3. the final sweep at the done marker and again at end of input.

A builder is marked ``sent`` before the sink is invoked, so a sink that
raises never causes a second emission.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..dto import ToolCall
from ..logging import LogContext, log_event
from .events import ToolCallDelta


@dataclass
class ToolCallBuilder:
    """Mutable accumulator for one tool call; owned by a single decode."""

    id: str
    index: Optional[int] = None
    name: Optional[str] = None
    arguments: str = ""
    sent: bool = False

    def arguments_parse(self) -> bool:
        """Whether the argument text is already a complete JSON object/array."""
        if not self.arguments.strip():
            return False
        try:
            value = json.loads(self.arguments)
        except ValueError:
            return False
        return isinstance(value, (dict, list))

    def to_tool_call(self) -> ToolCall:
        return ToolCall(id=self.id, name=self.name or "", arguments=self.arguments, index=self.index)


class ToolCallAssembler:
    """Reconstruct tool calls and emit each exactly once through ``on_emit``."""

    def __init__(
        self,
        on_emit: Callable[[ToolCall], Any],
        *,
        parse_heuristic: bool = True,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._on_emit = on_emit
        self.parse_heuristic = parse_heuristic
        self._logger = logger
        self._ctx = ctx
        # dict order is creation order, which the sweep relies on
        self._builders: Dict[str, ToolCallBuilder] = {}
        self._emitted: List[ToolCall] = []

    @property
    def emitted(self) -> Tuple[ToolCall, ...]:
        return tuple(self._emitted)

    @property
    def builders(self) -> Tuple[ToolCallBuilder, ...]:
        return tuple(self._builders.values())

    def _by_index(self, index: Optional[int]) -> Optional[ToolCallBuilder]:
        if index is None:
            return None
        for builder in reversed(list(self._builders.values())):
            if builder.index == index:
                return builder
        return None

    def _resolve(self, delta: ToolCallDelta) -> Optional[ToolCallBuilder]:
        if delta.id:
            builder = self._builders.get(delta.id)
            if builder is None:
                builder = ToolCallBuilder(id=delta.id, index=delta.index)
                self._builders[delta.id] = builder
            elif builder.index is None and delta.index is not None:
                builder.index = delta.index
            return builder
        return self._by_index(delta.index)

    def apply(self, delta: ToolCallDelta) -> None:
        """Merge one fragment into its builder, emitting if the heuristic says it is complete."""
        builder = self._resolve(delta)
        if builder is None:
            if self._logger is not None:
                log_event(
                    self._logger,
                    "stream.tool_call.orphan",
                    self._ctx,
                    level=logging.DEBUG,
                    index=delta.index,
                    name=delta.name,
                )
            return
        if delta.name and builder.name is None:
            builder.name = delta.name
        if delta.args_fragment:
            builder.arguments += delta.args_fragment
        if self.parse_heuristic and builder.name and builder.arguments_parse():
            self._emit(builder)

    def end_call(self, index: int) -> None:
        """Explicit end of the call at ``index`` (e.g. ``content_block_stop``)."""
        builder = self._by_index(index)
        if builder is not None and builder.name:
            self._emit(builder)

    def finish_choice(self) -> None:
        """The choice finished with tool calls: every named call is complete."""
        self.sweep()

    def sweep(self) -> None:
        """Emit every named, unsent builder in creation order."""
        for builder in list(self._builders.values()):
            if builder.name:
                self._emit(builder)

    def _emit(self, builder: ToolCallBuilder) -> None:
        if builder.sent:
            return
        builder.sent = True
        call = builder.to_tool_call()
        self._emitted.append(call)
        self._on_emit(call)


__all__ = ["ToolCallBuilder", "ToolCallAssembler"]
