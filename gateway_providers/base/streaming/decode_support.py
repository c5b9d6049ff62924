"""Vendor-neutral streaming decode loop.

:class:`BaseStreamDecoder` owns everything that does not depend on the wire
dialect: pulling chunks from a :class:`TransportReader`, splitting records,
routing decoded events to the accumulators, sweeping tool calls at the end,
and producing exactly one of ``on_done`` / ``on_error``. Subclasses implement
:meth:`BaseStreamDecoder.translate`, which maps one parsed payload to zero or
more :mod:`events`.

Every call to :meth:`BaseStreamDecoder.decode` builds fresh state, so one
decoder instance can serve any number of sequential or concurrent decodes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

from ...config.defaults import (
    ERROR_SNIPPET_MAX_CHARS,
    SKIPPED_RECORD_PREVIEW_CHARS,
    SSE_DONE_MARKER,
)
from ...config.env import get_stream_settings
from ..dto import ToolCall
from ..errors import ErrorInfo, error_info_from_envelope, error_info_from_exception
from ..http import TransportReader, extract_response_metadata
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from .content import ContentAccumulator
from .events import (
    ContentDelta,
    DoneSignal,
    ErrorSignal,
    FinishSignal,
    ReasoningDelta,
    StreamEvent,
    ToolCallDelta,
    ToolCallEnd,
    UsageSignal,
)
from .line_splitter import EventLineSplitter, SplitBatch, decode_json_payload
from .reasoning import ReasoningAccumulator
from .result import StreamDecodeOutcome, StreamResult
from .sinks import StreamSinks
from .streaming_metrics import StreamMetrics
from .tool_calls import ToolCallAssembler
from .usage import UsageFinishExtractor


@dataclass
class DecodeState:
    """Per-invocation state shared by the decode loop and vendor translators.

    ``scratch`` is reserved for translators that need to remember protocol
    context between records (e.g. which content block is a tool call).
    """

    content: ContentAccumulator
    tools: ToolCallAssembler
    usage: UsageFinishExtractor
    reasoning: ReasoningAccumulator
    metrics: StreamMetrics
    metadata: Dict[str, Any]
    ctx: LogContext
    scratch: Dict[str, Any] = field(default_factory=dict)
    error: Optional[ErrorInfo] = None
    done: bool = False

    @property
    def stopped(self) -> bool:
        return self.done or self.error is not None


class BaseStreamDecoder:
    """Shared decode loop; subclasses provide the vendor dialect."""

    provider: str = "vendor"
    # Raw finish reasons meaning "the choice ended with tool calls".
    tool_call_finish_reasons: FrozenSet[str] = frozenset()
    default_parse_heuristic: bool = True

    def __init__(
        self,
        *,
        model: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
        parse_heuristic: Optional[bool] = None,
    ) -> None:
        self.model = model
        self.logger = logger or get_logger("gateway.streaming")
        self.ctx = ctx or LogContext(provider=self.provider, model=model)
        self.parse_heuristic = self.default_parse_heuristic if parse_heuristic is None else parse_heuristic

    # ---- vendor hook ----

    def translate(self, payload: Dict[str, Any], state: DecodeState) -> Iterable[StreamEvent]:
        """Map one decoded record payload to stream events."""
        raise NotImplementedError

    # ---- public API ----

    def decode(
        self,
        reader: TransportReader,
        sinks: Optional[StreamSinks] = None,
        *,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> StreamDecodeOutcome:
        """Consume ``reader`` until the stream ends, fails, or sends its done marker.

        Parameters:
            reader: Source of text chunks.
            sinks: Callbacks for incremental output; all default to no-ops.
            metadata: Initial ``StreamResult.metadata``. When omitted and the
                reader exposes ``headers``, metadata is extracted from them.

        Returns:
            ``(content, None, result)`` on success, ``(None, error, None)`` on
            failure. Exceptions raised by sinks propagate unchanged.
        """
        sinks = sinks or StreamSinks()
        if metadata is None:
            headers = getattr(reader, "headers", None)
            metadata = extract_response_metadata(headers) if headers is not None else {}
        state = self._new_state(sinks, dict(metadata))
        log_event(
            self.logger,
            "stream.decode.start",
            state.ctx,
            parse_heuristic=self.parse_heuristic,
        )

        splitter = EventLineSplitter()
        while not state.stopped:
            chunk, err = reader.read()
            if err is not None:
                state.error = error_info_from_exception(err)
                break
            if chunk is None:
                self._consume(splitter.flush(), state)
                break
            if not chunk:
                continue
            self._consume(splitter.feed(chunk), state)

        if state.error is not None:
            return self._fail(state, sinks)
        return self._finish(state, sinks)

    # ---- internals ----

    def _new_state(self, sinks: StreamSinks, metadata: Dict[str, Any]) -> DecodeState:
        metrics = StreamMetrics()
        ctx = self.ctx.bind(request_id=metadata.get("request_id"))

        def on_content(text: str) -> None:
            metrics.mark_output()
            metrics.content_deltas += 1
            sinks.on_content(text)

        def on_tool_call(call: ToolCall) -> None:
            metrics.mark_output()
            metrics.tool_calls_emitted += 1
            sinks.on_tool_call(call)

        return DecodeState(
            content=ContentAccumulator(on_content),
            tools=ToolCallAssembler(
                on_tool_call,
                parse_heuristic=self.parse_heuristic,
                logger=self.logger,
                ctx=ctx,
            ),
            usage=UsageFinishExtractor(),
            reasoning=ReasoningAccumulator(sinks.on_reasoning),
            metrics=metrics,
            metadata=metadata,
            ctx=ctx,
        )

    def _consume(self, batch: SplitBatch, state: DecodeState) -> None:
        if batch.error is not None:
            state.error = error_info_from_envelope(
                batch.error,
                request_id=state.metadata.get("request_id"),
                metadata=state.metadata,
            )
            return
        for record in batch.records:
            state.metrics.records += 1
            if record == SSE_DONE_MARKER:
                self._dispatch(DoneSignal(), state)
                return
            payload = decode_json_payload(record)
            if payload is None:
                state.metrics.skipped_records += 1
                log_event(
                    self.logger,
                    "stream.record.skipped",
                    state.ctx,
                    level=logging.DEBUG,
                    preview=record[:SKIPPED_RECORD_PREVIEW_CHARS],
                )
                continue
            for event in self.translate(payload, state):
                self._dispatch(event, state)
                if state.stopped:
                    return

    def _dispatch(self, event: StreamEvent, state: DecodeState) -> None:
        if isinstance(event, ContentDelta):
            state.content.append(event.text)
        elif isinstance(event, ToolCallDelta):
            state.tools.apply(event)
        elif isinstance(event, ToolCallEnd):
            state.tools.end_call(event.index)
        elif isinstance(event, ReasoningDelta):
            state.reasoning.append(event)
        elif isinstance(event, FinishSignal):
            state.usage.record_finish(event.reason)
            if event.reason in self.tool_call_finish_reasons:
                state.tools.finish_choice()
        elif isinstance(event, UsageSignal):
            state.usage.record_usage(event.usage)
        elif isinstance(event, ErrorSignal):
            state.error = event.info
        elif isinstance(event, DoneSignal):
            state.tools.sweep()
            state.done = True

    def _finish(self, state: DecodeState, sinks: StreamSinks) -> StreamDecodeOutcome:
        state.tools.sweep()
        state.metrics.finish()
        result = StreamResult(
            content=state.content.text,
            finish_reason=state.usage.finish_reason,
            usage=state.usage.usage,
            metadata=state.metadata,
            tool_calls=state.tools.emitted,
            reasoning_details=state.reasoning.details,
        )
        normalized_log_event(
            self.logger,
            "stream.decode.end",
            state.ctx,
            phase="finalize",
            emitted=state.metrics.emitted,
            tokens=result.usage,
            finish_reason=result.finish_reason,
            done_marker=state.done,
            **state.metrics.to_dict(),
        )
        sinks.on_done(result)
        return StreamDecodeOutcome(result.content, None, result)

    def _fail(self, state: DecodeState, sinks: StreamSinks) -> StreamDecodeOutcome:
        info = state.error
        if info is None:
            raise RuntimeError("decode failed without error info")
        state.metrics.finish()
        normalized_log_event(
            self.logger,
            "stream.decode.error",
            state.ctx,
            phase="finalize",
            error_code=info.kind.value,
            emitted=state.metrics.emitted,
            level=logging.WARNING,
            status_code=info.status_code,
            error=info.message[:ERROR_SNIPPET_MAX_CHARS],
            **state.metrics.to_dict(),
        )
        sinks.on_error(info)
        return StreamDecodeOutcome(None, info, None)


def resolve_parse_heuristic(default: bool = True) -> bool:
    """Parse-heuristic default for OpenAI-style decoders, honoring the env toggle."""
    return default and get_stream_settings().parse_heuristic


__all__ = ["DecodeState", "BaseStreamDecoder", "resolve_parse_heuristic"]
