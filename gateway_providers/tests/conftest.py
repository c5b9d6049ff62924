"""Shared fixtures for the gateway providers test suite.

- ``log_capture``: records emitted through the shared ``gateway`` logger.
- ``make_reader``: builds an :class:`IterableReader` over literal chunks.
- ``collecting_sinks``: :class:`StreamSinks` whose callbacks append to lists.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, List, Union

import pytest

from gateway_providers.base.http import IterableReader
from gateway_providers.base.logging import get_logger
from gateway_providers.base.streaming import StreamSinks


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def log_capture(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[logging.LogRecord]]:
    """Capture records of the ``gateway`` logger at DEBUG level."""
    monkeypatch.setenv("GATEWAY_LOG_LEVEL", "DEBUG")
    base = get_logger()
    handler = _ListHandler()
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    try:
        yield handler.records
    finally:
        base.removeHandler(handler)
        base.setLevel(previous)


def events_of(records: Iterable[logging.LogRecord]) -> List[dict]:
    """Decode JSON log lines into payload dicts, ignoring non-JSON records."""
    out: List[dict] = []
    for record in records:
        try:
            out.append(json.loads(record.getMessage()))
        except ValueError:
            continue
    return out


@pytest.fixture()
def log_events() -> Callable[[Iterable[logging.LogRecord]], List[dict]]:
    return events_of


class _RaisingIterable:
    def __init__(self, chunks: Iterable[Union[str, bytes]], exc: BaseException) -> None:
        self._chunks = list(chunks)
        self._exc = exc

    def __iter__(self) -> Iterator[Union[str, bytes]]:
        yield from self._chunks
        raise self._exc


@pytest.fixture()
def make_reader() -> Callable[..., IterableReader]:
    """``make_reader(*chunks, error=None)``; ``error`` is raised after the chunks."""

    def _make(*chunks: Union[str, bytes], error: BaseException = None) -> IterableReader:
        if error is not None:
            return IterableReader(_RaisingIterable(chunks, error))
        return IterableReader(list(chunks))

    return _make


@dataclass
class Collected:
    content: List[str] = field(default_factory=list)
    tool_calls: List[Any] = field(default_factory=list)
    reasoning: List[str] = field(default_factory=list)
    errors: List[Any] = field(default_factory=list)
    done: List[Any] = field(default_factory=list)

    def sinks(self) -> StreamSinks:
        return StreamSinks(
            on_content=self.content.append,
            on_tool_call=self.tool_calls.append,
            on_reasoning=self.reasoning.append,
            on_error=self.errors.append,
            on_done=self.done.append,
        )


@pytest.fixture()
def collected() -> Collected:
    return Collected()
