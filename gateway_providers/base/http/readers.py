"""Transport reader adapters feeding the streaming decoders.

A decoder pulls text chunks through the :class:`TransportReader` protocol:
``read()`` returns ``(chunk, None)`` for data, ``(None, None)`` for a clean end
of stream and ``(None, exc)`` for an I/O failure. Readers never raise from
``read()``; failures are returned so the decoder can classify and surface them.

Closing a reader is the only cancellation mechanism: a closed reader reports
end of stream on its next ``read()``.
"""
from __future__ import annotations

import codecs
from typing import Iterable, Iterator, Optional, Protocol, Tuple, Union, runtime_checkable

import httpx

ReadResult = Tuple[Optional[str], Optional[BaseException]]


@runtime_checkable
class TransportReader(Protocol):
    """Pull-based source of text chunks from a live connection."""

    def read(self) -> ReadResult:  # pragma: no cover - protocol
        ...


class IterableReader:
    """Adapt any iterable of ``str`` or ``bytes`` chunks to :class:`TransportReader`.

    Bytes are decoded as UTF-8 incrementally, so a multi-byte character split
    across two chunks is reassembled. Exceptions raised by the iterable are
    returned as the ``err`` half of the read result.
    """

    def __init__(self, chunks: Iterable[Union[str, bytes]], encoding: str = "utf-8") -> None:
        self._iter: Optional[Iterator[Union[str, bytes]]] = iter(chunks)
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    def read(self) -> ReadResult:
        if self._iter is None:
            return None, None
        try:
            chunk = next(self._iter)
        except StopIteration:
            tail = self._decoder.decode(b"", final=True)
            self._iter = None
            return (tail, None) if tail else (None, None)
        except Exception as exc:  # noqa: BLE001 - surfaced to the decoder, not swallowed
            self._iter = None
            return None, exc
        if isinstance(chunk, bytes):
            return self._decoder.decode(chunk), None
        return chunk, None

    def close(self) -> None:
        it, self._iter = self._iter, None
        close = getattr(it, "close", None)
        if callable(close):
            close()


class HttpxStreamReader(IterableReader):
    """Read text chunks from a streaming ``httpx.Response``.

    The response must have been opened with ``client.stream(...)`` (or
    ``send(..., stream=True)``). ``httpx`` transport errors are returned from
    ``read()``; :meth:`close` closes the underlying response.
    """

    def __init__(self, response: httpx.Response) -> None:
        super().__init__(response.iter_text())
        self.response = response

    @property
    def headers(self) -> httpx.Headers:
        return self.response.headers

    def close(self) -> None:
        super().close()
        self.response.close()


__all__ = ["ReadResult", "TransportReader", "IterableReader", "HttpxStreamReader"]
