"""Token usage accounting and finish-reason tracking for streamed responses.

Vendors report usage on events separate from content, often only on a final
or trailing event. :class:`UsageFinishExtractor` keeps the latest value of
each (last writer wins, no merging) with one exception: a reasoning-token
count seen on any usage event survives onto the final usage.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class UsageInfo:
    """Normalized token usage of one response."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    thinking_tokens: Optional[int] = None
    cache_read_tokens: int = 0
    cache_write_tokens: int = 0

    @classmethod
    def build(
        cls,
        *,
        prompt: int,
        completion: int,
        total: Optional[int] = None,
        thinking: Optional[int] = None,
        cache_read: int = 0,
        cache_write: Optional[int] = None,
    ) -> "UsageInfo":
        """Create a usage record, deriving the fields the vendor left out.

        With a reasoning-token count the total is always
        ``prompt + completion + thinking``; otherwise the vendor total is kept and
        defaults to ``prompt + completion``. When
        ``cache_write`` is not reported it is the uncached share of the prompt,
        and only when part of the prompt was served from cache.
        """
        if thinking is not None:
            total = prompt + completion + thinking
        elif total is None:
            total = prompt + completion
        if cache_write is None:
            cache_write = max(0, prompt - cache_read) if cache_read > 0 else 0
        return cls(
            prompt_tokens=prompt,
            completion_tokens=completion,
            total_tokens=total,
            thinking_tokens=thinking,
            cache_read_tokens=cache_read,
            cache_write_tokens=cache_write,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
            "cache_read_tokens": self.cache_read_tokens,
            "cache_write_tokens": self.cache_write_tokens,
        }
        if self.thinking_tokens is not None:
            data["thinking_tokens"] = self.thinking_tokens
        return data


def _int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return None


def _nested_int(raw: Mapping[str, Any], outer: str, inner: str) -> Optional[int]:
    details = raw.get(outer)
    if isinstance(details, Mapping):
        return _int(details.get(inner))
    return None


def usage_from_openai(raw: Mapping[str, Any]) -> UsageInfo:
    """Map an OpenAI-style ``usage`` object.

    ``completion_tokens_details.reasoning_tokens`` becomes ``thinking_tokens``
    and ``prompt_tokens_details.cached_tokens`` becomes ``cache_read_tokens``.
    """
    return UsageInfo.build(
        prompt=_int(raw.get("prompt_tokens")) or 0,
        completion=_int(raw.get("completion_tokens")) or 0,
        total=_int(raw.get("total_tokens")),
        thinking=_nested_int(raw, "completion_tokens_details", "reasoning_tokens"),
        cache_read=_nested_int(raw, "prompt_tokens_details", "cached_tokens") or 0,
    )


def usage_from_anthropic(raw: Mapping[str, Any]) -> UsageInfo:
    """Map an Anthropic Messages ``usage`` object (cache split is reported)."""
    return UsageInfo.build(
        prompt=_int(raw.get("input_tokens")) or 0,
        completion=_int(raw.get("output_tokens")) or 0,
        cache_read=_int(raw.get("cache_read_input_tokens")) or 0,
        cache_write=_int(raw.get("cache_creation_input_tokens")),
    )


class FinishReason(str, Enum):
    """Vendor-neutral cause of generation termination."""

    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "filtered"
    TOOL_CALL = "tool_call"
    ERROR = "error"


_FINISH_REASON_MAP: Dict[str, FinishReason] = {
    # OpenAI-compatible
    "stop": FinishReason.STOP,
    "length": FinishReason.LENGTH,
    "content_filter": FinishReason.CONTENT_FILTER,
    "tool_calls": FinishReason.TOOL_CALL,
    "function_call": FinishReason.TOOL_CALL,
    # Anthropic
    "end_turn": FinishReason.STOP,
    "stop_sequence": FinishReason.STOP,
    "max_tokens": FinishReason.LENGTH,
    "tool_use": FinishReason.TOOL_CALL,
    "refusal": FinishReason.CONTENT_FILTER,
}


def normalize_finish_reason(reason: Optional[str]) -> Optional[FinishReason]:
    """Map a vendor finish reason; unknown values map to ``ERROR``."""
    if reason is None:
        return None
    return _FINISH_REASON_MAP.get(reason, FinishReason.ERROR)


class UsageFinishExtractor:
    """Track the latest finish reason and usage of one decode invocation."""

    def __init__(self) -> None:
        self.finish_reason: Optional[str] = None
        self._usage: Optional[UsageInfo] = None
        self._thinking_tokens: Optional[int] = None

    def record_finish(self, reason: str) -> None:
        self.finish_reason = reason

    def record_usage(self, usage: UsageInfo) -> None:
        self._usage = usage
        if usage.thinking_tokens is not None:
            self._thinking_tokens = usage.thinking_tokens

    @property
    def usage(self) -> Optional[UsageInfo]:
        """Latest usage with any previously seen reasoning-token count restored."""
        if self._usage is None:
            return None
        if self._usage.thinking_tokens is None and self._thinking_tokens is not None:
            latest = self._usage
            return replace(
                latest,
                thinking_tokens=self._thinking_tokens,
                total_tokens=latest.prompt_tokens + latest.completion_tokens + self._thinking_tokens,
            )
        return self._usage


__all__ = [
    "UsageInfo",
    "usage_from_openai",
    "usage_from_anthropic",
    "FinishReason",
    "normalize_finish_reason",
    "UsageFinishExtractor",
]
