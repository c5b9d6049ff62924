"""DTO package for provider outputs."""

from .tool_call import ToolCall

__all__ = ["ToolCall"]
