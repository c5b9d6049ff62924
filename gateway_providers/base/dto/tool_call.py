"""DTO describing a fully assembled tool/function call.

A :class:`ToolCall` is what a streaming decoder hands to ``on_tool_call`` once
all argument fragments of one invocation have been collected. ``arguments``
is kept as the raw JSON text the model produced; parsing is left to the
caller because the text is not guaranteed to be valid.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolCall(BaseModel):
    """A named invocation emitted by the model.

    Parameters
    ----------
    id:
        Vendor call identifier, used to correlate the tool result.
    name:
        The function/tool name.
    arguments:
        Concatenated argument text in arrival order (usually JSON).
    index:
        Position of the call within the assistant turn.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    arguments: str = ""
    index: Optional[int] = Field(default=None, exclude=True)

    def parsed_arguments(self) -> Dict[str, Any]:
        """Decode ``arguments`` as a JSON object.

        An empty argument string is a call without parameters and yields ``{}``.

        Raises:
            ValueError: if the text is not valid JSON or not an object.
        """
        if not self.arguments.strip():
            return {}
        value = json.loads(self.arguments)
        if not isinstance(value, dict):
            raise ValueError(f"tool call arguments for {self.name!r} are not a JSON object")
        return value


__all__ = ["ToolCall"]
