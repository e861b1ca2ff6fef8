"""Tool registry and dispatcher.

Maps tool names to their description, JSON input schema and async
handler. `call_tool` validates required arguments, runs the handler and
folds both outcomes into a ToolCallResponse. Handler failures come back as
`is_error` responses; unknown tools and missing arguments are raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping

from loguru import logger

from core.errors import MissingParameterError, UnknownToolError
from core.models import ToolCallRequest, ToolCallResponse, ToolDescriptor

ToolHandler = Callable[[Mapping[str, Any]], Awaitable[str]]


@dataclass(frozen=True)
class _ToolEntry:
    descriptor: ToolDescriptor
    handler: ToolHandler


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class ToolDispatcher:
    def __init__(self) -> None:
        # dict preserves registration order for list_tools()
        self._tools: Dict[str, _ToolEntry] = {}

    def tool(
        self,
        *,
        name: str,
        description: str,
        input_schema: Mapping[str, Any],
    ) -> Callable[[ToolHandler], ToolHandler]:
        def _decorator(fn: ToolHandler) -> ToolHandler:
            if name in self._tools:
                raise ValueError(f"Tool already registered: {name}")
            descriptor = ToolDescriptor(name=name, description=description, input_schema=dict(input_schema))
            self._tools[name] = _ToolEntry(descriptor=descriptor, handler=fn)
            return fn

        return _decorator

    def list_tools(self) -> List[ToolDescriptor]:
        return [entry.descriptor for entry in self._tools.values()]

    def names(self) -> tuple:
        return tuple(self._tools.keys())

    async def call_tool(self, request: ToolCallRequest) -> ToolCallResponse:
        entry = self._tools.get(request.tool_name)
        if entry is None:
            raise UnknownToolError(f"Unknown tool: {request.tool_name}")

        arguments = dict(request.arguments or {})
        required = entry.descriptor.input_schema.get("required", [])
        for param in required:
            if _is_blank(arguments.get(param)):
                raise MissingParameterError(f"Missing required parameter '{param}' for tool '{request.tool_name}'")

        logger.debug("Calling tool {} with {}", request.tool_name, arguments)
        try:
            text = await entry.handler(arguments)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.warning("Tool {} failed: {}", request.tool_name, message)
            return ToolCallResponse.error(f"Error: {message}")

        return ToolCallResponse.ok(text)
