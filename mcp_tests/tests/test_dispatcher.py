import pytest

from core.errors import MissingParameterError, NotFoundError, UnknownToolError
from core.models import ToolCallRequest


def _register_echo(dispatcher, calls):
    @dispatcher.tool(
        name="echo",
        description="Echo a value",
        input_schema={
            "type": "object",
            "properties": {"value": {"type": "string"}},
            "required": ["value"],
        },
    )
    async def echo(arguments):
        calls.append(dict(arguments))
        return f"echo: {arguments['value']}"


def test_list_tools_keeps_registration_order(dispatcher):
    @dispatcher.tool(name="b", description="B", input_schema={"type": "object", "properties": {}})
    async def b(arguments):
        return "b"

    @dispatcher.tool(name="a", description="A", input_schema={"type": "object", "properties": {}})
    async def a(arguments):
        return "a"

    assert [t.name for t in dispatcher.list_tools()] == ["b", "a"]
    assert dispatcher.names() == ("b", "a")


def test_duplicate_registration_rejected(dispatcher):
    _register_echo(dispatcher, [])
    with pytest.raises(ValueError):
        _register_echo(dispatcher, [])


@pytest.mark.asyncio
async def test_call_tool_success(dispatcher):
    calls = []
    _register_echo(dispatcher, calls)

    resp = await dispatcher.call_tool(ToolCallRequest(tool_name="echo", arguments={"value": "hi"}))

    assert resp.is_error is False
    assert resp.text == "echo: hi"
    assert resp.to_dict() == {"content": [{"type": "text", "text": "echo: hi"}], "isError": False}
    assert calls == [{"value": "hi"}]


@pytest.mark.asyncio
async def test_unknown_tool_raises_without_side_effects(dispatcher):
    calls = []
    _register_echo(dispatcher, calls)

    with pytest.raises(UnknownToolError):
        await dispatcher.call_tool(ToolCallRequest(tool_name="nope", arguments={"value": "hi"}))
    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("arguments", [{}, {"value": None}, {"value": ""}, {"value": "   "}])
async def test_missing_parameter_checked_before_handler(dispatcher, arguments):
    calls = []
    _register_echo(dispatcher, calls)

    with pytest.raises(MissingParameterError):
        await dispatcher.call_tool(ToolCallRequest(tool_name="echo", arguments=arguments))
    assert calls == []


@pytest.mark.asyncio
async def test_handler_failure_becomes_error_response(dispatcher):
    @dispatcher.tool(name="boom", description="Fails", input_schema={"type": "object", "properties": {}})
    async def boom(arguments):
        raise NotFoundError("File not found: x.txt")

    resp = await dispatcher.call_tool(ToolCallRequest(tool_name="boom"))

    assert resp.is_error is True
    assert resp.text == "Error: File not found: x.txt"


@pytest.mark.asyncio
async def test_handler_failure_without_message_is_not_empty(dispatcher):
    @dispatcher.tool(name="boom", description="Fails", input_schema={"type": "object", "properties": {}})
    async def boom(arguments):
        raise RuntimeError()

    resp = await dispatcher.call_tool(ToolCallRequest(tool_name="boom"))

    assert resp.is_error is True
    assert resp.text == "Error: RuntimeError"
