import mcp.types as types
import pytest

import server.server as server_mod
from core.errors import UnknownToolError


@pytest.fixture
def wired(fake_mirror):
    return server_mod.build_dispatcher(mirror=fake_mirror)


def test_build_dispatcher_registers_catalog(wired):
    assert wired.names() == ("sync", "get-file-content", "analyze-html-structure")


def test_create_server_uses_service_name(wired):
    srv = server_mod.create_server(wired)
    assert srv.name == "rootz-mcp-server"


@pytest.mark.asyncio
async def test_list_tools_bridge_maps_descriptors(wired):
    tools = await server_mod.list_tools_bridge(wired)

    assert [t.name for t in tools] == ["sync", "get-file-content", "analyze-html-structure"]
    assert tools[1].inputSchema["required"] == ["file_path"]
    assert tools[1].description


@pytest.mark.asyncio
async def test_call_tool_bridge_returns_text_content(wired, fake_mirror):
    (fake_mirror.root / "a.txt").write_text("hello", encoding="utf-8")

    out = await server_mod.call_tool_bridge(wired, "get-file-content", {"file_path": "a.txt"})

    assert len(out) == 1
    assert out[0].type == "text"
    assert out[0].text == "File: a.txt\n\nhello"


@pytest.mark.asyncio
async def test_call_tool_bridge_raises_error_response_text(wired):
    with pytest.raises(server_mod.ToolExecutionError) as exc_info:
        await server_mod.call_tool_bridge(wired, "get-file-content", {"file_path": "missing.txt"})

    assert str(exc_info.value) == "Error: File not found: missing.txt"


@pytest.mark.asyncio
async def test_call_tool_bridge_propagates_unknown_tool(wired):
    with pytest.raises(UnknownToolError):
        await server_mod.call_tool_bridge(wired, "delete-everything", None)


@pytest.mark.asyncio
async def test_initial_sync_failure_is_logged_not_raised(failing_mirror):
    messages = []
    handler_id = server_mod.logger.add(messages.append, level="WARNING")
    try:
        await server_mod.initial_sync(failing_mirror)
    finally:
        server_mod.logger.remove(handler_id)

    assert failing_mirror.sync_calls == 1
    assert messages and "remote unreachable" in messages[0]


@pytest.mark.asyncio
async def test_initial_sync_success(fake_mirror):
    await server_mod.initial_sync(fake_mirror)
    assert fake_mirror.state.synced is True


def test_build_mirror_uses_config(monkeypatch, tmp_path):
    monkeypatch.setattr(server_mod, "REPO_URL", "https://example.com/other.git")
    monkeypatch.setattr(server_mod, "REPO_BRANCH", "develop")
    monkeypatch.setattr(server_mod, "MIRROR_DIR", tmp_path / "m")

    m = server_mod.build_mirror()

    assert m.state.remote_url == "https://example.com/other.git"
    assert m.state.branch == "develop"
    assert m.root == (tmp_path / "m").resolve()


def test_create_server_registers_tool_handlers(wired):
    srv = server_mod.create_server(wired)

    assert types.ListToolsRequest in srv.request_handlers
    assert types.CallToolRequest in srv.request_handlers


@pytest.mark.asyncio
async def test_list_tools_bridge_builds_sdk_tool_models(wired):
    tools = await server_mod.list_tools_bridge(wired)

    assert all(isinstance(t, types.Tool) for t in tools)
    assert tools[0].inputSchema == {"type": "object", "properties": {}}
