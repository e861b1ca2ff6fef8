"""Server bootstrap for the Rootz MCP service.

Builds the repository mirror, file reader, HTML analyzer and tool
dispatcher, bridges the dispatcher to the MCP low-level server and runs
it over stdio (plus the optional health endpoint).
"""

from __future__ import annotations

import asyncio
import contextlib
import sys
from typing import Any, Dict, List, Optional

import mcp.types as types
from loguru import logger
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from analysis.html_structure import HtmlStructureAnalyzer
from clients.git_client import GitClient
from config import (
    GIT_BINARY,
    HEALTH_HOST,
    HEALTH_PORT,
    LOG_LEVEL,
    MAX_FILE_CHARS,
    MIRROR_DIR,
    REPO_BRANCH,
    REPO_URL,
    SYNC_ON_READ,
    SYNC_ON_STARTUP,
)
from core.dispatcher import ToolDispatcher
from core.errors import RootzMCPError, SyncError
from core.interfaces import Mirror
from core.models import ToolCallRequest
from server.health import build_health_server
from sources.file_reader import BoundedFileReader
from sources.repo_mirror import RepositoryMirror

from tools.analyze_html_structure import register as register_analyze_html_structure
from tools.get_file_content import register as register_get_file_content
from tools.sync_repository import register as register_sync

SERVER_NAME = "rootz-mcp-server"


class ToolExecutionError(RootzMCPError):
    """Carries an is_error tool response back through the MCP SDK."""


def build_mirror() -> RepositoryMirror:
    return RepositoryMirror(
        remote_url=REPO_URL,
        local_root=MIRROR_DIR,
        branch=REPO_BRANCH,
        git=GitClient(binary=GIT_BINARY),
    )


def build_dispatcher(*, mirror: Mirror) -> ToolDispatcher:
    reader = BoundedFileReader(mirror=mirror, max_chars=MAX_FILE_CHARS, sync_before_read=SYNC_ON_READ)
    analyzer = HtmlStructureAnalyzer(reader=reader)

    dispatcher = ToolDispatcher()
    register_sync(dispatcher, mirror=mirror)
    register_get_file_content(dispatcher, reader=reader)
    register_analyze_html_structure(dispatcher, analyzer=analyzer)
    return dispatcher


async def list_tools_bridge(dispatcher: ToolDispatcher) -> List[types.Tool]:
    return [
        types.Tool(name=d.name, description=d.description, inputSchema=dict(d.input_schema))
        for d in dispatcher.list_tools()
    ]


async def call_tool_bridge(
    dispatcher: ToolDispatcher,
    name: str,
    arguments: Optional[Dict[str, Any]],
) -> List[types.TextContent]:
    response = await dispatcher.call_tool(ToolCallRequest(tool_name=name, arguments=arguments or {}))
    if response.is_error:
        # The SDK turns a raised exception into CallToolResult(isError=True) with str(e) as text.
        raise ToolExecutionError(response.text)
    return [types.TextContent(type="text", text=block.text) for block in response.content]


def create_server(dispatcher: ToolDispatcher) -> Server:
    server: Server = Server(SERVER_NAME)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return await list_tools_bridge(dispatcher)

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        return await call_tool_bridge(dispatcher, name, arguments)

    return server


async def initial_sync(mirror: Mirror) -> None:
    try:
        await mirror.ensure_synced()
    except SyncError as e:
        logger.warning("Initial sync failed, call the 'sync' tool to retry: {}", e)
        return
    logger.info("Rootz project synced into {}", mirror.root)


def configure_logging(level: str = LOG_LEVEL) -> None:
    # stdout belongs to the MCP stdio stream
    logger.remove()
    logger.add(sys.stderr, level=level)


async def serve() -> None:
    mirror = build_mirror()
    server = create_server(build_dispatcher(mirror=mirror))

    sync_task = asyncio.create_task(initial_sync(mirror)) if SYNC_ON_STARTUP else None

    health_server = build_health_server(host=HEALTH_HOST, port=HEALTH_PORT) if HEALTH_PORT > 0 else None
    health_task = asyncio.create_task(health_server.serve()) if health_server is not None else None
    if health_server is not None:
        logger.info("Health endpoint on http://{}:{}/health", HEALTH_HOST, HEALTH_PORT)

    try:
        logger.info("Rootz MCP server running on stdio")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        if health_server is not None and health_task is not None:
            health_server.should_exit = True
            await health_task
        if sync_task is not None and not sync_task.done():
            sync_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sync_task


def main() -> None:
    configure_logging()
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
