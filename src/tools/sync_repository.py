"""MCP tool that synchronizes the local mirror with the remote repository.

Registers the 'sync' tool: clone when no working copy exists yet,
otherwise pull the configured branch.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.dispatcher import ToolDispatcher
from core.interfaces import Mirror


def register(dispatcher: ToolDispatcher, *, mirror: Mirror) -> None:
    @dispatcher.tool(
        name="sync",
        description="Sync the local mirror with the latest Rootz project repository",
        input_schema={"type": "object", "properties": {}},
    )
    async def sync(arguments: Mapping[str, Any]) -> str:
        """Clone or pull the mirror and return a confirmation line.

        Raises:
          SyncError when neither clone nor pull succeeds.
        """
        await mirror.ensure_synced()
        s = mirror.state
        return f"Repository synced: {s.remote_url} ({s.branch}) -> {s.local_root}"
