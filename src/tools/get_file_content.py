"""MCP tool that reads a text file from the repository mirror.

Registers the 'get-file-content' tool which returns the file contents
capped at the reader's size limit, with a marker when content was cut.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.dispatcher import ToolDispatcher
from core.interfaces import FileReader
from core.models import FileReadResult

TRUNCATION_MARKER = "\n\n--- [File truncated] ---"


def format_file_content(result: FileReadResult) -> str:
    body = result.content + (TRUNCATION_MARKER if result.truncated else "")
    return f"File: {result.requested_path}\n\n{body}"


def register(dispatcher: ToolDispatcher, *, reader: FileReader) -> None:
    @dispatcher.tool(
        name="get-file-content",
        description="Get content of any file from the Rootz project",
        input_schema={
            "type": "object",
            "properties": {
                "file_path": {"type": "string", "description": "Relative path to file"},
            },
            "required": ["file_path"],
        },
    )
    async def get_file_content(arguments: Mapping[str, Any]) -> str:
        """Read a file relative to the mirror root.

        Params:
          - file_path: path relative to the repository root (required).

        Returns:
          "File: <path>" followed by a blank line and the (possibly truncated) content.

        Raises:
          InvalidPathError, AccessDeniedError, NotFoundError, ReadError, or
          SyncError when the pre-read sync fails.
        """
        result = await reader.read_file(str(arguments["file_path"]))
        return format_file_content(result)
