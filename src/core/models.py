"""Immutable dataclasses shared by the mirror, reader, analyzer and dispatcher.

Each value is created per call (or once per process for MirrorState) and
never mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple


@dataclass(frozen=True)
class MirrorState:
    """Snapshot of the local mirror of the remote repository."""

    remote_url: str
    branch: str
    local_root: Path
    synced: bool = False


@dataclass(frozen=True)
class FileReadResult:
    """Outcome of a bounded file read.

    `content` never exceeds the configured limit; when `truncated` is set
    `original_length` holds the full character count.
    """

    requested_path: str
    content: str
    truncated: bool
    original_length: int


@dataclass(frozen=True)
class HtmlElement:
    tag: str
    class_: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        out = {"tag": self.tag}
        if self.class_ is not None:
            out["class"] = self.class_
        if self.id is not None:
            out["id"] = self.id
        return out


@dataclass(frozen=True)
class HtmlAnalysis:
    """Structural inventory of one HTML document.

    Field groups:
    - Sets (deduplicated, sorted ascending): classes, ids, tags
    - Sequence (document order): elements
    """

    source_path: str
    classes: Tuple[str, ...] = ()
    ids: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    elements: Tuple[HtmlElement, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "classes": list(self.classes),
            "ids": list(self.ids),
            "tags": list(self.tags),
            "elements": [e.to_dict() for e in self.elements],
        }


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: Mapping[str, Any]


@dataclass(frozen=True)
class ToolCallRequest:
    tool_name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TextContent:
    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True)
class ToolCallResponse:
    """Uniform envelope for tool results; callers must inspect `is_error`."""

    content: Tuple[TextContent, ...]
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolCallResponse":
        return cls(content=(TextContent(text=text),), is_error=False)

    @classmethod
    def error(cls, message: str) -> "ToolCallResponse":
        return cls(content=(TextContent(text=message),), is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> Dict[str, Any]:
        blocks: List[Dict[str, str]] = [{"type": b.type, "text": b.text} for b in self.content]
        return {"content": blocks, "isError": self.is_error}
