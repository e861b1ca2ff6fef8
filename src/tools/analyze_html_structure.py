"""MCP tool that inventories classes, ids and tags of an HTML file.

Registers 'analyze-html-structure' which reads the file through the
bounded reader and returns the analysis as indented JSON.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from analysis.html_structure import HtmlStructureAnalyzer
from core.dispatcher import ToolDispatcher
from core.models import HtmlAnalysis


def format_analysis(analysis: HtmlAnalysis) -> str:
    payload = json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False)
    return f"HTML Analysis for: {analysis.source_path}\n\n{payload}"


def register(dispatcher: ToolDispatcher, *, analyzer: HtmlStructureAnalyzer) -> None:
    @dispatcher.tool(
        name="analyze-html-structure",
        description="Analyze an HTML file for classes, ids, tags and element structure",
        input_schema={
            "type": "object",
            "properties": {
                "file_path": {"type": "string", "description": "Relative path to HTML file"},
            },
            "required": ["file_path"],
        },
    )
    async def analyze_html_structure(arguments: Mapping[str, Any]) -> str:
        analysis = await analyzer.analyze(str(arguments["file_path"]))
        return format_analysis(analysis)
