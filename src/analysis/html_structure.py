"""HTML structural analysis.

Extracts the class, id and tag inventory of a document plus a per-element
breakdown in document order. Tokenizing uses BeautifulSoup's lenient
`html.parser` builder, so unclosed or malformed tags still produce partial
results rather than an error.
"""

from __future__ import annotations

from typing import List, Optional, Set

from bs4 import BeautifulSoup, ParserRejectedMarkup
from loguru import logger

from core.errors import ParseError
from core.interfaces import FileReader
from core.models import HtmlAnalysis, HtmlElement


def _attr(tag, name: str) -> Optional[str]:
    value = tag.get(name)
    if value is None:
        return None
    # Duplicated attributes can surface as lists on some builders
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def analyze_markup(markup: str, *, source_path: str = "") -> HtmlAnalysis:
    """Build an HtmlAnalysis from raw markup text.

    Class values are split on whitespace for the class set but kept raw in
    the element list; ids are taken verbatim; tag names are lower-cased.
    """
    try:
        # multi_valued_attributes=None keeps `class` as the raw attribute string
        soup = BeautifulSoup(markup or "", "html.parser", multi_valued_attributes=None)
    except ParserRejectedMarkup as e:
        raise ParseError(f"Could not tokenize markup in {source_path or '<input>'}: {e}") from e

    classes: Set[str] = set()
    ids: Set[str] = set()
    tags: Set[str] = set()
    elements: List[HtmlElement] = []

    for el in soup.find_all(True):
        tag_name = (el.name or "unknown").lower()
        tags.add(tag_name)

        class_value = _attr(el, "class")
        if class_value:
            classes.update(token for token in class_value.split() if token)

        id_value = _attr(el, "id")
        if id_value:
            ids.add(id_value)

        elements.append(HtmlElement(tag=tag_name, class_=class_value, id=id_value))

    return HtmlAnalysis(
        source_path=source_path,
        classes=tuple(sorted(classes)),
        ids=tuple(sorted(ids)),
        tags=tuple(sorted(tags)),
        elements=tuple(elements),
    )


class HtmlStructureAnalyzer:
    def __init__(self, *, reader: FileReader) -> None:
        self._reader = reader

    async def analyze(self, relative_path: str) -> HtmlAnalysis:
        result = await self._reader.read_file(relative_path)
        if result.truncated:
            logger.warning(
                "Analyzing truncated content of {} ({} of {} chars)",
                result.requested_path,
                len(result.content),
                result.original_length,
            )
        return analyze_markup(result.content, source_path=result.requested_path)
