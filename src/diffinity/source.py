"""Map JSON paths to line ranges inside JSON source text.

Value spans come from `json_source_map.calculate`, keyed by JSON Pointer.
`SourceDocument` turns those character spans into 1-based inclusive line
ranges for editors that highlight whole lines.

Example:
    >>> doc = SourceDocument('{\\n  "a": [\\n    1\\n  ]\\n}')
    >>> doc.line_range(("a",))
    LineRange(start_line=2, end_line=4)
    >>> doc.line_range(("missing",)) is None
    True
"""

import bisect
import json
import re
import typing

from json_source_map import calculate

from diffinity.json_path import JsonPath, Segment, get_by_path
from diffinity.logger import get_logger

logger = get_logger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class LineRange(typing.NamedTuple):
    start_line: int
    end_line: int


def json_pointer(path: typing.Iterable[Segment]) -> str:
    """
    Render a path as an RFC 6901 JSON Pointer.

    >>> json_pointer(("a/b", 0, "m~n"))
    '/a~1b/0/m~0n'
    """
    return "".join(
        "/" + str(segment).replace("~", "~0").replace("/", "~1") for segment in path
    )


class SourceDocument:
    """
    One parsed text buffer that resolves many paths to line ranges.

    Text that fails to parse yields a document where every path is
    unresolvable; the decoder error is kept in `error`.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.error: ValueError | None = None
        self.value: typing.Any = None
        self._spans: dict[str, typing.Any] = {}
        try:
            self.value = json.loads(text)
            self._spans = calculate(text)
        except ValueError as exc:
            logger.debug("source text is not valid JSON: %s", exc)
            self.error = exc
        # \r\n, \r and \n all end a line, as in editors
        self._line_starts = [0] + [m.end() for m in _LINE_BREAK.finditer(text)]

    def line_of(self, offset: int) -> int:
        """1-based line containing character `offset`."""
        return bisect.bisect_right(self._line_starts, offset)

    def line_range(self, path: JsonPath) -> LineRange | None:
        if self.error is not None:
            return None
        try:
            get_by_path(self.value, path)
        except (KeyError, IndexError, TypeError):
            logger.debug("path %r not found in source text", path)
            return None
        entry = self._spans.get(json_pointer(path))
        if entry is None:
            logger.debug("no source span for path %r", path)
            return None
        start = entry.value_start.position
        end = max(entry.value_end.position - 1, start)
        return LineRange(self.line_of(start), self.line_of(end))


def resolve(path: JsonPath, source_text: str) -> LineRange | None:
    """
    Resolve `path` to the lines it occupies in `source_text`.

    Returns None when the text is not valid JSON or the path does not
    address a value in it.
    """
    return SourceDocument(source_text).line_range(path)
