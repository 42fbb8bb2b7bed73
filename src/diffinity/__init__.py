from diffinity.classify import ClassifiedPaths, classify
from diffinity.compare import (
    DiffResult,
    DocumentError,
    Highlight,
    TextComparison,
    compare,
    compare_texts,
    parse_document,
)
from diffinity.config import DEFAULT_OPTIONS, DiffOptions
from diffinity.delta import Added, DeltaNode, Modified, Moved, Nested, Removed, iter_leaves
from diffinity.diff import diff, json_equal
from diffinity.json_path import JsonPath, Segment, format_path, get_by_path
from diffinity.report import format_html, format_text
from diffinity.source import LineRange, SourceDocument, json_pointer, resolve

__all__ = [
    "DEFAULT_OPTIONS",
    "Added",
    "ClassifiedPaths",
    "DeltaNode",
    "DiffOptions",
    "DiffResult",
    "DocumentError",
    "Highlight",
    "JsonPath",
    "LineRange",
    "Modified",
    "Moved",
    "Nested",
    "Removed",
    "Segment",
    "SourceDocument",
    "TextComparison",
    "classify",
    "compare",
    "compare_texts",
    "diff",
    "format_html",
    "format_path",
    "format_text",
    "get_by_path",
    "iter_leaves",
    "json_equal",
    "json_pointer",
    "parse_document",
    "resolve",
]
