import dataclasses
import json
import typing

from diffinity.classify import ClassifiedPaths, classify
from diffinity.config import DEFAULT_OPTIONS, DiffOptions
from diffinity.delta import Added, DeltaNode, Modified, Moved, Removed, iter_leaves
from diffinity.diff import diff
from diffinity.json_path import JsonPath
from diffinity.logger import get_logger
from diffinity.source import LineRange, SourceDocument

logger = get_logger(__name__)


class DocumentError(ValueError):
    def __init__(self, label: str, message: str) -> None:
        self.label = label
        self.message = message
        super().__init__(f"{label}: {message}")


@dataclasses.dataclass(frozen=True)
class DiffResult:
    delta: DeltaNode | None
    paths: ClassifiedPaths

    @property
    def has_changes(self) -> bool:
        return self.delta is not None


@dataclasses.dataclass(frozen=True)
class Highlight:
    path: JsonPath
    category: typing.Literal["added", "removed", "modified", "moved"]
    lines: LineRange


@dataclasses.dataclass(frozen=True)
class TextComparison:
    result: DiffResult
    left: tuple[Highlight, ...]
    right: tuple[Highlight, ...]


def parse_document(text: str, label: str = "document") -> typing.Any:
    """Decode one JSON text buffer, naming the buffer in any error."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentError(label, str(exc)) from exc


def compare(
    left: typing.Any, right: typing.Any, options: DiffOptions | None = None
) -> DiffResult:
    options = options or DEFAULT_OPTIONS
    delta = diff(left, right, options)
    return DiffResult(delta=delta, paths=classify(delta, options))


def _side_paths(delta: DeltaNode | None) -> tuple[set[JsonPath], set[JsonPath]]:
    """Paths of every change as they exist in the left and in the right document."""
    left: set[JsonPath] = set()
    right: set[JsonPath] = set()
    for path, node in iter_leaves(delta):
        match node:
            case Added():
                right.add(path)
            case Removed():
                left.add(path)
            case Modified():
                left.add(path)
                right.add(path)
            case Moved(from_index=from_index, to_index=to_index):
                left.add(path[:-1] + (from_index,))
                right.add(path[:-1] + (to_index,))
    return left, right


def _highlights(
    document: SourceDocument,
    paths: ClassifiedPaths,
    categories: tuple[str, ...],
    located: set[JsonPath],
) -> tuple[Highlight, ...]:
    found = []
    for category in categories:
        for path in getattr(paths, category):
            if path not in located:
                continue
            lines = document.line_range(path)
            if lines is not None:
                found.append(Highlight(path=path, category=category, lines=lines))
    return tuple(found)


def compare_texts(
    left_text: str, right_text: str, options: DiffOptions | None = None
) -> TextComparison:
    """
    Compare two JSON text buffers and locate every change in both of them.

    Each changed path is highlighted in the buffer where it exists: removed
    values in the original (left) buffer, added values in the modified
    (right) buffer, modified values in both. A move is highlighted at its
    source index on the left and at its target index on the right. The
    category of a highlight is the category of its path in `result.paths`.

    Raises DocumentError if either buffer is not valid JSON.
    """
    result = compare(
        parse_document(left_text, "original"),
        parse_document(right_text, "modified"),
        options,
    )
    if not result.has_changes:
        logger.debug("documents are equal")
        return TextComparison(result=result, left=(), right=())

    left_paths, right_paths = _side_paths(result.delta)
    left = _highlights(
        SourceDocument(left_text),
        result.paths,
        ("removed", "modified", "moved"),
        left_paths,
    )
    right = _highlights(
        SourceDocument(right_text),
        result.paths,
        ("added", "modified", "moved"),
        right_paths,
    )
    return TextComparison(result=result, left=left, right=right)
