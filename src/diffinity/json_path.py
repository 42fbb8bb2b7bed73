from typing import Any, Iterable, Tuple, Union

Segment = Union[str, int]  # str for dict keys, int for list indices
JsonPath = Tuple[Segment, ...]


def _escape_key_for_brackets(key: str) -> str:
    """Escape a key for bracket notation with double quotes."""
    return key.replace("\\", "\\\\").replace('"', '\\"')


def _join_path(base: str, segment: Segment) -> str:
    """
    Join a base path string with a segment (dict key or list index) using a JSONPath-like syntax:
    - dict keys with no '.', '[', or quote characters use dot notation
    - otherwise keys are quoted: ["..."]
    - list indices use [i]
    """
    if isinstance(segment, int):
        return f"{base}[{segment}]"

    key = segment
    use_dot = (
        key != ""
        and not key.isdigit()
        and not any(ch in key for ch in ".[]\"'\\")
    )
    if use_dot:
        return base + "." + key
    return f'{base}["{_escape_key_for_brackets(key)}"]'


def format_path(path: Iterable[Segment]) -> str:
    """
    Render a path as a JSONPath-like string rooted at '$'.

    >>> format_path(("a", "b", 2, "key.with.dots"))
    '$.a.b[2]["key.with.dots"]'
    """
    text = "$"
    for segment in path:
        text = _join_path(text, segment)
    return text


def get_by_path(doc: Any, path: Iterable[Segment]) -> Any:
    """
    Retrieve the value addressed by `path` inside `doc`.

    Raises:
    - KeyError when an object key is missing.
    - IndexError when an array index is out of range.
    - TypeError when the path expects a dict/list but finds another type.
    """
    current = doc
    for step, segment in enumerate(path):
        if isinstance(segment, str):
            if not isinstance(current, dict):
                raise TypeError(
                    f"Expected dict at step {step} for key '{segment}', found {type(current).__name__}"
                )
            if segment not in current:
                raise KeyError(f"Path segment {segment} not found at step {step}")
            current = current[segment]
        else:
            if not isinstance(current, list):
                raise TypeError(
                    f"Expected list at step {step} for index [{segment}], found {type(current).__name__}"
                )
            if segment < 0 or segment >= len(current):
                raise IndexError(f"Index {segment} out of range at step {step}")
            current = current[segment]
    return current


def sort_key(path: JsonPath) -> tuple:
    """Canonical ordering: depth first, then segments with indices before keys."""
    return (
        len(path),
        tuple((0, s, "") if isinstance(s, int) else (1, 0, s) for s in path),
    )
