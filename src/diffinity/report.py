import html
import json
import typing

from diffinity.delta import Added, DeltaNode, Modified, Moved, Removed, iter_leaves
from diffinity.json_path import JsonPath, format_path


def _dump(value: typing.Any) -> str:
    return json.dumps(value, ensure_ascii=False, sort_keys=False)


def _describe(path: JsonPath, node: DeltaNode) -> tuple[str, str]:
    where = format_path(path)
    match node:
        case Added(new_value=new_value):
            return "+", f"{where}: {_dump(new_value)}"
        case Removed(old_value=old_value):
            return "-", f"{where}: {_dump(old_value)}"
        case Modified(old_value=old_value, new_value=new_value):
            return "~", f"{where}: {_dump(old_value)} -> {_dump(new_value)}"
        case Moved(value=value, from_index=from_index, to_index=to_index):
            return ">", f"{where}: {_dump(value)} moved from {from_index} to {to_index}"
    raise TypeError(f"Unexpected delta node {node!r}")


def format_text(delta: DeltaNode | None) -> str:
    """
    Plain text report, one line per change:

        ~ $.version: 1 -> 2
        + $.features.retries: 3
        - $.owners: ["alex", "morgan"]
        > $.tags[2]: "c" moved from 2 to 0
    """
    lines = []
    for path, node in iter_leaves(delta):
        marker, text = _describe(path, node)
        lines.append(f"{marker} {text}")
    return "\n".join(lines)


def format_html(delta: DeltaNode | None) -> str:
    """HTML list report; every change is a `<li class="jsondiff-<operation>">`."""
    if delta is None:
        return ""
    items = []
    for path, node in iter_leaves(delta):
        _, text = _describe(path, node)
        items.append(
            f'<li class="jsondiff-{node.operation}">{html.escape(text)}</li>'
        )
    return '<ul class="jsondiff">' + "".join(items) + "</ul>"
