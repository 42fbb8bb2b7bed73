import dataclasses

from diffinity.config import DEFAULT_OPTIONS, DiffOptions
from diffinity.delta import Added, DeltaNode, Modified, Moved, Nested, Removed
from diffinity.json_path import JsonPath, sort_key


@dataclasses.dataclass(frozen=True)
class ClassifiedPaths:
    """
    Changed locations of a diff, grouped by kind.

    `added` paths address the modified document, `removed` paths the original
    one, `modified` and `moved` paths both. The four tuples are disjoint and
    keep traversal order; see `sorted` for a canonical order.
    """

    added: tuple[JsonPath, ...] = ()
    removed: tuple[JsonPath, ...] = ()
    modified: tuple[JsonPath, ...] = ()
    moved: tuple[JsonPath, ...] = ()

    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified or self.moved)

    def sorted(self) -> "ClassifiedPaths":
        return ClassifiedPaths(
            added=tuple(sorted(self.added, key=sort_key)),
            removed=tuple(sorted(self.removed, key=sort_key)),
            modified=tuple(sorted(self.modified, key=sort_key)),
            moved=tuple(sorted(self.moved, key=sort_key)),
        )


def classify(
    delta: DeltaNode | None, options: DiffOptions | None = None
) -> ClassifiedPaths:
    """
    Flatten a delta tree into added/removed/modified paths.

    Moves land in `modified` under both their original and their new index,
    unless `options.separate_moves` routes them to `moved`. A path reported
    on both sides (an array index removed on the left and added on the
    right) is a change at that location and goes to `modified`.
    """
    options = options or DEFAULT_OPTIONS
    buckets: dict[str, dict[JsonPath, None]] = {
        "added": {},
        "removed": {},
        "modified": {},
        "moved": {},
    }
    moved_bucket = "moved" if options.separate_moves else "modified"

    def walk(node: DeltaNode, path: JsonPath) -> None:
        match node:
            case Added():
                buckets["added"][path] = None
            case Removed():
                buckets["removed"][path] = None
            case Modified():
                buckets["modified"][path] = None
            case Moved(from_index=from_index, to_index=to_index):
                parent = path[:-1]
                buckets[moved_bucket][parent + (from_index,)] = None
                buckets[moved_bucket][parent + (to_index,)] = None
            case Nested(children=children):
                for segment, child in children:
                    walk(child, path + (segment,))

    if delta is not None:
        walk(delta, ())

    added, removed = buckets["added"], buckets["removed"]
    modified, moved = buckets["modified"], buckets["moved"]
    clashes = (added.keys() & removed.keys()) | (
        (added.keys() | removed.keys()) & (modified.keys() | moved.keys())
    )
    for path in [p for p in [*added, *removed] if p in clashes]:
        modified[path] = None
        moved.pop(path, None)

    return ClassifiedPaths(
        added=tuple(p for p in added if p not in clashes),
        removed=tuple(p for p in removed if p not in clashes),
        modified=tuple(modified),
        moved=tuple(p for p in moved if p not in modified),
    )
