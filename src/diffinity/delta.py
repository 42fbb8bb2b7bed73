import dataclasses
import typing

from diffinity.json_path import Segment


@dataclasses.dataclass(frozen=True)
class Added:
    new_value: typing.Any

    operation: typing.ClassVar[str] = "added"


@dataclasses.dataclass(frozen=True)
class Removed:
    old_value: typing.Any

    operation: typing.ClassVar[str] = "removed"


@dataclasses.dataclass(frozen=True)
class Modified:
    old_value: typing.Any
    new_value: typing.Any

    operation: typing.ClassVar[str] = "modified"


@dataclasses.dataclass(frozen=True)
class Moved:
    value: typing.Any
    from_index: int
    to_index: int

    operation: typing.ClassVar[str] = "moved"


@dataclasses.dataclass(frozen=True)
class Nested:
    """
    A container whose children changed.

    `children` only holds changed children, in iteration order. Array deltas
    key removed and moved elements by their left index and added elements by
    their right index, so the same index may appear twice.
    """

    kind: typing.Literal["object", "array"]
    children: tuple[tuple[Segment, "DeltaNode"], ...]

    operation: typing.ClassVar[str] = "nested"

    def __repr__(self):
        inner = ", ".join(f"{segment!r}: {node!r}" for segment, node in self.children)
        return f"Nested(kind='{self.kind}', children={{{inner}}})"


DeltaNode = typing.Union[Added, Removed, Modified, Moved, Nested]


def count_changes(delta: DeltaNode | None) -> int:
    """Number of leaf changes in a delta tree."""
    match delta:
        case None:
            return 0
        case Nested(children=children):
            return sum(count_changes(child) for _, child in children)
        case _:
            return 1


def iter_leaves(
    delta: DeltaNode | None, path: tuple[Segment, ...] = ()
) -> typing.Iterator[tuple[tuple[Segment, ...], DeltaNode]]:
    """Depth-first (path, node) pairs for every non-nested node of a delta tree."""
    if delta is None:
        return
    if isinstance(delta, Nested):
        for segment, child in delta.children:
            yield from iter_leaves(child, path + (segment,))
        return
    yield path, delta
