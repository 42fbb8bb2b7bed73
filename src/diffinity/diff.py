import json
import logging
import typing

from diffinity.config import DEFAULT_OPTIONS, DiffOptions
from diffinity.delta import (
    Added,
    DeltaNode,
    Modified,
    Moved,
    Nested,
    Removed,
    count_changes,
)
from diffinity.json_path import Segment
from diffinity.logger import get_logger

logger = get_logger(__name__)

# sort rank of array children sharing an index
_RANK_REMOVED, _RANK_MOVED, _RANK_CHANGED, _RANK_ADDED = range(4)


def _is_number(value: typing.Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def json_equal(left: typing.Any, right: typing.Any) -> bool:
    """
    Exact JSON deep equality.

    Unlike `==`, booleans never equal numbers (`True != 1`). Integers and
    floats compare by value since JSON has a single number type.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if _is_number(left) and _is_number(right):
        return left == right
    if isinstance(left, dict):
        if not isinstance(right, dict) or left.keys() != right.keys():
            return False
        return all(json_equal(left[key], right[key]) for key in left)
    if isinstance(left, list):
        if not isinstance(right, list) or len(left) != len(right):
            return False
        return all(json_equal(a, b) for a, b in zip(left, right))
    if isinstance(right, (dict, list)):
        return False
    return type(left) is type(right) and left == right


def diff(
    left: typing.Any, right: typing.Any, options: DiffOptions | None = None
) -> DeltaNode | None:
    """
    Compute the sparse delta that turns `left` (original) into `right` (modified).

    Returns None when the two values are deeply equal.
    """
    delta = _diff(left, right, options or DEFAULT_OPTIONS)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("diff produced %d change(s)", count_changes(delta))
    return delta


def _diff(left: typing.Any, right: typing.Any, options: DiffOptions) -> DeltaNode | None:
    if isinstance(left, dict) and isinstance(right, dict):
        return _diff_objects(left, right, options)
    if isinstance(left, list) and isinstance(right, list):
        return _diff_arrays(left, right, options)
    if json_equal(left, right):
        return None
    return Modified(old_value=left, new_value=right)


def _diff_objects(
    left: dict[str, typing.Any], right: dict[str, typing.Any], options: DiffOptions
) -> Nested | None:
    children: list[tuple[Segment, DeltaNode]] = []
    for key, old_value in left.items():
        if key not in right:
            children.append((key, Removed(old_value=old_value)))
            continue
        child = _diff(old_value, right[key], options)
        if child is not None:
            children.append((key, child))

    for key, new_value in right.items():
        if key not in left:
            children.append((key, Added(new_value=new_value)))

    if not children:
        return None
    return Nested(kind="object", children=tuple(children))


def _lcs(left: list[typing.Any], right: list[typing.Any]) -> list[tuple[int, int]]:
    """
    Longest common subsequence of two lists under JSON deep equality.

    Returns the matched (left_index, right_index) pairs in increasing order.
    Ties resolve towards the earliest right element.
    """
    n, m = len(left), len(right)
    same = [[json_equal(a, b) for b in right] for a in left]
    # lengths[i][j] = LCS length of left[i:] and right[j:]
    lengths = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        for j in range(m - 1, -1, -1):
            if same[i][j]:
                lengths[i][j] = lengths[i + 1][j + 1] + 1
            else:
                lengths[i][j] = max(lengths[i + 1][j], lengths[i][j + 1])

    pairs: list[tuple[int, int]] = []
    i = j = 0
    while i < n and j < m:
        if same[i][j]:
            pairs.append((i, j))
            i += 1
            j += 1
        elif lengths[i + 1][j] >= lengths[i][j + 1]:
            i += 1
        else:
            j += 1
    return pairs


def _match(
    left: list[typing.Any], right: list[typing.Any], detect_moves: bool
) -> tuple[list[tuple[int, int]], list[tuple[int, int]]]:
    """LCS pairs, plus move pairs between equal elements the LCS left unmatched."""
    matches = _lcs(left, right)
    if not detect_moves:
        return matches, []

    matched_left = {i for i, _ in matches}
    matched_right = {j for _, j in matches}
    unmatched_right = [j for j in range(len(right)) if j not in matched_right]
    moves: list[tuple[int, int]] = []
    for i in range(len(left)):
        if i in matched_left:
            continue
        j = next((j for j in unmatched_right if json_equal(left[i], right[j])), None)
        if j is not None:
            unmatched_right.remove(j)
            moves.append((i, j))
    return matches, moves


def _canonical(value: typing.Any) -> str:
    return json.dumps(value, sort_keys=True)


def _align(
    left: list[typing.Any], right: list[typing.Any], detect_moves: bool
) -> tuple[list[tuple[int, int]], list[tuple[int, int]]]:
    """
    Match and move pairs, always computed with the canonically smaller list
    first, so diff(x, y) and diff(y, x) pick mirrored alignments.
    """
    if _canonical(left) <= _canonical(right):
        return _match(left, right, detect_moves)
    matches, moves = _match(right, left, detect_moves)
    return [(i, j) for j, i in matches], [(i, j) for j, i in moves]


def _diff_arrays(
    left: list[typing.Any], right: list[typing.Any], options: DiffOptions
) -> Nested | None:
    n, m = len(left), len(right)

    head = 0
    while head < n and head < m and json_equal(left[head], right[head]):
        head += 1
    tail = 0
    while (
        tail < n - head
        and tail < m - head
        and json_equal(left[n - 1 - tail], right[m - 1 - tail])
    ):
        tail += 1

    if head == n and head == m:
        return None

    matches, moves = _align(
        left[head : n - tail], right[head : m - tail], options.detect_moves
    )
    paired_left = {head + i for i, _ in matches + moves}
    paired_right = {head + j for _, j in matches + moves}
    unmatched_left = [i for i in range(head, n - tail) if i not in paired_left]
    unmatched_right = [j for j in range(head, m - tail) if j not in paired_right]

    entries: list[tuple[int, int, DeltaNode]] = []

    for i, j in moves:
        i, j = head + i, head + j
        # same index on both sides: the element stayed where it was
        if i != j:
            entries.append(
                (i, _RANK_MOVED, Moved(value=left[i], from_index=i, to_index=j))
            )

    # An element replaced at the same index is a change in place, not a
    # removal plus an addition.
    in_place = set(unmatched_left) & set(unmatched_right)
    for index in sorted(in_place):
        child = _diff(left[index], right[index], options)
        if child is not None:
            entries.append((index, _RANK_CHANGED, child))

    for i in unmatched_left:
        if i not in in_place:
            entries.append((i, _RANK_REMOVED, Removed(old_value=left[i])))
    for j in unmatched_right:
        if j not in in_place:
            entries.append((j, _RANK_ADDED, Added(new_value=right[j])))

    if not entries:
        return None
    entries.sort(key=lambda entry: (entry[0], entry[1]))
    return Nested(
        kind="array", children=tuple((index, node) for index, _, node in entries)
    )
