import random
import typing

import pytest

from diffinity import ClassifiedPaths, DiffOptions, classify, diff


def _classify(old: typing.Any, new: typing.Any, **options) -> ClassifiedPaths:
    opts = DiffOptions(**options)
    return classify(diff(old, new, opts), opts)


@pytest.mark.parametrize(
    "doc",
    [
        {"service": "payments", "owners": ["alex", "morgan"]},
        [1, [2, 3], {"a": None}],
        "scalar",
    ],
)
def test_identity_is_empty(doc):
    paths = _classify(doc, doc)
    assert paths == ClassifiedPaths()
    assert paths.is_empty()


def test_absent_delta_is_empty():
    assert classify(None).is_empty()


@pytest.mark.parametrize(
    ("old", "new", "expected"),
    [
        (
            {"a": 1, "b": 2},
            {"a": 1, "b": 3},
            ClassifiedPaths(modified=(("b",),)),
        ),
        (
            {"a": 1},
            {"a": 1, "b": 2},
            ClassifiedPaths(added=(("b",),)),
        ),
        (
            {"a": 1, "b": 2},
            {"a": 1},
            ClassifiedPaths(removed=(("b",),)),
        ),
        (
            {"x": {"y": [1, 2]}},
            {"x": {"y": [1, 2, 3]}},
            ClassifiedPaths(added=(("x", "y", 2),)),
        ),
        (
            1,
            2,
            ClassifiedPaths(modified=((),)),
        ),
    ],
)
def test_classify(old, new, expected: ClassifiedPaths):
    assert _classify(old, new) == expected


def test_reorder_is_reported_as_modified():
    paths = _classify(["a", "b", "c"], ["c", "a", "b"])
    assert paths.added == ()
    assert paths.removed == ()
    assert paths.modified == ((2,), (0,))
    assert paths.moved == ()


def test_reorder_with_separate_moves():
    paths = _classify(["a", "b", "c"], ["c", "a", "b"], separate_moves=True)
    assert paths == ClassifiedPaths(moved=((2,), (0,)))


def test_reorder_without_move_detection():
    paths = _classify(["a", "b", "c"], ["c", "a", "b"], detect_moves=False)
    assert paths == ClassifiedPaths(added=((0,),), removed=((2,),))


def test_nested_move_paths_keep_their_parent():
    paths = _classify({"tags": [1, 2, 3]}, {"tags": [3, 1, 2]})
    assert paths == ClassifiedPaths(modified=(("tags", 2), ("tags", 0)))


def test_index_changed_on_both_sides_folds_into_modified():
    # "q" is removed at index 1 while "p" moves to index 1
    paths = _classify(["p", "q", "r"], ["r", "p", "s"])
    assert paths == ClassifiedPaths(added=((2,),), modified=((0,), (1,)))

    paths = _classify(["p", "q", "r"], ["r", "p", "s"], separate_moves=True)
    assert paths == ClassifiedPaths(added=((2,),), modified=((1,),), moved=((0,),))


def test_sets_are_disjoint():
    old = {"a": [1, 2, 3, 4], "b": {"c": 1}, "d": [{"x": 1}, {"y": 2}]}
    new = {"a": [4, 1, 9], "b": {"c": [1]}, "d": [{"y": 2}, {"x": 2}], "e": 0}
    paths = _classify(old, new)
    groups = [set(paths.added), set(paths.removed), set(paths.modified)]
    assert sum(len(g) for g in groups) == len(set().union(*groups))


def _assert_mirrored(x, y, **options):
    forward = _classify(x, y, **options)
    backward = _classify(y, x, **options)
    assert set(forward.added) == set(backward.removed)
    assert set(forward.removed) == set(backward.added)
    assert set(forward.modified) == set(backward.modified)
    assert set(forward.moved) == set(backward.moved)


@pytest.mark.parametrize(
    ("x", "y"),
    [
        ({"a": 1, "b": [1, 2, 3]}, {"a": 2, "b": [1, 3], "c": None}),
        (["a", "b", "c"], ["c", "a", "b"]),
        ([1, 2, 3], [1, 5, 3]),
        ({"x": [{"id": 1}, {"id": 2}]}, {"x": [{"id": 2}, {"id": 1, "n": 0}]}),
        ({"a": {"b": {"c": True}}}, {"a": {"b": {"c": 1}}}),
        (["c", "a", "b"], ["b", "a"]),
        (["a", "b", "c"], ["c", "b", "a"]),
    ],
)
def test_kind_swap_symmetry(x, y):
    _assert_mirrored(x, y)
    _assert_mirrored(x, y, separate_moves=True)
    _assert_mirrored(x, y, detect_moves=False)


def test_tied_alignment_is_mirrored():
    assert _classify(["c", "a", "b"], ["b", "a"]) == ClassifiedPaths(
        modified=((2,), (0,))
    )
    assert _classify(["b", "a"], ["c", "a", "b"]) == ClassifiedPaths(
        modified=((0,), (2,))
    )


def _random_value(rng: random.Random, depth: int = 0) -> typing.Any:
    roll = rng.random()
    if depth < 2 and roll < 0.15:
        return {key: _random_value(rng, depth + 1) for key in rng.sample("abc", 2)}
    if depth < 2 and roll < 0.3:
        return _random_list(rng, depth + 1)
    return rng.choice(["a", "b", "c", 1, 2, True, None])


def _random_list(rng: random.Random, depth: int = 0) -> list:
    return [_random_value(rng, depth) for _ in range(rng.randint(0, 6))]


@pytest.mark.parametrize("seed", range(100))
def test_kind_swap_symmetry_on_random_documents(seed: int):
    rng = random.Random(seed)
    x, y = _random_list(rng), _random_list(rng)
    _assert_mirrored(x, y)
    _assert_mirrored(x, y, separate_moves=True)
    _assert_mirrored({"doc": x}, {"doc": y, "extra": 1})


def test_sorted_orders_by_depth_then_segments():
    paths = ClassifiedPaths(
        modified=(("b",), ("a", 1), ("a",), (0,), ("a", 0)),
    )
    assert paths.sorted().modified == (
        (0,),
        ("a",),
        ("b",),
        ("a", 0),
        ("a", 1),
    )
