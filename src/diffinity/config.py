import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class DiffOptions:
    """
    Immutable options shared by the diff and classification stages.

    Attributes:
    detect_moves: Pair reordered, deep-equal array elements as moves instead of
    reporting them as a removal plus an addition.
    separate_moves: Report moves in their own `moved` list instead of folding
    them into `modified`.
    """

    detect_moves: bool = True
    separate_moves: bool = False

    @classmethod
    def from_dict(cls, config: typing.Mapping[str, typing.Any]) -> "DiffOptions":
        """Build options from a mapping; unknown keys are ignored."""
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in config.items() if k in valid_fields})


DEFAULT_OPTIONS = DiffOptions()
