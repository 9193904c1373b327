from __future__ import annotations

import typing

import pydantic

from chunkcopy.data.filter import Filter

__all__ = ("Conditions", "Migration")

Conditions = typing.Union[
    None,
    str,
    Filter,
    typing.Callable[[], typing.Union[None, str, Filter]],
]


@pydantic.dataclasses.dataclass(
    frozen=True,
    kw_only=True,
    config=pydantic.ConfigDict(arbitrary_types_allowed=True),
)
class Migration:
    origin_name: str
    destination_name: str
    origin_columns: tuple[str, ...]
    destination_columns: tuple[str, ...]
    conditions: Conditions = None

    def __post_init__(self) -> None:
        if len(self.origin_columns) != len(self.destination_columns):
            raise ValueError(
                f"origin_columns and destination_columns must line up, but got "
                f"{len(self.origin_columns)} origin columns and {len(self.destination_columns)} "
                f"destination columns."
            )

    def filter(self) -> Filter:
        conditions = self.conditions() if callable(self.conditions) else self.conditions
        if isinstance(conditions, Filter):
            return conditions
        return Filter.parse(conditions)

    def __repr__(self) -> str:
        return (
            f"Migration(origin_name={self.origin_name!r}, "
            f"destination_name={self.destination_name!r})"
        )
