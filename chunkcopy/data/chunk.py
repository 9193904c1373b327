from __future__ import annotations

import pydantic

__all__ = ("IdSetChunk", "RangeChunk")


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=pydantic.ConfigDict(strict=True))
class RangeChunk:
    bottom: int
    top: int
    expected_rows: int

    @staticmethod
    def new(*, bottom: int, top: int, expected_rows: int | None = None) -> RangeChunk:
        if expected_rows is None:
            expected_rows = top - bottom + 1

        return RangeChunk(bottom=bottom, top=top, expected_rows=expected_rows)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=pydantic.ConfigDict(strict=True))
class IdSetChunk:
    ids: tuple[int, ...] = pydantic.Field(min_length=1)
    expected_rows: int

    @staticmethod
    def new(*, ids: tuple[int, ...], expected_rows: int | None = None) -> IdSetChunk:
        if expected_rows is None:
            expected_rows = len(ids)

        return IdSetChunk(ids=tuple(ids), expected_rows=expected_rows)

    @property
    def bottom(self) -> int:
        return self.ids[0]

    @property
    def top(self) -> int:
        return self.ids[-1]
