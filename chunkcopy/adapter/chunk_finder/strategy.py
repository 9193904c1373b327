import typing

from chunkcopy import data
from chunkcopy.adapter.chunk_finder.id_set import IdSetChunkFinder
from chunkcopy.adapter.chunk_finder.range import RangeChunkFinder

__all__ = ("create",)


def create(
    *,
    strategy: data.ChunkStrategy,
    migration: data.Migration,
    connection: data.Connection,
    throttler: data.Throttler,
    start: int | None = None,
    limit: int | None = None,
    ids: typing.Iterable[int] | None = None,
) -> data.ChunkFinder:
    if strategy == data.ChunkStrategy.RANGE:
        if ids is not None:
            raise ValueError("ids only apply to the id-set strategy.")

        return RangeChunkFinder(
            migration=migration,
            connection=connection,
            throttler=throttler,
            start=start,
            limit=limit,
        )
    elif strategy == data.ChunkStrategy.ID_SET:
        if start is not None or limit is not None:
            raise ValueError("start and limit only apply to the range strategy.")

        return IdSetChunkFinder(
            migration=migration,
            connection=connection,
            throttler=throttler,
            ids=ids,
        )
    else:
        raise ValueError(f"Unrecognized chunk strategy: {strategy!r}.")
