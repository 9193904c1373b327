import typing

from chunkcopy import data
from chunkcopy.adapter.chunk_finder.shared import LOG_PREFIX, read_stride
from chunkcopy.adapter.chunk_insert import IdSetChunkInsert

__all__ = ("IdSetChunkFinder",)


class IdSetChunkFinder(data.ChunkFinder):
    """Splits a snapshot of the origin table's ids into slices of ``stride`` ids.

    Rows inserted after the snapshot was taken are left to the change-capture
    triggers. Rows deleted after it was taken show up as short inserts.
    """

    def __init__(
        self,
        *,
        migration: data.Migration,
        connection: data.Connection,
        throttler: data.Throttler,
        ids: typing.Iterable[int] | None = None,
    ):
        self._migration: typing.Final[data.Migration] = migration
        self._connection: typing.Final[data.Connection] = connection
        self._throttler: typing.Final[data.Throttler] = throttler

        if ids is None:
            ids = self._select_ids_from_db()

        self._ids: typing.Final[tuple[int, ...]] = tuple(ids)

        self._processed_rows = 0
        self._started = False

    @property
    def ids(self) -> tuple[int, ...]:
        return self._ids

    @property
    def table_empty(self) -> bool:
        return not self._ids

    @property
    def max_rows(self) -> int:
        return len(self._ids)

    @property
    def processed_rows(self) -> int:
        return self._processed_rows

    def validate(self) -> None:
        pass

    def chunks(self) -> typing.Iterator[IdSetChunkInsert]:
        if self._started:
            raise data.ChunkCopyError("chunks() can only be iterated once.")
        self._started = True

        return self._generate()

    def _generate(self) -> typing.Generator[IdSetChunkInsert, None, None]:
        while self._processed_rows < len(self._ids):
            next_idx = min(self._processed_rows + read_stride(self._throttler), len(self._ids))
            ids_to_insert = self._ids[self._processed_rows:next_idx]
            self._processed_rows = next_idx

            yield IdSetChunkInsert(
                migration=self._migration,
                connection=self._connection,
                chunk=data.IdSetChunk.new(ids=ids_to_insert),
            )

    def _select_ids_from_db(self) -> list[int]:
        values = self._connection.select_values(
            f"select id from {self._migration.origin_name} order by id asc",
            should_retry=True,
            log_prefix=LOG_PREFIX,
        )
        return [int(v) for v in values]
