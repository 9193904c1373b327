import typing

from chunkcopy import data
from chunkcopy.adapter.chunk_finder.shared import LOG_PREFIX, read_stride
from chunkcopy.adapter.chunk_insert import RangeChunkInsert

__all__ = ("RangeChunkFinder",)


class RangeChunkFinder(data.ChunkFinder):
    """Splits ``[start, limit]`` into id ranges holding at most ``stride`` rows each.

    Each range starts at the first existing id at or above the cursor, and its
    top is found with an indexed lookup ``stride - 1`` rows further on, so gaps
    in the id space never produce a chunk that covers more than ``stride``
    rows. The stride is read from the throttler before every lookup.
    """

    def __init__(
        self,
        *,
        migration: data.Migration,
        connection: data.Connection,
        throttler: data.Throttler,
        start: int | None = None,
        limit: int | None = None,
    ):
        self._migration: typing.Final[data.Migration] = migration
        self._connection: typing.Final[data.Connection] = connection
        self._throttler: typing.Final[data.Throttler] = throttler

        self._start: typing.Final[int | None] = start if start is not None else self._select_start_from_db()
        self._limit: typing.Final[int | None] = limit if limit is not None else self._select_limit_from_db()

        self._processed_rows = 0
        self._started = False

    @property
    def start(self) -> int | None:
        return self._start

    @property
    def limit(self) -> int | None:
        return self._limit

    @property
    def table_empty(self) -> bool:
        return self._start is None and self._limit is None

    @property
    def max_rows(self) -> int:
        if self._start is None or self._limit is None:
            return 0
        return self._limit - self._start + 1

    @property
    def processed_rows(self) -> int:
        return self._processed_rows

    def validate(self) -> None:
        if self._start is None or self._limit is None or self._start > self._limit:
            raise data.BoundsError(start=self._start, limit=self._limit)

    def chunks(self) -> typing.Iterator[RangeChunkInsert]:
        if self._started:
            raise data.ChunkCopyError("chunks() can only be iterated once.")
        self._started = True

        return self._generate()

    def _generate(self) -> typing.Generator[RangeChunkInsert, None, None]:
        if self.table_empty:
            return

        self.validate()

        next_id = typing.cast(int, self._start)
        limit = typing.cast(int, self._limit)
        while next_id <= limit:
            bottom = self._select_id(next_id=next_id, offset=0)
            if bottom is None or bottom > limit:
                break

            stride = read_stride(self._throttler)
            top = self._upper_id(bottom=bottom, stride=stride)

            if top == limit:
                self._processed_rows = self.max_rows
            else:
                self._processed_rows = min(self._processed_rows + stride, self.max_rows)

            yield RangeChunkInsert(
                migration=self._migration,
                connection=self._connection,
                chunk=data.RangeChunk.new(bottom=bottom, top=top),
            )

            next_id = top + 1

        self._processed_rows = self.max_rows

    def _select_start_from_db(self) -> int | None:
        value = self._connection.select_value(
            f"select min(id) from {self._migration.origin_name}",
            should_retry=True,
            log_prefix=LOG_PREFIX,
        )
        return None if value is None else int(value)

    def _select_limit_from_db(self) -> int | None:
        value = self._connection.select_value(
            f"select max(id) from {self._migration.origin_name}",
            should_retry=True,
            log_prefix=LOG_PREFIX,
        )
        return None if value is None else int(value)

    def _upper_id(self, *, bottom: int, stride: int) -> int:
        limit = typing.cast(int, self._limit)

        top = self._select_id(next_id=bottom, offset=stride - 1)
        if top is None:
            return limit

        return min(top, limit)

    def _select_id(self, *, next_id: int, offset: int) -> int | None:
        value = self._connection.select_value(
            f"select id from {self._migration.origin_name} where id >= {next_id} "
            f"order by id limit 1 offset {offset}",
            should_retry=True,
            log_prefix=LOG_PREFIX,
        )
        return None if value is None else int(value)
