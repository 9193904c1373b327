import typing

from chunkcopy import data
from chunkcopy.adapter.chunk_insert.shared import LOG_PREFIX, build_sql

__all__ = ("RangeChunkInsert",)


class RangeChunkInsert(data.ChunkInsert):
    def __init__(
        self,
        *,
        migration: data.Migration,
        connection: data.Connection,
        chunk: data.RangeChunk,
    ):
        self._migration: typing.Final[data.Migration] = migration
        self._connection: typing.Final[data.Connection] = connection
        self._chunk: typing.Final[data.RangeChunk] = chunk

    @property
    def bottom(self) -> int:
        return self._chunk.bottom

    @property
    def top(self) -> int:
        return self._chunk.top

    @property
    def expected_rows(self) -> int:
        return self._chunk.expected_rows

    def sql(self) -> str:
        return build_sql(
            migration=self._migration,
            id_condition=(
                f"{self._migration.origin_name}.id between {self._chunk.bottom} and {self._chunk.top}"
            ),
        )

    def insert_and_return_count_of_rows_created(self) -> int:
        return self._connection.update(self.sql(), should_retry=True, log_prefix=LOG_PREFIX)

    def __repr__(self) -> str:
        return f"RangeChunkInsert(bottom={self.bottom}, top={self.top})"
