import abc
import typing

from chunkcopy.data.chunk_insert import ChunkInsert

__all__ = ("ChunkFinder",)


class ChunkFinder(abc.ABC):
    @property
    @abc.abstractmethod
    def table_empty(self) -> bool:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def max_rows(self) -> int:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def processed_rows(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def validate(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def chunks(self) -> typing.Iterator[ChunkInsert]:
        raise NotImplementedError
