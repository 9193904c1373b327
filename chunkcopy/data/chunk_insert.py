import abc

__all__ = ("ChunkInsert",)


class ChunkInsert(abc.ABC):
    """Copies one chunk of origin rows into the destination table."""

    @property
    @abc.abstractmethod
    def bottom(self) -> int:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def top(self) -> int:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def expected_rows(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def sql(self) -> str:
        raise NotImplementedError

    @abc.abstractmethod
    def insert_and_return_count_of_rows_created(self) -> int:
        raise NotImplementedError
