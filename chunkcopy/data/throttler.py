from __future__ import annotations

import abc

from chunkcopy.data.connection import Connection

__all__ = ("Throttler",)


class Throttler(abc.ABC):
    @abc.abstractmethod
    def stride(self) -> int:
        """The maximum number of rows the next chunk may cover."""
        raise NotImplementedError

    @abc.abstractmethod
    def run(self) -> None:
        raise NotImplementedError

    def bind(self, connection: Connection, /) -> None:
        """Called once with the connection the copy runs on."""
