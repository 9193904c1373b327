from __future__ import annotations

import abc
import typing

if typing.TYPE_CHECKING:
    from chunkcopy.data.connection import Connection

__all__ = ("RetryPolicy",)

T = typing.TypeVar("T")


class RetryPolicy(abc.ABC):
    @abc.abstractmethod
    def with_retries(
        self,
        fn: typing.Callable[[Connection], T],
        /,
        **overrides: typing.Any,
    ) -> T:
        raise NotImplementedError
