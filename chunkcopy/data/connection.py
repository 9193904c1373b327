from __future__ import annotations

import abc
import typing

from chunkcopy.data.retry_policy import RetryPolicy

__all__ = ("Connection",)


class Connection(abc.ABC):
    """A live database connection.

    Every statement method accepts ``should_retry`` and ``log_prefix``. When
    ``should_retry`` is true the statement runs under the connection's retry
    policy, otherwise it is sent once.
    """

    @property
    @abc.abstractmethod
    def retry(self) -> RetryPolicy:
        raise NotImplementedError

    @abc.abstractmethod
    def select_value(
        self,
        sql: str,
        /,
        *,
        should_retry: bool = False,
        log_prefix: str | None = None,
    ) -> typing.Any | None:
        raise NotImplementedError

    @abc.abstractmethod
    def select_values(
        self,
        sql: str,
        /,
        *,
        should_retry: bool = False,
        log_prefix: str | None = None,
    ) -> list[typing.Any]:
        raise NotImplementedError

    @abc.abstractmethod
    def update(
        self,
        sql: str,
        /,
        *,
        should_retry: bool = False,
        log_prefix: str | None = None,
    ) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def execute(
        self,
        sql: str,
        /,
        *,
        should_retry: bool = False,
        log_prefix: str | None = None,
    ) -> list[tuple[typing.Any, ...]]:
        raise NotImplementedError

    @abc.abstractmethod
    def reconnect(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def close(self) -> None:
        raise NotImplementedError
