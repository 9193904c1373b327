from __future__ import annotations

import abc
import contextlib
import typing

from loguru import logger

from chunkcopy import data
from chunkcopy.adapter.sql_retry import SqlRetry

__all__ = (
    "DbApiConnection",
    "fetch_all",
    "fetch_value",
    "fetch_values",
    "query_errors",
    "rowcount",
)

T = typing.TypeVar("T")


class DbApiConnection(data.Connection, abc.ABC):
    """Implements the statement methods on top of a DB-API 2.0 cursor.

    Subclasses must have their driver connection ready before calling
    ``super().__init__``, since the retry policy looks up the server host
    straight away.
    """

    def __init__(self, *, retry_config: data.RetryConfig | None):
        self._retry: typing.Final[SqlRetry] = SqlRetry(connection=self, config=retry_config)

    @property
    def retry(self) -> SqlRetry:
        return self._retry

    @abc.abstractmethod
    def _cursor(self) -> typing.Any:
        raise NotImplementedError

    def select_value(
        self,
        sql: str,
        /,
        *,
        should_retry: bool = False,
        log_prefix: str | None = None,
    ) -> typing.Any | None:
        return self._run(sql, fetch_value, should_retry=should_retry, log_prefix=log_prefix)

    def select_values(
        self,
        sql: str,
        /,
        *,
        should_retry: bool = False,
        log_prefix: str | None = None,
    ) -> list[typing.Any]:
        return self._run(sql, fetch_values, should_retry=should_retry, log_prefix=log_prefix)

    def update(
        self,
        sql: str,
        /,
        *,
        should_retry: bool = False,
        log_prefix: str | None = None,
    ) -> int:
        return self._run(sql, rowcount, should_retry=should_retry, log_prefix=log_prefix)

    def execute(
        self,
        sql: str,
        /,
        *,
        should_retry: bool = False,
        log_prefix: str | None = None,
    ) -> list[tuple[typing.Any, ...]]:
        return self._run(sql, fetch_all, should_retry=should_retry, log_prefix=log_prefix)

    def _run(
        self,
        sql: str,
        fetch: typing.Callable[[typing.Any], T],
        /,
        *,
        should_retry: bool,
        log_prefix: str | None,
    ) -> T:
        if errors := query_errors(sql):
            raise ValueError("\n".join(errors))

        if should_retry:
            return self._retry.with_retries(
                lambda _: self._run_once(sql, fetch),
                log_prefix=log_prefix,
            )

        return self._run_once(sql, fetch)

    def _run_once(self, sql: str, fetch: typing.Callable[[typing.Any], T], /) -> T:
        logger.debug(sql)

        with contextlib.closing(self._cursor()) as cur:
            cur.execute(sql)
            return fetch(cur)


def fetch_value(cur: typing.Any, /) -> typing.Any | None:
    if row := cur.fetchone():
        return row[0]
    return None


def fetch_values(cur: typing.Any, /) -> list[typing.Any]:
    return [row[0] for row in cur.fetchall()]


def rowcount(cur: typing.Any, /) -> int:
    return int(cur.rowcount)


def fetch_all(cur: typing.Any, /) -> list[tuple[typing.Any, ...]]:
    if cur.description is None:
        return []
    return [tuple(row) for row in cur.fetchall()]


def query_errors(sql: str, /) -> list[str]:
    errors: list[str] = []

    if ";" in sql:
        errors.append("; is not allowed in sql queries.")

    if "--" in sql:
        errors.append("-- is not allowed in sql queries.")

    if "/*" in sql:
        errors.append("/* is not allowed in sql queries.")

    if "*/" in sql:
        errors.append("*/ is not allowed in sql queries.")

    return errors
