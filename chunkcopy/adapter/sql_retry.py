"""Retry behavior shared by every statement the copy engine issues.

By default, if an error message includes "Lock wait timeout exceeded",
"Deadlock found when trying to get lock" or one of the other patterns in
``data.DEFAULT_RETRY_PATTERNS``, the statement is tried again one second
later, up to 20 attempts in total. Each retry is logged with the error, the
attempt number and the elapsed time.

Example:
    ```python
    retry = SqlRetry(connection=con)
    rows = retry.with_retries(lambda c: c.update(sql), log_prefix="ChunkInsert")
    ```
"""
from __future__ import annotations

import random
import re
import time
import typing

from loguru import logger

from chunkcopy import data

__all__ = ("SqlRetry",)

T = typing.TypeVar("T")

DEFAULT_LOG_PREFIX: typing.Final[str] = "SQL Retry"

_HOST_SQL: typing.Final[str] = "SELECT @@hostname AS host, @@port AS port"

_RECONNECT_PATTERNS: typing.Final[tuple[str, ...]] = (
    r"Lost connection to MySQL server",
    r"MySQL server has gone away",
)


class SqlRetry(data.RetryPolicy):
    def __init__(
        self,
        *,
        connection: data.Connection,
        config: data.RetryConfig | None = None,
    ):
        self._connection: typing.Final[data.Connection] = connection
        self._config: typing.Final[data.RetryConfig] = config or data.RetryConfig.default()
        self._initial_host: typing.Final[str | None] = self.hostname()

    @property
    def config(self) -> data.RetryConfig:
        return self._config

    @property
    def initial_host(self) -> str | None:
        return self._initial_host

    def hostname(self) -> str | None:
        rows = self._connection.execute(_HOST_SQL)
        if not rows:
            return None

        host, port = rows[0][0], rows[0][1]
        return f"{host}:{port}"

    def with_retries(
        self,
        fn: typing.Callable[[data.Connection], T],
        /,
        **overrides: typing.Any,
    ) -> T:
        config = self._config.merge(**overrides)
        log_prefix = config.log_prefix or DEFAULT_LOG_PREFIX
        on_retry = config.on_retry or _log_retry(log_prefix)

        start = time.monotonic()
        check_host = False
        attempt = 0
        while True:
            attempt += 1
            try:
                if check_host:
                    self._verify_host()
                    check_host = False
                return fn(self._connection)
            except Exception as e:
                if not config.is_retryable(e):
                    raise

                if attempt >= config.tries:
                    raise

                elapsed = time.monotonic() - start
                interval = _next_interval(config=config, attempt=attempt)
                if elapsed + interval > config.max_elapsed_time:
                    raise

                if _needs_reconnect(e):
                    check_host = True

                on_retry(e, attempt, elapsed, interval)

                time.sleep(interval)

    def _verify_host(self) -> None:
        self._connection.reconnect()

        current_host = self.hostname()
        if current_host != self._initial_host:
            raise data.HostDivergenceError(
                initial_host=self._initial_host,
                current_host=current_host,
            )


def _next_interval(*, config: data.RetryConfig, attempt: int) -> float:
    interval = config.base_interval * (config.multiplier ** (attempt - 1))
    if config.rand_factor:
        delta = config.rand_factor * interval
        interval = random.uniform(interval - delta, interval + delta)
    return interval


def _needs_reconnect(error: BaseException, /) -> bool:
    if isinstance(error, data.HostDivergenceError):
        return True

    message = str(error)
    return any(re.search(pattern, message) for pattern in _RECONNECT_PATTERNS)


def _log_retry(log_prefix: str, /) -> data.OnRetry:
    def on_retry(error: BaseException, attempt: int, elapsed: float, interval: float) -> None:
        logger.info(
            f"[{log_prefix}] {type(error).__name__}: '{error!s}' - {attempt} tries in "
            f"{elapsed:.2f} seconds and {interval:.2f} seconds until the next try."
        )

    return on_retry
