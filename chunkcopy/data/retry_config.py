from __future__ import annotations

import dataclasses
import math
import re
import typing

import pydantic

from chunkcopy.data.error import TransientSqlError

__all__ = ("OnRetry", "RetryConfig", "RetryRule", "DEFAULT_RETRY_PATTERNS")

OnRetry = typing.Callable[[BaseException, int, float, float], None]

DEFAULT_RETRY_PATTERNS: typing.Final[tuple[str, ...]] = (
    r"Lock wait timeout exceeded",
    r"Timeout waiting for a response from the last query",
    r"Deadlock found when trying to get lock",
    r"Query execution was interrupted",
    r"Lost connection to MySQL server during query",
    r"Max connect timeout reached",
    r"Unknown MySQL server host",
    r"Different MySQL server host than the initial host",
)


@pydantic.dataclasses.dataclass(frozen=True, config=pydantic.ConfigDict(arbitrary_types_allowed=True))
class RetryRule:
    """An error kind eligible for retry, narrowed by message patterns.

    An empty ``patterns`` tuple matches any message.
    """

    error_type: type[BaseException]
    patterns: tuple[str, ...] = ()

    def matches(self, error: BaseException, /) -> bool:
        if not isinstance(error, self.error_type):
            return False

        if not self.patterns:
            return True

        message = str(error)
        return any(re.search(pattern, message) for pattern in self.patterns)


@pydantic.dataclasses.dataclass(
    frozen=True,
    kw_only=True,
    config=pydantic.ConfigDict(arbitrary_types_allowed=True),
)
class RetryConfig:
    """Retry behavior shared by every statement issued during a copy.

    Attributes:
        on: Rules an error must match to be retried. Anything else propagates immediately.
        multiplier: Each successive interval grows by this factor.
        base_interval: The initial interval in seconds between tries.
        rand_factor: Fraction used to randomize the interval (0.25 means +/-25%).
        tries: Number of attempts, including the initial one.
        max_elapsed_time: Max total seconds the operation may keep being retried.
        on_retry: Called with (error, attempt, elapsed seconds, next interval) before each backoff.
        log_prefix: Prefix for retry log lines.
    """

    on: tuple[RetryRule, ...] = (
        RetryRule(Exception, DEFAULT_RETRY_PATTERNS),
        RetryRule(TransientSqlError),
    )
    multiplier: float = pydantic.Field(default=1.0, ge=1.0)
    base_interval: float = pydantic.Field(default=1.0, ge=0.0)
    rand_factor: float = pydantic.Field(default=0.0, ge=0.0, le=1.0)
    tries: pydantic.PositiveInt = 20
    max_elapsed_time: float = pydantic.Field(default=math.inf, gt=0)
    on_retry: OnRetry | None = None
    log_prefix: str | None = None

    @staticmethod
    def default() -> RetryConfig:
        return RetryConfig()

    def merge(self, **overrides: typing.Any) -> RetryConfig:
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return dataclasses.replace(self, **changes)

    def is_retryable(self, error: BaseException, /) -> bool:
        return any(rule.matches(error) for rule in self.on)
