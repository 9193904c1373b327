import time
import typing

from chunkcopy import data

__all__ = ("TimeThrottler",)

DEFAULT_STRIDE: typing.Final[int] = 2_000
DEFAULT_DELAY_MILLIS: typing.Final[int] = 100


class TimeThrottler(data.Throttler):
    """Fixed stride, fixed pause between chunks."""

    def __init__(self, *, stride: int = DEFAULT_STRIDE, delay_millis: int = DEFAULT_DELAY_MILLIS):
        if stride < 1:
            raise ValueError(f"stride must be at least 1, but got {stride}.")

        if delay_millis < 0:
            raise ValueError(f"delay_millis must not be negative, but got {delay_millis}.")

        self._stride: typing.Final[int] = stride
        self._delay_millis: typing.Final[int] = delay_millis

    def stride(self) -> int:
        return self._stride

    def run(self) -> None:
        if self._delay_millis:
            time.sleep(self._delay_millis / 1000)
