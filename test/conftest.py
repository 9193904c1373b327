import re
import typing

import pytest
from loguru import logger

from chunkcopy import adapter, data

_OFFSET_SQL = re.compile(r"where id >= (?P<next_id>\d+) order by id limit 1 offset (?P<offset>\d+)")
_BETWEEN_SQL = re.compile(r"\.id between (?P<bottom>\d+) and (?P<top>\d+)")
_IN_SQL = re.compile(r"\.id in \((?P<ids>[\d,]+)\)")


class FakeClock:
    """Stands in for the ``time`` module so sleeps are recorded rather than waited out."""

    def __init__(self, *, now: float = 0.0):
        self.now = now
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeTableConnection(data.Connection):
    """An origin table held in memory, copied into an in-memory destination with insert ignore semantics."""

    def __init__(
        self,
        *,
        ids: typing.Iterable[int] = (),
        host: str = "db-1",
        port: int = 3306,
        warnings: typing.Iterable[tuple[str, int, str]] = (),
        retry_config: data.RetryConfig | None = None,
    ):
        self.ids: list[int] = sorted(ids)
        self.destination: set[int] = set()
        self.host = host
        self.port = port
        self.warnings = list(warnings)
        self.calls: list[tuple[str, str, bool, str | None]] = []
        self.reconnects = 0
        self.closed = False
        self._retry = adapter.SqlRetry(connection=self, config=retry_config)

    @property
    def retry(self) -> adapter.SqlRetry:
        return self._retry

    @property
    def updates(self) -> list[str]:
        return [sql for method, sql, _, _ in self.calls if method == "update"]

    def select_value(self, sql: str, /, *, should_retry: bool = False, log_prefix: str | None = None) -> typing.Any:
        self.calls.append(("select_value", sql, should_retry, log_prefix))

        if sql.startswith("select min(id)"):
            return min(self.ids, default=None)

        if sql.startswith("select max(id)"):
            return max(self.ids, default=None)

        if match := _OFFSET_SQL.search(sql):
            candidates = [i for i in self.ids if i >= int(match.group("next_id"))]
            offset = int(match.group("offset"))
            return candidates[offset] if offset < len(candidates) else None

        raise AssertionError(f"Unexpected select_value: {sql}")

    def select_values(self, sql: str, /, *, should_retry: bool = False, log_prefix: str | None = None) -> list[typing.Any]:
        self.calls.append(("select_values", sql, should_retry, log_prefix))

        if sql.endswith("order by id asc"):
            return list(self.ids)

        raise AssertionError(f"Unexpected select_values: {sql}")

    def update(self, sql: str, /, *, should_retry: bool = False, log_prefix: str | None = None) -> int:
        self.calls.append(("update", sql, should_retry, log_prefix))

        if match := _BETWEEN_SQL.search(sql):
            bottom, top = int(match.group("bottom")), int(match.group("top"))
            matching = {i for i in self.ids if bottom <= i <= top}
        elif match := _IN_SQL.search(sql):
            wanted = {int(i) for i in match.group("ids").split(",")}
            matching = wanted.intersection(self.ids)
        else:
            raise AssertionError(f"Unexpected update: {sql}")

        inserted = matching - self.destination
        self.destination |= inserted
        return len(inserted)

    def execute(self, sql: str, /, *, should_retry: bool = False, log_prefix: str | None = None) -> list[tuple[typing.Any, ...]]:
        self.calls.append(("execute", sql, should_retry, log_prefix))

        if "@@hostname" in sql:
            return [(self.host, self.port)]

        if sql == "show warnings":
            return list(self.warnings)

        return []

    def reconnect(self) -> None:
        self.reconnects += 1

    def close(self) -> None:
        self.closed = True


class FakeThrottler(data.Throttler):
    def __init__(self, *strides: int):
        self._strides = list(strides) or [2]
        self.stride_calls = 0
        self.runs = 0
        self.connection: data.Connection | None = None

    def stride(self) -> int:
        stride = self._strides[min(self.stride_calls, len(self._strides) - 1)]
        self.stride_calls += 1
        return stride

    def run(self) -> None:
        self.runs += 1

    def bind(self, connection: data.Connection, /) -> None:
        self.connection = connection


class RecordingPrinter(data.Printer):
    def __init__(self) -> None:
        self.notifications: list[tuple[int, int]] = []
        self.ended = False
        self.exceptions: list[BaseException] = []

    def notify(self, processed: int, total: int, /) -> None:
        self.notifications.append((processed, total))

    def end(self) -> None:
        self.ended = True

    def exception(self, error: BaseException, /) -> None:
        self.exceptions.append(error)


@pytest.fixture(scope="function")
def make_connection() -> type[FakeTableConnection]:
    return FakeTableConnection


@pytest.fixture(scope="function")
def make_throttler() -> type[FakeThrottler]:
    return FakeThrottler


@pytest.fixture(scope="function")
def printer() -> RecordingPrinter:
    return RecordingPrinter()


@pytest.fixture(scope="function")
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="function")
def migration() -> data.Migration:
    return data.Migration(
        origin_name="foo",
        destination_name="bar",
        origin_columns=("id", "name"),
        destination_columns=("id", "name"),
    )


@pytest.fixture(scope="function")
def log_messages() -> typing.Generator[list[tuple[str, str]], None, None]:
    messages: list[tuple[str, str]] = []
    handler_id = logger.add(
        lambda m: messages.append((m.record["level"].name, m.record["message"])),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)
