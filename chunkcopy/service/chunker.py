import re
import time
import typing

from loguru import logger

from chunkcopy import adapter, data

__all__ = ("Chunker", "Verifier")

LOG_PREFIX: typing.Final[str] = "Chunker"

LOG_INTERVAL_SECONDS: typing.Final[float] = 5 * 60

_DUPLICATE_PK_WARNING: typing.Final[re.Pattern[str]] = re.compile(
    r"Duplicate entry .+ for key '(?:[^']+\.)?PRIMARY'"
)

Verifier = typing.Callable[[data.Connection], bool]


class Chunker:
    """Copies the origin table into the destination table one chunk at a time.

    Every insert uses ``insert ignore``, so rows the change-capture triggers
    already wrote are skipped, and re-running the whole copy after a crash is
    safe. When a chunk inserts fewer rows than expected, the server's warnings
    are checked: duplicate primary keys are expected, anything else is logged
    and, with ``raise_on_warnings``, aborts the copy.
    """

    def __init__(
        self,
        *,
        chunk_finder: data.ChunkFinder,
        connection: data.Connection,
        throttler: data.Throttler | None = None,
        printer: data.Printer | None = None,
        verifier: Verifier | None = None,
        raise_on_warnings: bool = False,
        pause_before_switch: float | None = None,
        retry_options: dict[str, typing.Any] | None = None,
    ):
        self._chunk_finder: typing.Final[data.ChunkFinder] = chunk_finder
        self._connection: typing.Final[data.Connection] = connection
        self._throttler: typing.Final[data.Throttler | None] = throttler
        self._printer: typing.Final[data.Printer] = printer or adapter.PercentagePrinter()
        self._verifier: typing.Final[Verifier | None] = verifier
        self._raise_on_warnings: typing.Final[bool] = raise_on_warnings
        self._pause_before_switch: typing.Final[float | None] = pause_before_switch
        self._retry_options: typing.Final[dict[str, typing.Any]] = dict(retry_options or {})

        if self._throttler is not None:
            self._throttler.bind(self._connection)

    def execute(self) -> data.CopyResult:
        start_time = time.monotonic()
        try:
            if self._chunk_finder.table_empty:
                logger.info("The origin table is empty, so there is nothing to copy.")
                return data.CopyResult.skipped(reason="origin table is empty.")

            chunks = 0
            rows_inserted = 0
            last_log_time = start_time
            for chunk in self._chunk_finder.chunks():
                self._verify_can_run()

                affected_rows = chunk.insert_and_return_count_of_rows_created()
                chunks += 1
                rows_inserted += affected_rows

                current_time = time.monotonic()
                if current_time - last_log_time > LOG_INTERVAL_SECONDS:
                    logger.info(
                        f"Inserted {rows_inserted:,} rows into the destination table so far, "
                        f"currently at ids {chunk.bottom} to {chunk.top}."
                    )
                    last_log_time = current_time

                if affected_rows < chunk.expected_rows:
                    self._raise_on_non_pk_duplicate_warning()

                if self._throttler is not None and affected_rows > 0:
                    self._throttler.run()

                self._printer.notify(self._chunk_finder.processed_rows, self._chunk_finder.max_rows)

            self._printer.end()

            if self._pause_before_switch:
                logger.info(f"Pausing {self._pause_before_switch} seconds before the switch.")
                time.sleep(self._pause_before_switch)

            return data.CopyResult.succeeded(
                chunks=chunks,
                rows_inserted=rows_inserted,
                execution_millis=int((time.monotonic() - start_time) * 1000),
            )
        except Exception as e:
            self._printer.exception(e)
            raise

    def validate(self) -> None:
        if self._chunk_finder.table_empty:
            return

        self._chunk_finder.validate()

    def _verify_can_run(self) -> None:
        if self._verifier is None:
            return

        verifier = self._verifier

        def verify(connection: data.Connection) -> None:
            if not verifier(connection):
                raise data.VerificationFailure()

        self._connection.retry.with_retries(
            verify,
            **{"log_prefix": LOG_PREFIX, **self._retry_options},
        )

    def _raise_on_non_pk_duplicate_warning(self) -> None:
        warnings = self._connection.execute("show warnings", should_retry=True, log_prefix=LOG_PREFIX)
        for _level, _code, message in warnings:
            if not _DUPLICATE_PK_WARNING.search(str(message)):
                m = f"Unexpected warning found for inserted row: {message}"
                logger.warning(m)
                if self._raise_on_warnings:
                    raise data.UnexpectedWarning(message=str(message))
