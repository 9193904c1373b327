import traceback
import typing

from loguru import logger

from chunkcopy import adapter, data
from chunkcopy.service.chunker import Chunker, Verifier

__all__ = ("copy_table",)


def copy_table(
    *,
    db_config: data.DbConfig,
    migration: data.Migration,
    config: data.Config,
    start: int | None = None,
    limit: int | None = None,
    ids: typing.Iterable[int] | None = None,
    verifier: Verifier | None = None,
    printer: data.Printer | None = None,
) -> data.CopyResult | data.Error:
    try:
        with adapter.connection.open(db_config=db_config, retry_config=config.retry) as con:
            throttler = adapter.TimeThrottler(
                stride=config.batch_size,
                delay_millis=config.throttle_millis,
            )

            chunk_finder = adapter.chunk_finder.create(
                strategy=config.strategy,
                migration=migration,
                connection=con,
                throttler=throttler,
                start=start,
                limit=limit,
                ids=ids,
            )

            chunker = Chunker(
                chunk_finder=chunk_finder,
                connection=con,
                throttler=throttler,
                printer=printer,
                verifier=verifier,
                raise_on_warnings=config.raise_on_warnings,
                pause_before_switch=config.pause_before_switch_seconds,
            )
            chunker.validate()

            logger.info(
                f"Copying {migration.origin_name} into {migration.destination_name} using the "
                f"{config.strategy!s} strategy..."
            )

            result = chunker.execute()

            logger.info(
                f"Finished copying {migration.origin_name} into {migration.destination_name}: "
                f"{result.rows_inserted:,} rows in {result.chunks:,} chunks."
            )

            return result
    except Exception as e:
        logger.error(f"An error occurred while running copy_table: {e!s}")

        return data.Error.new(
            f"An error occurred while running copy_table: {e!s}\n{traceback.format_exc()}",
            db_config=db_config,
            migration=migration,
            strategy=config.strategy,
            start=start,
            limit=limit,
        )
