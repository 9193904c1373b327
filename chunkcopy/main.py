import argparse
import dataclasses
import sys

import pydantic
from loguru import logger

from chunkcopy import adapter, data, service


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class CopyArgs:
    db: str
    origin: str
    destination: str
    origin_columns: tuple[str, ...]
    destination_columns: tuple[str, ...]
    filter: str | None
    start: int | None
    limit: int | None
    strategy: data.ChunkStrategy | None
    raise_on_warnings: bool


def parse_args(args: argparse.Namespace, /) -> CopyArgs | data.Error:
    try:
        match args.command:
            case "copy":
                if not args.columns:
                    return data.Error.new("--columns is required.")

                destination_columns = tuple(args.destination_columns or args.columns)
                if len(destination_columns) != len(args.columns):
                    return data.Error.new(
                        f"--destination-columns must list as many columns as --columns, but got "
                        f"{len(destination_columns)} and {len(args.columns)}."
                    )

                if args.strategy == data.ChunkStrategy.ID_SET.value and (
                    args.start is not None or args.limit is not None
                ):
                    return data.Error.new("--start and --limit can't be used with the id-set strategy.")

                return CopyArgs(
                    db=args.db,
                    origin=args.origin,
                    destination=args.destination,
                    origin_columns=tuple(args.columns),
                    destination_columns=destination_columns,
                    filter=args.filter,
                    start=args.start,
                    limit=args.limit,
                    strategy=None if args.strategy is None else data.ChunkStrategy(args.strategy),
                    raise_on_warnings=args.raise_on_warnings,
                )
            case _:
                return data.Error.new(f"{args.command} is invalid.")
    except Exception as e:
        return data.Error.new(f"An error occurred while parsing command line args: {e!s}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chunkcopy")
    subparser = parser.add_subparsers(dest="command", required=True)

    copy_parser = subparser.add_parser("copy")
    copy_parser.add_argument("--db", type=str, required=True)
    copy_parser.add_argument("--origin", type=str, required=True)
    copy_parser.add_argument("--destination", type=str, required=True)
    copy_parser.add_argument("--columns", nargs="+", type=str, required=True)
    copy_parser.add_argument("--destination-columns", nargs="+", type=str)
    copy_parser.add_argument("--filter", type=str)
    copy_parser.add_argument("--start", type=int)
    copy_parser.add_argument("--limit", type=int)
    copy_parser.add_argument("--strategy", choices=[s.value for s in data.ChunkStrategy])
    copy_parser.add_argument("--raise-on-warnings", action="store_true")

    return parser


def main() -> None:
    log_folder = adapter.fs.get_log_folder()
    if isinstance(log_folder, data.Error):
        logger.error(f"An error occurred while looking up log folder: {log_folder!s}")
        sys.exit(1)

    logger.remove()
    logger.add(sys.stderr, level="INFO")
    logger.add(log_folder / "error.log", rotation="5 MB", retention="7 days", level="ERROR")

    config_file_path = adapter.fs.get_config_path()
    if isinstance(config_file_path, data.Error):
        logger.error(f"An error occurred while looking up config_file_path: {config_file_path!s}")
        sys.exit(1)

    config = adapter.config.load(config_file=config_file_path)
    if isinstance(config, data.Error):
        logger.error(f"An error occurred while loading config file: {config!s}")
        sys.exit(1)

    args = build_parser().parse_args(sys.argv[1:])

    match parse_args(args):
        case CopyArgs() as copy_args:
            db_config = config.db(copy_args.db)
            if db_config is None:
                logger.error(
                    f"--db was {copy_args.db}, but could not find database entry by that name in the config file."
                )
                sys.exit(1)

            if copy_args.strategy is not None:
                config = dataclasses.replace(config, strategy=copy_args.strategy)

            if copy_args.raise_on_warnings:
                config = dataclasses.replace(config, raise_on_warnings=True)

            migration = data.Migration(
                origin_name=copy_args.origin,
                destination_name=copy_args.destination,
                origin_columns=copy_args.origin_columns,
                destination_columns=copy_args.destination_columns,
                conditions=copy_args.filter,
            )

            result = service.copy_table(
                db_config=db_config,
                migration=migration,
                config=config,
                start=copy_args.start,
                limit=copy_args.limit,
            )
            if isinstance(result, data.Error):
                logger.error(f"An error occurred while copying {copy_args.origin}: {result!s}")
                sys.exit(1)
        case data.Error() as error:
            logger.error(str(error))
            sys.exit(1)


if __name__ == "__main__":
    main()
