import functools
import json
import math
import pathlib
import typing

import pydantic

from chunkcopy import data

__all__ = ("load", "parse")


@functools.lru_cache(maxsize=1)
def load(*, config_file: pathlib.Path) -> data.Config | data.Error:
    try:
        if not config_file.exists():
            return data.Error.new(
                f"The config file specified, {config_file.resolve()!s}, does not exist.",
                config_file=config_file,
            )

        with config_file.open("r") as fh:
            d = typing.cast(dict[str, typing.Any], json.load(fh))

        return parse(d)
    except Exception as e:
        return data.Error.new(
            f"An error occurred while loading the config file: {e!s}",
            config_file=config_file,
        )


def parse(d: dict[str, typing.Any], /) -> data.Config | data.Error:
    try:
        for key in ("batch-size", "throttle-millis", "strategy", "databases"):
            if key not in d.keys():
                return data.Error.new(f"config file is missing an entry for {key!r}.")

        try:
            strategy: typing.Final[data.ChunkStrategy] = data.ChunkStrategy(d["strategy"])
        except ValueError:
            return data.Error.new(
                f"could not convert strategy entry, {d['strategy']!r}, to a data.ChunkStrategy instance."
            )

        retry = _parse_retry_dict(d.get("retry") or {})
        if isinstance(retry, data.Error):
            return retry

        databases: list[data.DbConfig] = []
        for db_dict in d["databases"]:
            database = _parse_db_dict(db_dict)
            if isinstance(database, data.Error):
                return database

            databases.append(database)

        raise_on_warnings = d.get("raise-on-warnings", False)
        if not isinstance(raise_on_warnings, bool):
            return data.Error.new(
                f"raise-on-warnings must be true or false, but got {raise_on_warnings!r}."
            )

        pause = d.get("pause-before-switch-seconds")

        return data.Config(
            batch_size=int(d["batch-size"]),
            throttle_millis=int(d["throttle-millis"]),
            strategy=strategy,
            raise_on_warnings=raise_on_warnings,
            pause_before_switch_seconds=None if pause is None else float(pause),
            retry=retry,
            databases=tuple(databases),
        )
    except Exception as e:
        return data.Error.new(f"An error occurred while parsing the config: {e!s}")


def _parse_retry_dict(retry_dict: dict[str, typing.Any], /) -> data.RetryConfig | data.Error:
    try:
        max_elapsed_time = retry_dict.get("max-elapsed-time")

        return data.RetryConfig.default().merge(
            tries=retry_dict.get("tries"),
            base_interval=retry_dict.get("base-interval"),
            multiplier=retry_dict.get("multiplier"),
            rand_factor=retry_dict.get("rand-factor"),
            max_elapsed_time=math.inf if max_elapsed_time is None else float(max_elapsed_time),
        )
    except pydantic.ValidationError as e:
        return data.Error.new(f"retry entry in config file is invalid: {e!s}")


def _parse_db_dict(db_dict: dict[str, typing.Any], /) -> data.DbConfig | data.Error:
    try:
        if "name" not in db_dict.keys():
            return data.Error.new("database entry in config file is missing an entry for 'name'.")

        name: typing.Final[str] = db_dict["name"]

        if "api" not in db_dict.keys():
            return data.Error.new("database entry in config file is missing an entry for 'api'.")

        try:
            api: typing.Final[data.API] = data.API(db_dict["api"])
        except ValueError:
            return data.Error.new(
                f"could not convert api entry, {db_dict['api']!r}, to a data.API instance."
            )

        connection_string: typing.Final[str | None] = db_dict.get("connection-string")
        host: typing.Final[str | None] = db_dict.get("host")
        port: typing.Final[int | None] = db_dict.get("port")
        db_name: typing.Final[str | None] = db_dict.get("db-name")
        keyring_db_username_entry: typing.Final[str | None] = db_dict.get("keyring-db-username-entry")
        keyring_db_password_entry: typing.Final[str | None] = db_dict.get("keyring-db-password-entry")

        if connection_string is None:
            if (
                host is None
                or keyring_db_username_entry is None
                or keyring_db_password_entry is None
            ):
                return data.Error.new(
                    "If connection-string is null, then host, keyring-db-username-entry, and "
                    "keyring-db-password-entry must be provided.",
                    name=name,
                )

        return data.DbConfig(
            db_id=name,
            api=api,
            host=host,
            port=None if port is None else int(port),
            db_name=db_name,
            keyring_db_username_entry=keyring_db_username_entry,
            keyring_db_password_entry=keyring_db_password_entry,
            connection_string=None if connection_string is None else pydantic.SecretStr(connection_string),
        )
    except Exception as e:
        return data.Error.new(f"An error occurred while parsing database entry from json: {e!s}")
