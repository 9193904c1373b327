import contextlib
import typing

import keyring
import pymysql

from chunkcopy import data
from chunkcopy.adapter.connection.odbc import OdbcConnection
from chunkcopy.adapter.connection.pymysql import PyMySqlConnection

__all__ = ("open",)


@contextlib.contextmanager
def open(
    *,
    db_config: data.DbConfig,
    retry_config: data.RetryConfig | None = None,
) -> typing.Generator[data.Connection, None, None]:
    connection = _connect(db_config=db_config, retry_config=retry_config)
    try:
        yield connection
    finally:
        connection.close()


def _connect(*, db_config: data.DbConfig, retry_config: data.RetryConfig | None) -> data.Connection:
    if db_config.api == data.API.PYMYSQL:
        if db_config.keyring_db_username_entry is None or db_config.keyring_db_password_entry is None:
            raise data.ConfigError(
                f"{db_config.db_id} uses the pymysql api, so keyring-db-username-entry and "
                f"keyring-db-password-entry are required."
            )

        username = keyring.get_password("system", db_config.keyring_db_username_entry)
        password = keyring.get_password("system", db_config.keyring_db_password_entry)

        con = pymysql.connect(
            host=db_config.host,
            port=db_config.port or 3306,
            database=db_config.db_name,
            user=username,
            password=password or "",
            autocommit=True,
        )
        return PyMySqlConnection(con=con, retry_config=retry_config)
    elif db_config.api == data.API.PYODBC:
        if db_config.connection_string is None:
            raise data.ConfigError(
                f"{db_config.db_id} uses the pyodbc api, so connection-string is required."
            )

        return OdbcConnection(
            connection_string=db_config.connection_string.get_secret_value(),
            retry_config=retry_config,
        )
    else:
        raise data.UnrecognizedDatabaseAPI(api=str(db_config.api))
