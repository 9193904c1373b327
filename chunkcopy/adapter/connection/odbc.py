from __future__ import annotations

import pyodbc
from loguru import logger

from chunkcopy import data
from chunkcopy.adapter.connection.shared import DbApiConnection

__all__ = ("OdbcConnection",)


class OdbcConnection(DbApiConnection):
    def __init__(
        self,
        *,
        connection_string: str,
        retry_config: data.RetryConfig | None = None,
    ):
        self._connection_string = connection_string
        self._con: pyodbc.Connection = pyodbc.connect(connection_string, autocommit=True)

        super().__init__(retry_config=retry_config)

    def _cursor(self) -> pyodbc.Cursor:
        return self._con.cursor()

    def reconnect(self) -> None:
        try:
            self._con.close()
        except pyodbc.Error as e:
            logger.debug(f"Ignoring error while closing the stale connection: {e!s}")

        self._con = pyodbc.connect(self._connection_string, autocommit=True)

    def close(self) -> None:
        self._con.close()
