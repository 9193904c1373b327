from __future__ import annotations

import typing

import pymysql

from chunkcopy import data
from chunkcopy.adapter.connection.shared import DbApiConnection

__all__ = ("PyMySqlConnection",)


class PyMySqlConnection(DbApiConnection):
    def __init__(
        self,
        *,
        con: pymysql.connections.Connection,
        retry_config: data.RetryConfig | None = None,
    ):
        self._con: typing.Final[pymysql.connections.Connection] = con

        super().__init__(retry_config=retry_config)

    def _cursor(self) -> pymysql.cursors.Cursor:
        return self._con.cursor()

    def reconnect(self) -> None:
        self._con.ping(reconnect=True)

    def close(self) -> None:
        if self._con.open:
            self._con.close()
