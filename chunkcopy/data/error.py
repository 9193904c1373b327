from __future__ import annotations

import typing

import pydantic

__all__ = (
    "BoundsError",
    "ChunkCopyError",
    "ConfigError",
    "Error",
    "HostDivergenceError",
    "TransientSqlError",
    "UnexpectedWarning",
    "UnrecognizedDatabaseAPI",
    "VerificationFailure",
)


class ChunkCopyError(Exception):
    """Base class for errors occurring in the chunkcopy codebase"""


class BoundsError(ChunkCopyError):
    def __init__(self, *, start: typing.Any, limit: typing.Any):
        self.start = start
        self.limit = limit

        super().__init__(
            f"impossible chunk options (limit ({limit!r}) must be greater than start ({start!r}))"
        )


class VerificationFailure(ChunkCopyError):
    def __init__(self) -> None:
        super().__init__("Verification failed, aborting early")


class UnexpectedWarning(ChunkCopyError):
    def __init__(self, *, message: str):
        self.warning_message = message

        super().__init__(f"Unexpected warning found for inserted row: {message}")


class TransientSqlError(ChunkCopyError):
    """A database condition that is expected to clear up if the operation is tried again."""


class HostDivergenceError(TransientSqlError):
    def __init__(self, *, initial_host: str | None, current_host: str | None):
        self.initial_host = initial_host
        self.current_host = current_host

        super().__init__(
            f"Different MySQL server host than the initial host (initial: {initial_host}, "
            f"current: {current_host})"
        )


class ConfigError(ChunkCopyError):
    """Error arising from loading or parsing the config file."""


class UnrecognizedDatabaseAPI(ChunkCopyError):
    def __init__(self, *, api: str):
        super().__init__(f"The database api specified, {api}, was not recognized.")


@pydantic.dataclasses.dataclass(frozen=True)
class Error:
    message: str
    context: tuple[tuple[str, str], ...] = ()

    @staticmethod
    def new(message: str, /, **context: typing.Any) -> Error:
        return Error(
            message=message,
            context=tuple((key, repr(value)) for key, value in sorted(context.items())),
        )

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{key}={value}" for key, value in self.context)
            return f"{self.message} [{ctx}]"
        return self.message
