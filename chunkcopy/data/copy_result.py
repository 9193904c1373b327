from __future__ import annotations

import typing

import pydantic

__all__ = ("CopyResult",)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=pydantic.ConfigDict(strict=True))
class CopyResult:
    chunks: int
    execution_millis: int
    rows_inserted: int
    skip_reason: str | None
    status: typing.Literal["skipped", "succeeded"]

    @staticmethod
    def skipped(*, reason: str) -> CopyResult:
        return CopyResult(
            chunks=0,
            execution_millis=0,
            rows_inserted=0,
            skip_reason=reason,
            status="skipped",
        )

    @staticmethod
    def succeeded(*, chunks: int, rows_inserted: int, execution_millis: int) -> CopyResult:
        return CopyResult(
            chunks=chunks,
            execution_millis=execution_millis,
            rows_inserted=rows_inserted,
            skip_reason=None,
            status="succeeded",
        )
