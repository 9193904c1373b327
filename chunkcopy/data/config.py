import pydantic

from chunkcopy.data.chunk_strategy import ChunkStrategy
from chunkcopy.data.db_config import DbConfig
from chunkcopy.data.retry_config import RetryConfig

__all__ = ("Config",)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class Config:
    batch_size: pydantic.PositiveInt
    throttle_millis: pydantic.NonNegativeInt
    strategy: ChunkStrategy
    raise_on_warnings: bool
    pause_before_switch_seconds: pydantic.NonNegativeFloat | None
    retry: RetryConfig
    databases: tuple[DbConfig, ...]

    def db(self, /, db_id: str) -> DbConfig | None:
        return next((db for db in self.databases if db.db_id == db_id), None)

    def __repr__(self) -> str:
        return (
            f"Config(batch_size={self.batch_size}, throttle_millis={self.throttle_millis}, "
            f"strategy={self.strategy!r}, raise_on_warnings={self.raise_on_warnings}, "
            f"databases={self.databases})"
        )
