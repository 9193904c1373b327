import enum

__all__ = ("ChunkStrategy",)


class ChunkStrategy(enum.Enum):
    RANGE = "range"
    ID_SET = "id-set"

    def __repr__(self) -> str:
        return f"ChunkStrategy.{self.name}"

    def __str__(self) -> str:
        return self.value
