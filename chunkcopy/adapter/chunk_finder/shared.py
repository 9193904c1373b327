from chunkcopy import data

__all__ = ("LOG_PREFIX", "read_stride")

LOG_PREFIX = "Chunker"


def read_stride(throttler: data.Throttler, /) -> int:
    stride = throttler.stride()
    if stride < 1:
        raise data.ChunkCopyError(f"The throttler's stride must be at least 1, but got {stride}.")
    return stride
