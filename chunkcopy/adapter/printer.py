from loguru import logger

from chunkcopy import data

__all__ = ("PercentagePrinter",)


class PercentagePrinter(data.Printer):
    """Logs how far along the copy is whenever the whole percentage changes."""

    def __init__(self) -> None:
        self._last_pct: int | None = None

    def notify(self, processed: int, total: int, /) -> None:
        if total <= 0:
            return

        pct = min(100, int(processed * 100 / total))
        if pct != self._last_pct:
            self._last_pct = pct
            logger.info(f"{pct}% complete ({processed:,} of {total:,} rows)")

    def end(self) -> None:
        logger.info("100% complete")

    def exception(self, error: BaseException, /) -> None:
        logger.error(f"Copy failed at {self._last_pct or 0}%: {error!s}")
