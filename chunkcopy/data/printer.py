import abc

__all__ = ("Printer",)


class Printer(abc.ABC):
    @abc.abstractmethod
    def notify(self, processed: int, total: int, /) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def end(self) -> None:
        raise NotImplementedError

    def exception(self, error: BaseException, /) -> None:
        pass
