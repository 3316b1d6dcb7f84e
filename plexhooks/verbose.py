import logging
import typing

__all__ = ["SupportsVerbose", "TraceRecorder", "VerboseLogger"]


@typing.runtime_checkable
class SupportsVerbose(typing.Protocol):
    """Sink for the filter evaluation trace."""

    def verbose(self, message: str) -> None: ...


class VerboseLogger:
    """
    Wrap a standard logger with a ``verbose`` level.

    Verbose lines go to INFO when verbose output is switched on in the
    settings and to DEBUG otherwise.
    """

    def __init__(
        self, logger: typing.Optional[logging.Logger] = None, verbose: bool = False
    ) -> None:
        self.logger = logger or logging.getLogger("plexhooks")
        self.verbose_enabled = verbose

    def verbose(self, message: str) -> None:
        if self.verbose_enabled:
            self.logger.info(message)
        else:
            self.logger.debug(message)

    def debug(self, message: str, *args: typing.Any) -> None:
        self.logger.debug(message, *args)

    def info(self, message: str, *args: typing.Any) -> None:
        self.logger.info(message, *args)

    def warning(self, message: str, *args: typing.Any) -> None:
        self.logger.warning(message, *args)

    def error(self, message: str, *args: typing.Any, **kwargs: typing.Any) -> None:
        self.logger.error(message, *args, **kwargs)

    def __repr__(self) -> str:
        return f"VerboseLogger <{self.logger.name}, verbose={self.verbose_enabled}>"


class TraceRecorder:
    """Sink that keeps the trace lines in order, for display or replay."""

    def __init__(self) -> None:
        self.lines: typing.List[str] = []

    def verbose(self, message: str) -> None:
        self.lines.append(message)

    def clear(self) -> None:
        self.lines.clear()

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)
