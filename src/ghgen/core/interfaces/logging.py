from __future__ import annotations

"""Logger seams.

Pipeline components accept a logger; the CLI hands a `LoggerFactoryProtocol`
to `GenerateOrchestrator`, which asks it for one scoped logger per component
(`extract`, `apply`, `git`, `include`, `generate`).
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LoggerLikeProtocol(Protocol):
    """The subset of `logging.Logger` the pipeline calls."""

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


@runtime_checkable
class LoggerFactoryProtocol(Protocol):
    def get_logger(self, name: str) -> LoggerLikeProtocol:
        """Return the logger scoped to component *name* (e.g. 'ghgen.apply')."""
        ...
