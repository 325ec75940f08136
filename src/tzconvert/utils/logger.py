"""Component logging for tzconvert.

Each component asks for a named logger with ``get_logger("pipeline")``. The
returned :class:`ComponentLogger` writes through the stdlib ``logging`` module
under the ``tzconvert.`` namespace and adds a few semantic levels used across
the code base (success, key_info, timing).

Console output is configured once by the application with
:func:`configure_logging`, which installs a Rich handler.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "tzconvert"

# Default component colors, used in the Rich markup prefix
DEFAULT_COLORS: dict[str, str] = {
    "pipeline": "cyan",
    "engine": "green",
    "classifier": "magenta",
    "catalog": "yellow",
    "cli": "blue",
}


class ComponentLogger:
    """Logger bound to one component name.

    :param component_name: Short component name (e.g. "pipeline")
    :param color: Rich color used for the component prefix
    """

    def __init__(self, component_name: str, color: str = "white"):
        self.component_name = component_name
        self.color = color
        self._logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component_name}")

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _prefix(self, message: str) -> str:
        return f"[{self.color}]{self.component_name}[/{self.color}]: {message}"

    def debug(self, message: str, *args, **kwargs) -> None:
        self._logger.debug(self._prefix(message), *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self._logger.info(self._prefix(message), *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self._logger.warning(self._prefix(message), *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self._logger.error(self._prefix(message), *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        self._logger.exception(self._prefix(message), *args, **kwargs)

    def success(self, message: str, *args, **kwargs) -> None:
        self._logger.info(self._prefix(f"[bold green]✓[/bold green] {message}"), *args, **kwargs)

    def key_info(self, message: str, *args, **kwargs) -> None:
        self._logger.info(self._prefix(f"[bold]{message}[/bold]"), *args, **kwargs)

    def timing(self, message: str, *args, **kwargs) -> None:
        self._logger.debug(self._prefix(f"[dim]{message}[/dim]"), *args, **kwargs)


def get_logger(name: str, color: str | None = None) -> ComponentLogger:
    """Get a component logger.

    Args:
        name: Component name
        color: Optional color override (defaults per component)

    Returns:
        ComponentLogger bound to ``tzconvert.<name>``
    """
    return ComponentLogger(name, color or DEFAULT_COLORS.get(name, "white"))


def configure_logging(level: int | str = logging.WARNING, console: Console | None = None) -> None:
    """Install a Rich console handler on the ``tzconvert`` logger.

    Calling it again replaces the previous handler instead of stacking a new one.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        markup=True,
        show_path=False,
        rich_tracebacks=True,
    )
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False


__all__ = ["ComponentLogger", "configure_logging", "get_logger"]
