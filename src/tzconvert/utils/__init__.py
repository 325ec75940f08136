"""Utilities Package.

Modules:
    logger: Component logging with a Rich console handler
"""

from . import logger

__all__ = ["logger"]
