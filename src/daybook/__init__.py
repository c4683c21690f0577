"""Daybook core: configuration, logging and the error taxonomy."""

from .config import Config, load_config
from .errors import (
    DaybookError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    PlatformError,
    UnauthenticatedError,
)
from .logger import setup_logger

__all__ = [
    "Config",
    "load_config",
    "setup_logger",
    "DaybookError",
    "InternalError",
    "InvalidArgumentError",
    "NotFoundError",
    "PlatformError",
    "UnauthenticatedError",
]
