"""
Cli package.
"""

from .cli_ui import (
    COLOR_ERROR,
    COLOR_INFO,
    COLOR_SUCCESS,
    COLOR_WARNING,
    InfoPanel,
    TableDisplay,
    print_error,
    print_success,
    print_warning,
)
from .utils import configure_logging, load_build_config

__all__ = [
    "COLOR_ERROR",
    "COLOR_INFO",
    "COLOR_SUCCESS",
    "COLOR_WARNING",
    "InfoPanel",
    "TableDisplay",
    "configure_logging",
    "load_build_config",
    "print_error",
    "print_success",
    "print_warning",
]
