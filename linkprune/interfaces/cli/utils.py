"""
Shared utility functions for CLI commands.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

from linkprune.helpers.dto.config_dto import BuildConfig
from linkprune.services.config_svc import ConfigService

__all__ = [
    "configure_logging",
    "load_build_config",
]


def configure_logging(verbose: bool) -> None:
    """Configure logging once for the whole process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_build_config(args: argparse.Namespace, **overrides: Any) -> BuildConfig:
    """BuildConfig for the --root/--config arguments plus command-specific overrides."""
    root = Path(getattr(args, "root", None) or ".").resolve().as_posix()
    service = ConfigService(
        root_dir=root,
        config_path=getattr(args, "config", None),
        overrides={k: v for k, v in overrides.items() if v is not None},
    )
    return service.build_config()
