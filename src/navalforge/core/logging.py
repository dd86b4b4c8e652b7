"""Logging setup for the NavalForge pipeline and CLI."""

from __future__ import annotations

import logging
import sys
import warnings
from pathlib import Path

from .errors import DegenerateInputWarning

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# trimesh logs every buffer it packs at DEBUG
NOISY_LOGGERS = ("trimesh",)


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure root logging to stdout and, optionally, a run log file.

    DegenerateInputWarning is already logged where it is raised, so the
    warnings module reports each occurrence site only once.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{level}'")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric, logging.INFO))
    warnings.simplefilter("default", DegenerateInputWarning)
