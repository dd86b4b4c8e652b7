"""Error taxonomy shared by all pipeline stages."""

from __future__ import annotations

import logging
import warnings

logger = logging.getLogger(__name__)


class NavalForgeError(Exception):
    """Base class for pipeline errors."""


class ValidationError(NavalForgeError, ValueError):
    """Caller-correctable input mistake (bad argument, unusable hint structure)."""


class GeometryError(NavalForgeError):
    """Numeric degeneracy that cannot be recovered locally."""


class DegenerateInputWarning(UserWarning):
    """Sparse but legal input; a minimal well-formed result is returned."""


def warn_degenerate(message: str, source: logging.Logger | None = None) -> None:
    """Log and emit a DegenerateInputWarning."""
    (source or logger).warning(message)
    warnings.warn(message, DegenerateInputWarning, stacklevel=3)
