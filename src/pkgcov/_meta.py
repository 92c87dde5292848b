from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("pkgcov")

logger = logging.getLogger("pkgcov")

__all__ = ["__version__", "logger"]
