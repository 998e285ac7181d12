"""Console and file logging for programs built on rigidgeom.

rigidgeom modules never attach handlers. They log under their own module
names: per-fit singular values and folded transform sequences at DEBUG,
reflection corrections in ``fitting.motion`` and the parallel line fallback
in ``metric.distance`` at WARNING. ``setup_logging`` routes those records to
the console and, when a directory is given, to ``rigidgeom.log`` in it, as
used by ``examples/fit_motion_demo.py``.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "rigidgeom.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_dir: Optional[Path] = None,
    log_level: int = logging.INFO,
) -> Optional[Path]:
    """Configure logging for the project.

    Args:
        log_dir: Optional directory to save log files
        log_level: Logging level (default: INFO)

    Returns:
        Path of the log file, or None when only logging to the console
    """
    # Create log directory if specified
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LOG_FILE_NAME
    else:
        log_file = None

    handlers = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
    return log_file
