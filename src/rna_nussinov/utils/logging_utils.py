import logging
import sys
import time
from pathlib import Path
from typing import Optional
from datetime import datetime

from tqdm import tqdm

# Default log directory
DEFAULT_LOG_DIR = Path("var/log")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


class TqdmStreamHandler(logging.StreamHandler):
    """
    Console handler that routes records through `tqdm.write`.

    Log lines emitted while a fill progress bar is active are printed above
    the bar instead of breaking it.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
            self.flush()
        except Exception:
            self.handleError(record)


def verbosity_to_level(verbose_level: int) -> int:
    """Map a `-v` count to a logging level (0 WARNING, 1 INFO, 2+ DEBUG)."""
    return VERBOSITY_LEVELS.get(min(max(verbose_level, 0), 2), logging.INFO)


def get_log_file_path(
        module_name: str,
        log_dir: Optional[Path] = None,
        include_timestamp: bool = True
) -> Path:
    """
    Builds the log file path for a logger and makes sure its directory exists.

    Parameters
    ----------
    module_name : str
        Name of the logger (e.g. "rna_nussinov.folding.recurrences"). Dots
        become underscores in the filename.
    log_dir : Optional[Path], optional
        Target directory. Defaults to `DEFAULT_LOG_DIR`.
    include_timestamp : bool, optional
        Append a `%Y%m%d_%H%M%S` timestamp to the filename, by default True.

    Returns
    -------
    Path
        The full path of the log file.
    """
    # Use the default log directory if none is provided.
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    # Create the log directory and any missing parents.
    log_dir.mkdir(parents=True, exist_ok=True)

    # Dots become underscores for a filesystem-safe filename.
    safe_name = module_name.replace(".", "_")

    # Append a timestamp so each run gets its own file.
    if include_timestamp:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{safe_name}_{timestamp}.log"
    else:
        filename = f"{safe_name}.log"

    return log_dir / filename


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = False,
    console_level: Optional[int] = None,
    file_level: Optional[int] = None,
) -> logging.Logger:
    """
    Configures and returns a logger with a console handler and an optional file handler.

    Existing handlers on the logger are removed first so repeated CLI runs in
    one interpreter do not duplicate output.

    Parameters
    ----------
    name : str
        The name of the logger, typically a module `__name__`.
    level : int, optional
        Base level for the logger and its handlers, by default `logging.INFO`.
    log_file : Optional[str], optional
        Explicit log file path. Takes precedence over `enable_file_logging`.
    log_dir : Optional[Path], optional
        Directory for an automatically named log file. Defaults to
        `DEFAULT_LOG_DIR`.
    enable_file_logging : bool, optional
        When True and `log_file` is not given, write to a timestamped file in
        `log_dir`. By default False.
    console_level : Optional[int], optional
        Override for the console handler level.
    file_level : Optional[int], optional
        Override for the file handler level.

    Returns
    -------
    logging.Logger
        The configured logger instance.
    """
    # Get the logger and drop handlers from any previous setup.
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    # One shared format for console and file output.
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # Console output goes to stderr through tqdm so progress bars stay intact
    # and stdout carries only results.
    console_handler = TqdmStreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level if console_level is not None else level)
    logger.addHandler(console_handler)

    # An explicit log file wins over the automatic timestamped one.
    file_handler = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='a')
    elif enable_file_logging:
        log_path = get_log_file_path(name, log_dir=log_dir, include_timestamp=True)
        file_handler = logging.FileHandler(log_path, mode='a')
        logger.info(f"Logging to file: {log_path}")

    if file_handler:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(file_level if file_level is not None else level)
        logger.addHandler(file_handler)

    return logger


def set_log_level(logger: logging.Logger, level: int) -> None:
    """Update a logger and all of its handlers to `level`."""
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def cleanup_old_logs(log_dir: Optional[Path] = None, days_to_keep: int = 7) -> int:
    """
    Deletes `*.log` files older than `days_to_keep` days.

    Parameters
    ----------
    log_dir : Optional[Path], optional
        The directory to clean. Defaults to `DEFAULT_LOG_DIR`.
    days_to_keep : int, optional
        Maximum age in days, by default 7.

    Returns
    -------
    int
        Number of files removed.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    # Nothing to clean if the directory was never created.
    if not log_dir.exists():
        return 0

    # Anything last modified before this moment is stale.
    cutoff_time = time.time() - (days_to_keep * 86400)

    # Only `*.log` files are considered; anything else in the directory is left alone.
    removed = 0
    for log_file in log_dir.glob("*.log"):
        if log_file.stat().st_mtime < cutoff_time:
            log_file.unlink()
            removed += 1
            logging.getLogger(__name__).info(f"Removed old log: {log_file}")
    return removed
