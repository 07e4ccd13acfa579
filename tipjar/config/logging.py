"""Logging setup for the tipjar CLI."""

import logging
from pathlib import Path

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_dir: Path, level: str = "INFO", verbose: bool = False) -> logging.Logger:
    """Attach file and console handlers to the ``tipjar`` logger.

    The console only gets warnings unless ``verbose`` is set, so log lines
    don't interleave with the tips printed to the terminal.
    """
    logger = logging.getLogger("tipjar")
    logger.setLevel(logging.DEBUG if verbose else level.upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(FORMAT)

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "tipjar.log")
        file_handler.setLevel(logging.DEBUG if verbose else level.upper())
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        logger.warning(f"File logging disabled: {e}")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
