"""Logger construction for mx3 scripts and tools."""

import logging
from pathlib import Path
from typing import Optional, Union

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(
    name: str,
    log_file: Optional[Union[str, Path]] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Get a logger namespaced under "mx3".

    Handlers are attached once per logger, so calling this repeatedly with
    the same name does not duplicate output.

    Args:
        name: Logger name ("bench" becomes "mx3.bench")
        log_file: Optional file that also receives the records
        level: Logging level

    Returns:
        Configured logger
    """
    if name != "mx3" and not name.startswith("mx3."):
        name = f"mx3.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    formatter = logging.Formatter(_FORMAT)

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_file is not None:
        log_path = Path(log_file).resolve()
        known = {
            Path(h.baseFilename)
            for h in logger.handlers
            if isinstance(h, logging.FileHandler)
        }
        if log_path not in known:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
