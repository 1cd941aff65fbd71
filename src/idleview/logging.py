import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# decoders that chatter at DEBUG/INFO while parsing OBJ/MTL files and textures
LIBRARY_LOGGERS = ("trimesh", "PIL")


def setup_logging(log_level: str = "INFO", log_file: str | None = None):
    """
    Configures the root logger for the viewer.

    Every `idleview.*` module logs through the root handler set up here: load
    progress and framing measurements at DEBUG/INFO, load and framing failures
    at ERROR. The viewer keeps running after those errors, so the log is the
    only place they surface.

    Args:
        log_level: The minimum log level to output (e.g., "INFO", "DEBUG").
            Unknown names fall back to INFO. Below DEBUG, trimesh and PIL are
            held at WARNING so their parse chatter does not bury the viewer's
            own messages.
        log_file: If provided, logs are appended to this file so several
            viewer sessions accumulate in one place. Otherwise, logs are
            written to stdout.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Reconfiguring replaces the previous handlers instead of stacking them
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if log_file:
        handler = logging.FileHandler(log_file, mode="a")
    else:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    library_level = logging.NOTSET if level <= logging.DEBUG else logging.WARNING
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str) -> logging.Logger:
    """Returns the logger for `name`; modules pass `__name__` so records read `idleview.<module>`."""
    return logging.getLogger(name)
