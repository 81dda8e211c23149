# logger.py
import logging
import os
import sys

LOG_FILE = "/var/log/auto_static_ip.log"
FALLBACK_LOG_FILE = "/tmp/auto_static_ip.log"

# stderr handler; muted while the TUI owns the terminal
_console = logging.StreamHandler(sys.stderr)


def _file_handler() -> logging.FileHandler:
    try:
        return logging.FileHandler(LOG_FILE)
    except PermissionError:
        return logging.FileHandler(FALLBACK_LOG_FILE)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("auto_static_ip")
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(module)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    fh = _file_handler()
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    _console.setLevel(logging.WARNING)
    _console.setFormatter(logging.Formatter("auto-static-ip: %(levelname)s: %(message)s"))
    logger.addHandler(_console)

    # One marker per run so successive provisioning attempts can be told apart
    logger.info("---- run pid=%d euid=%d log=%s ----",
                os.getpid(), os.geteuid(), fh.baseFilename)
    return logger


def silence_console() -> None:
    """Stop stderr output; stray writes would tear the Textual screen."""
    _console.setLevel(logging.CRITICAL + 1)


def restore_console() -> None:
    _console.setLevel(logging.WARNING)


log = setup_logger()
