import logging
import sys

__all__ = [
    "get_main_logger",
    "attach_stream_handler",
    "create_process_logger",
    "log_levels",
]

fmt = logging.Formatter(fmt="%(asctime)s %(name)s:\t[%(levelname)s]\t%(message)s", datefmt="%H:%M:%S")


def get_main_logger(level: int = logging.DEBUG) -> logging.Logger:
    logger = logging.getLogger("gcorrect-main")
    logger.setLevel(level)
    return logger


def attach_stream_handler(level: int, logger_: logging.Logger) -> None:
    # one stderr handler per logger, even if main() is called repeatedly in the same interpreter
    for h in logger_.handlers:
        if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
            h.setLevel(level)
            return

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    logger_.addHandler(ch)


def create_process_logger(pid: int, level: int) -> logging.Logger:
    # strand workers in their own process don't inherit the main logger's handler
    lg = logging.getLogger(f"gcorrect-{pid}")
    lg.setLevel(level)
    attach_stream_handler(level, lg)
    return lg


log_levels: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
