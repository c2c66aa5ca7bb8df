import logging
import os
import sys

from pythonjsonlogger import jsonlogger

_configured = False


def setup_logging(name: str | None = None) -> logging.Logger:
    """
    Configures structured JSON logging and returns a logger.

    The first call installs a JSON formatter that includes timestamp, level,
    logger name, message, trace_id, and span_id on a stdout handler. It
    replaces default handlers for the root logger and Uvicorn loggers so all
    output shares the same format. Later calls only look up the logger.

    Args:
        name: Logger name, usually the calling module's ``__name__``.
            The root logger is returned when omitted.

    Returns:
        logging.Logger: The requested logger instance.
    """
    global _configured

    if not _configured:
        level = os.getenv("LOG_LEVEL", "INFO").upper()
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
        )
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers = []
        root_logger.addHandler(stream_handler)

        for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
            u_logger = logging.getLogger(logger_name)
            u_logger.setLevel(level)
            u_logger.handlers = []
            u_logger.addHandler(stream_handler)
            u_logger.propagate = False

        _configured = True

    return logging.getLogger(name)
