import logging
import sys

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
RENAMED_FIELDS = {"asctime": "timestamp", "levelname": "level", "name": "logger"}

UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")
# chatty at INFO; per-request noise would drown pipeline logs
NOISY_LOGGERS = ("urllib3", "multipart", "ddtrace")


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Routes every log record of the service through one JSON stream on stdout.

    Records carry timestamp, level, logger, message and the trace_id/span_id
    injected by ddtrace. Uvicorn loggers get the same handler and stop
    propagating so request lines are not emitted twice. An unknown level
    name falls back to INFO.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    level = _resolve_level(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(LOG_FORMAT, rename_fields=RENAMED_FIELDS)
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    for logger_name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(logger_name)
        uvicorn_logger.setLevel(level)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(level, logging.WARNING))

    return root_logger
