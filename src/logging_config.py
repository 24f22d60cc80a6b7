import logging

from pythonjsonlogger import jsonlogger

from config import settings

logger = logging.getLogger("registry")


def setup_json_logging(level: str = None):
    """Route every log record through a single JSON stream handler."""
    root_logger = logging.getLogger()
    if any(isinstance(h.formatter, jsonlogger.JsonFormatter) for h in root_logger.handlers):
        return
    handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(module)s %(funcName)s %(lineno)d %(message)s",
        rename_fields={"levelname": "level", "name": "logger_name", "asctime": "timestamp"},
    )
    handler.setFormatter(formatter)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    log_level = (level or settings.LOG_LEVEL).upper()
    root_logger.setLevel(log_level)
    logger.info("JSON logging configured", extra={"log_level": log_level})
