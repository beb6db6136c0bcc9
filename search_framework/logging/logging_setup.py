"""Logging for indexing runs.

Collectors, indexers and backends log through a ColorLogger taken from the
HelperConfig. setup_logging() wires the process-wide handlers once; library
code never configures logging itself and falls back to a discarding logger.
"""

from datetime import datetime
from pytz import timezone
import logging.config
import logging
import os
from logging import Logger

# Between INFO and WARNING: skipped items, empty schemata and the like
NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

_ANSI_RESET = "\033[0m"
_COLOR_MAP: dict[str, str] = {
    "cyan":    "\033[36m",
    "green":   "\033[32m",
    "yellow":  "\033[33m",
    "red":     "\033[31m",
    "magenta": "\033[35m",
}

_LEVEL_PREFIX: dict[int, str] = {
    logging.CRITICAL: "🔥 ",
    logging.ERROR: "⛔ ",
    logging.WARNING: "⚠️ ",
    NOTICE: "📌 ",
}

_LINE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_NULL_LOGGER_NAME = "search_framework.null"


def _level_from_env() -> int:
    return logging.DEBUG if os.getenv("LOG_LEVEL", "info").lower() == "debug" else logging.INFO


class CustomFormatter(logging.Formatter):
    """Renders timestamps in the configured timezone and marks problems with a prefix."""

    def __init__(self, tz_name, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tz = timezone(tz_name)

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, self.tz)
        return dt.strftime(datefmt) if datefmt else dt.isoformat()

    def format(self, record):
        # every handler formats the same record
        record = logging.makeLogRecord(record.__dict__)
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # args that do not fit the format string
            message = f"{record.msg} {record.args}"

        record.msg = _LEVEL_PREFIX.get(record.levelno, "") + message
        # args are merged into msg now
        record.args = ()
        return super().format(record)


class ColoredFormatter(CustomFormatter):
    """Console formatter that colors a line when the record carries a ``color`` name."""

    def format(self, record) -> str:
        line = super().format(record)
        ansi = _COLOR_MAP.get(getattr(record, "color", None) or "")
        return f"{ansi}{line}{_ANSI_RESET}" if ansi and line else line


class ColorLogger:
    """Wraps a :class:`logging.Logger`, adding a ``notice`` level and an
    optional ``color=`` keyword to every log method::

        logger.notice("Collection '%s' defines no fields", collection_id)
        logger.info("Queued %d item(s)", count, color="green")

    Only the console handler renders colors. Any other attribute is looked up
    on the wrapped logger.
    """

    def __init__(self, logger: Logger):
        self._logger = logger

    def _log(self, level: int, msg, args: tuple, kwargs: dict) -> None:
        color = kwargs.pop("color", None)
        if color is not None:
            kwargs["extra"] = {**(kwargs.get("extra") or {}), "color": color}
        # stacklevel counts from the caller, skipping this wrapper's two frames
        kwargs["stacklevel"] = kwargs.get("stacklevel", 1) + 2
        self._logger.log(level, msg, *args, **kwargs)

    def log(self, level: int, msg, *args, **kwargs):
        self._log(level, msg, args, kwargs)

    def debug(self, msg, *args, **kwargs):
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg, *args, **kwargs):
        self._log(logging.INFO, msg, args, kwargs)

    def notice(self, msg, *args, **kwargs):
        self._log(NOTICE, msg, args, kwargs)

    def warning(self, msg, *args, **kwargs):
        self._log(logging.WARNING, msg, args, kwargs)

    def error(self, msg, *args, **kwargs):
        self._log(logging.ERROR, msg, args, kwargs)

    def critical(self, msg, *args, **kwargs):
        self._log(logging.CRITICAL, msg, args, kwargs)

    def exception(self, msg, *args, **kwargs):
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, args, kwargs)

    def __getattr__(self, name):
        return getattr(self._logger, name)


def get_null_logger() -> ColorLogger:
    """Returns a logger that discards everything."""
    logger = logging.getLogger(_NULL_LOGGER_NAME)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return ColorLogger(logger)


def setup_logging(name: str = "search_framework", log_to_file: bool | None = None) -> ColorLogger:
    """Configures the root logger from the environment and returns the pipeline logger.

    Settings:
        LOG_LEVEL:    "debug" for debug output, info otherwise.
        TIMEZONE:     Timezone of the log timestamps, defaults to Europe/Berlin.
        LOG_TO_FILE:  Also write to <ROOT_DIR>/logs/indexing.log.
    """
    level = _level_from_env()
    tz_name = os.getenv("TIMEZONE", "Europe/Berlin")
    if log_to_file is None:
        log_to_file = os.getenv("LOG_TO_FILE", "false").lower() in ("true", "1", "yes")

    def formatter(formatter_class: type) -> dict:
        return {"()": formatter_class, "format": _LINE_FORMAT, "datefmt": _DATE_FORMAT, "tz_name": tz_name}

    handlers: dict = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "colored",
            "level": level,
            "stream": "ext://sys.stdout",
        },
    }
    if log_to_file:
        log_dir = os.path.join(os.environ.get("ROOT_DIR", os.getcwd()), "logs")
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "plain",
            "level": level,
            "filename": os.path.join(log_dir, "indexing.log"),
            "encoding": "utf-8",
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": formatter(CustomFormatter),
            "colored": formatter(ColoredFormatter),
        },
        "handlers": handlers,
        "root": {"handlers": list(handlers), "level": level},
    })

    # one line per search engine request is too chatty outside debug mode
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.DEBUG if level == logging.DEBUG else logging.WARNING)

    return ColorLogger(logging.getLogger(name))
