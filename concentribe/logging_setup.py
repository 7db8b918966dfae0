# concentribe/logging_setup.py
import logging
from logging.config import dictConfig
from logging import LogRecord
from pathlib import Path
import contextvars
import os

# ---- Correlation ID (used by middleware) ----
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")

class RequestIdFilter(logging.Filter):
    def filter(self, record: LogRecord) -> bool:
        # Attach the current request_id (or "-" if none) to every record
        record.request_id = request_id_var.get()
        return True


# Attributes every LogRecord carries; anything else came in through `extra=`
_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime", "request_id"}

class ContextFormatter(logging.Formatter):
    """Standard line plus the `extra=` fields (user_id, category, article_id...) as key=value pairs."""

    def format(self, record: LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS and not k.startswith("_")}
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in sorted(context.items()))
        first, sep, rest = line.partition("\n")
        return f"{first} | {pairs}{sep}{rest}"


# ---- Paths & levels ----
BASE_DIR = Path(__file__).resolve().parents[1]  # project root (folder that contains 'concentribe/')
LOG_DIR  = Path(os.getenv("LOG_DIR", BASE_DIR / "logs"))
LOG_FILE = LOG_DIR / "concentribe.log"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() in ("1", "true", "yes")

def setup_logging() -> Path:
    handlers = ["console", "file"] if LOG_TO_FILE else ["console"]
    if LOG_TO_FILE:
        LOG_DIR.mkdir(parents=True, exist_ok=True)

    handler_config = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "filters": ["request_id"],
        },
        "uvicorn_console": {
            "class": "logging.StreamHandler",
            "formatter": "uvicorn_access",
        },
    }
    if LOG_TO_FILE:
        handler_config["file"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "formatter": "standard",
            "filters": ["request_id"],
            "filename": str(LOG_FILE),
            "when": "midnight",
            "backupCount": 14,
            "encoding": "utf-8",
        }
    uvicorn_handlers = ["uvicorn_console"] + (["file"] if LOG_TO_FILE else [])

    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,

        "filters": {
            "request_id": {"()": RequestIdFilter},
        },

        "formatters": {
            "standard": {
                "()": ContextFormatter,
                "fmt": (
                    "%(asctime)s | %(levelname)s | %(name)s | req=%(request_id)s | "
                    "%(message)s (%(filename)s:%(lineno)d)"
                ),
            },
            "uvicorn_access": {
                "format": "%(asctime)s | %(levelname)s | %(message)s"
            },
        },

        "handlers": handler_config,

        "loggers": {
            # Service loggers; children (concentribe.news, concentribe.routes.*) inherit
            "concentribe": {"handlers": handlers, "level": LOG_LEVEL, "propagate": False},

            # APScheduler (article cache warm-up job)
            "apscheduler": {"handlers": handlers, "level": "INFO", "propagate": False},

            "uvicorn.error":  {"handlers": uvicorn_handlers, "level": "INFO", "propagate": False},
            "uvicorn.access": {"handlers": uvicorn_handlers, "level": "INFO", "propagate": False},

            # Upstream HTTP clients (NewsAPI, YouTube, Google, OpenAI) are chatty at INFO
            "httpx": {"handlers": handlers, "level": "WARNING", "propagate": False},
            "urllib3": {"handlers": handlers, "level": "WARNING", "propagate": False},
            "openai": {"handlers": handlers, "level": "WARNING", "propagate": False},
        },

        "root": {"handlers": handlers, "level": LOG_LEVEL},
    })

    logging.getLogger("concentribe").info(f"Logging to: {LOG_FILE if LOG_TO_FILE else 'console only'}")
    return LOG_FILE

def get_logger(name: str = "concentribe") -> logging.Logger:
    return logging.getLogger(name)
