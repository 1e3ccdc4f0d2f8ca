"""Structured logging setup."""
import logging, sys, json, os

_RESERVED = set(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}

# Lists passed through extra= (e.g. per-mirror failures) are capped at this many items
MAX_EXTRA_ITEMS = 10


def _compact(value):
    if isinstance(value, (list, tuple, set)):
        items = list(value)
        if len(items) > MAX_EXTRA_ITEMS:
            return items[:MAX_EXTRA_ITEMS] + [f"... {len(items) - MAX_EXTRA_ITEMS} more"]
        return items
    return value


class JsonFormatter(logging.Formatter):
    def format(self, record):  # pragma: no cover
        base = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        for k, v in getattr(record, "__dict__", {}).items():
            if k.startswith("_") or k in _RESERVED:
                continue
            base[k] = _compact(v)
        return json.dumps(base, default=str)


def configure_logging(level: str = "INFO", fmt: str | None = None) -> None:
    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    if (fmt or os.getenv("LOG_FORMAT", "json")) == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)
