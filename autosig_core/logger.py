import logging, json, sys, time, os

ROOT = "autosig"


class JsonFormatter(logging.Formatter):
    """One JSON object per line; quotes and newlines in messages stay valid JSON."""

    converter = time.gmtime  # UTC timestamps

    def format(self, record):
        entry = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _configure_root(to_file):
    root = logging.getLogger(ROOT)
    if root.handlers:
        return
    formatter = JsonFormatter()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)

    if to_file:
        os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
        file_handler = logging.FileHandler(to_file)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def get_logger(name=ROOT, level=None, to_file=None):
    """
    Structured logger for autosig components. Handlers live on the ``autosig``
    logger and component loggers (``autosig.insertion``...) propagate to it.
    Level and file default to AUTOSIG_LOG_LEVEL and AUTOSIG_LOG_FILE.
    """
    _configure_root(to_file or os.getenv("AUTOSIG_LOG_FILE"))
    logger = logging.getLogger(name)
    logger.setLevel(level or os.getenv("AUTOSIG_LOG_LEVEL", "INFO").upper())
    return logger
