import inspect
import logging
from datetime import datetime, timezone
from typing import Dict, Optional

import structlog


class StructuredLogger:
    """
    structlog-backed logger with a coloured console sink and an optional JSON file sink.
    Instances sharing a name reuse the same underlying handlers.
    """

    _logger_cache: Dict[str, "StructuredLogger"] = {}

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",     # cyan
        "INFO": "\033[32m",      # green
        "WARNING": "\033[33m",   # yellow
        "ERROR": "\033[31m",     # red
        "CRITICAL": "\033[1;31m" # bold red
    }
    RESET_COLOR = "\033[0m"

    def __init__(self, name: str = "ordercapture", log_file: str = "", level: str = "INFO", context: Optional[dict] = None):
        self.name = name
        self.context = context or {}

        cached = self._logger_cache.get(name)
        if cached is not None:
            self.console_logger = cached.console_logger.bind(**self.context)
            self.file_logger = cached.file_logger.bind(**self.context) if cached.file_logger is not None else None
            return

        # ----------------------------
        # Caller lookup
        # ----------------------------
        def add_caller(logger, method_name, event_dict):
            frame = inspect.currentframe()
            while frame:
                module_name = frame.f_globals.get("__name__", "")
                if not module_name.startswith("structlog") and not module_name.endswith("structured_logger"):
                    event_dict["module"] = module_name
                    event_dict["function"] = frame.f_code.co_name
                    event_dict["lineno"] = frame.f_lineno
                    break
                frame = frame.f_back
            return event_dict

        # ----------------------------
        # Console renderer
        # ----------------------------
        def console_renderer(logger, method_name, event_dict):
            ts = event_dict.pop("timestamp", None) or datetime.now(timezone.utc).isoformat()
            level = event_dict.pop("level", method_name).upper()
            logger_name = event_dict.pop("logger", self.name)
            msg = event_dict.pop("event", "")
            module = event_dict.pop("module", "")
            func = event_dict.pop("function", "")
            lineno = event_dict.pop("lineno", "")
            event_dict.pop("exc_info", None)

            # Caller info only matters once something went wrong
            caller = f" {module}.{func}:{lineno}" if level in ("WARNING", "ERROR", "CRITICAL") and module else ""
            fields = " ".join(f"{k}={v}" for k, v in event_dict.items())
            color = self.LEVEL_COLORS.get(level, "")
            return f"{color}{ts} [{logger_name}] {level}: {msg} {fields}{caller}{self.RESET_COLOR}".rstrip()

        std_level = getattr(logging, level.upper(), logging.INFO)

        console_logger = logging.getLogger(f"{name}.console")
        console_logger.setLevel(std_level)
        console_logger.propagate = False
        if not console_logger.handlers:
            ch = logging.StreamHandler()
            ch.setFormatter(logging.Formatter("%(message)s"))
            console_logger.addHandler(ch)

        self.console_logger = structlog.wrap_logger(
            console_logger,
            processors=[
                structlog.processors.TimeStamper(fmt="ISO"),
                structlog.stdlib.add_log_level,
                add_caller,
                console_renderer,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
        ).bind(logger=name, **self.context)

        # ----------------------------
        # File logger (JSON), optional
        # ----------------------------
        self.file_logger = None
        if log_file:
            file_logger = logging.getLogger(f"{name}.file")
            file_logger.setLevel(std_level)
            file_logger.propagate = False
            if not any(isinstance(h, logging.FileHandler) for h in file_logger.handlers):
                fh = logging.FileHandler(log_file, encoding="utf-8")
                fh.setFormatter(logging.Formatter("%(message)s"))
                file_logger.addHandler(fh)

            self.file_logger = structlog.wrap_logger(
                file_logger,
                processors=[
                    structlog.processors.TimeStamper(fmt="ISO"),
                    structlog.stdlib.add_log_level,
                    structlog.processors.StackInfoRenderer(),
                    structlog.processors.format_exc_info,
                    add_caller,
                    structlog.processors.UnicodeDecoder(),
                    structlog.processors.JSONRenderer(default=str),
                ],
                wrapper_class=structlog.stdlib.BoundLogger,
            ).bind(logger=name, **self.context)

        self._logger_cache[name] = self

    def bind(self, **context) -> "StructuredLogger":
        """Return a logger for the same sinks carrying extra context on every line."""
        return StructuredLogger(self.name, context={**self.context, **context})

    # ----------------------------
    # Logging methods
    # ----------------------------
    def _emit(self, method: str, msg: str, **extra):
        getattr(self.console_logger, method)(msg, **extra)
        if self.file_logger is not None:
            getattr(self.file_logger, method)(msg, **extra)

    def trace(self, msg: str, **extra):
        # stdlib logging has no TRACE level
        self._emit("debug", msg, **extra)

    def debug(self, msg: str, **extra):
        self._emit("debug", msg, **extra)

    def info(self, msg: str, **extra):
        self._emit("info", msg, **extra)

    def warning(self, msg: str, **extra):
        self._emit("warning", msg, **extra)

    def error(self, msg: str, **extra):
        self._emit("error", msg, **extra)

    def critical(self, msg: str, **extra):
        self._emit("critical", msg, **extra)

    def exception(self, msg: str, **extra):
        self._emit("exception", msg, **extra)
