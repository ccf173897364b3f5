# File: tracker/core/logger.py
"""
Logging setup.

Two sinks hang off the "tracker" logger:

- a colorized console handler, every line prefixed with a label;
- a Loggly handler that ships JSON events over HTTP. It runs behind a
  bounded queue so requests never wait on the network. It is only attached
  when LOGGLY_TOKEN is configured.

Uncaught exceptions from the main thread and from worker threads are routed
to the same logger; the process is not terminated by the hook.
"""
from __future__ import annotations

import atexit
import copy
import json
import logging
import queue
import sys
import threading
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener
from typing import Any, Dict, Iterable, Optional, Sequence

import httpx

from tracker.core.config import Settings

ROOT_LOGGER = "tracker"

_COLORS = {
    logging.DEBUG: "\033[34m",  # blue
    logging.INFO: "\033[32m",  # green
    logging.WARNING: "\033[33m",  # yellow
    logging.ERROR: "\033[31m",  # red
    logging.CRITICAL: "\033[1;31m",
}
_RESET = "\033[0m"

QUEUE_SIZE = 10000

_listener: Optional[QueueListener] = None
_configured = False
_lock = threading.Lock()


class ColorFormatter(logging.Formatter):
    """Console formatter: colored level name and an optional label."""

    def __init__(self, label: Optional[str] = None, colorize: bool = True) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(label)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.label = label
        self.colorize = colorize

    def format(self, record: logging.LogRecord) -> str:
        record.label = f"[{self.label}] " if self.label else ""
        levelname = record.levelname
        if self.colorize:
            record.levelname = f"{_COLORS.get(record.levelno, '')}{levelname}{_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class LogglyHandler(logging.Handler):
    """
    Ship log records to Loggly's HTTP inputs endpoint as JSON.

    Args:
        token: Customer token.
        tags: Tags attached to every event.
        subdomain: Account subdomain, sent along with each event.
        base_url: Loggly inputs host.
        client: Optional httpx.Client (tests pass one with a mock transport).
    """

    def __init__(
        self,
        token: str,
        *,
        tags: Sequence[str] = (),
        subdomain: Optional[str] = None,
        base_url: str = "https://logs-01.loggly.com",
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
        level: int = logging.INFO,
    ) -> None:
        super().__init__(level=level)
        self.token = token
        self.tags = list(tags)
        self.subdomain = subdomain
        tag_part = f"tag/{','.join(self.tags)}/" if self.tags else ""
        self.url = f"{base_url.rstrip('/')}/inputs/{token}/{tag_part}"
        self.client = client or httpx.Client(timeout=timeout)

    def payload(self, record: logging.LogRecord) -> Dict[str, Any]:
        event: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.subdomain:
            event["subdomain"] = self.subdomain
        if record.exc_info:
            event["exception"] = logging.Formatter().formatException(record.exc_info)
        return event

    def emit(self, record: logging.LogRecord) -> None:
        try:
            body = json.dumps(self.payload(record), default=str)
            response = self.client.post(
                self.url,
                content=body,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self.client.close()
        finally:
            super().close()


class ShippingQueueHandler(QueueHandler):
    """
    Queue handler in front of the remote sink.

    Records keep their exc_info so the sink can ship the traceback as its own
    field. When the queue is full the record is dropped and counted.
    """

    def __init__(self, log_queue: queue.Queue) -> None:
        super().__init__(log_queue)
        self.dropped = 0

    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        record = copy.copy(record)
        record.message = record.getMessage()
        record.msg = record.message
        record.args = None
        return record

    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            self.dropped += 1


def _level(name: str) -> int:
    value = logging.getLevelName(str(name).upper())
    return value if isinstance(value, int) else logging.INFO


def _install_exception_hooks(logger: logging.Logger) -> None:
    def _excepthook(exc_type, exc, tb):
        # Keep Ctrl+C semantics
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc, tb)
            return
        logger.critical("Unhandled exception", exc_info=(exc_type, exc, tb))

    def _thread_excepthook(args: threading.ExceptHookArgs) -> None:
        if args.exc_type is SystemExit:
            return
        logger.critical(
            "Unhandled exception in thread %s",
            args.thread.name if args.thread else "?",
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )

    sys.excepthook = _excepthook
    threading.excepthook = _thread_excepthook


def _stop_listener() -> None:
    global _listener
    if _listener is not None:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
        _listener = None


def setup_logging(
    settings: Settings,
    *,
    console_label: Optional[str] = "web",
    tags: Optional[Iterable[str]] = None,
) -> logging.Logger:
    """
    Configure the "tracker" logger once per process and return it.

    Later calls return the already configured logger unchanged.
    """
    global _configured, _listener

    logger = logging.getLogger(ROOT_LOGGER)
    with _lock:
        if _configured:
            return logger

        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        console = logging.StreamHandler()
        console.setLevel(_level(settings.LOG_CONSOLE_LEVEL))
        console.setFormatter(
            ColorFormatter(label=console_label, colorize=sys.stderr.isatty())
        )
        logger.addHandler(console)

        if settings.LOGGLY_TOKEN:
            loggly = LogglyHandler(
                settings.LOGGLY_TOKEN,
                tags=list(tags) if tags is not None else settings.LOGGLY_TAGS,
                subdomain=settings.LOGGLY_SUBDOMAIN,
                base_url=settings.LOGGLY_URL,
                timeout=settings.LOGGLY_TIMEOUT,
                level=_level(settings.LOG_REMOTE_LEVEL),
            )
            log_queue: queue.Queue = queue.Queue(QUEUE_SIZE)
            _listener = QueueListener(log_queue, loggly, respect_handler_level=True)
            _listener.start()
            atexit.register(_stop_listener)
            logger.addHandler(ShippingQueueHandler(log_queue))
        else:
            logger.debug("LOGGLY_TOKEN not set; remote log shipping disabled")

        _install_exception_hooks(logger)
        _configured = True

    return logger
