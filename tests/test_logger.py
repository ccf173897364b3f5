"""
Tests for the logging setup: console formatting and the Loggly sink.
"""

import json
import logging
import queue
import sys
import threading
from logging.handlers import QueueHandler

import httpx
import pytest

from tracker.core import logger as logger_module
from tracker.core.config import Settings
from tracker.core.logger import (
    ColorFormatter,
    LogglyHandler,
    ShippingQueueHandler,
    setup_logging,
)


def _record(msg="hello %s", args=("world",), level=logging.INFO, exc_info=None):
    return logging.LogRecord("tracker.test", level, __file__, 1, msg, args, exc_info)


def _console_handlers(log):
    return [h for h in log.handlers if isinstance(h.formatter, ColorFormatter)]


class TestColorFormatter:
    def test_label_and_message(self):
        out = ColorFormatter(label="web", colorize=False).format(_record())
        assert "[web] hello world" in out
        assert "INFO" in out

    def test_colorized_level(self):
        record = _record(level=logging.ERROR)
        out = ColorFormatter(colorize=True).format(record)
        assert "\033[31mERROR\033[0m" in out
        # the record itself is left untouched
        assert record.levelname == "ERROR"


class TestLogglyHandler:
    def _handler(self, sent, status=200, **kw):
        def _respond(request):
            sent.append(request)
            return httpx.Response(status)

        client = httpx.Client(transport=httpx.MockTransport(_respond))
        return LogglyHandler("tok", client=client, **kw)

    def test_url_with_tags(self):
        handler = self._handler([], tags=["web", "api"])
        assert handler.url == "https://logs-01.loggly.com/inputs/tok/tag/web,api/"

    def test_url_without_tags(self):
        assert self._handler([]).url == "https://logs-01.loggly.com/inputs/tok/"

    def test_posts_json_event(self):
        sent = []
        handler = self._handler(sent, tags=["web"], subdomain="acme")
        handler.handle(_record())

        assert len(sent) == 1
        event = json.loads(sent[0].content)
        assert event["message"] == "hello world"
        assert event["level"] == "info"
        assert event["logger"] == "tracker.test"
        assert event["subdomain"] == "acme"

    def test_includes_exception(self):
        sent = []
        handler = self._handler(sent)
        try:
            raise ValueError("bad")
        except ValueError:
            handler.handle(_record(exc_info=sys.exc_info()))
        assert "ValueError: bad" in json.loads(sent[0].content)["exception"]

    def test_below_level_is_not_sent(self):
        sent = []
        log = logging.getLogger("test.loggly")
        log.propagate = False
        log.setLevel(logging.DEBUG)
        handler = self._handler(sent, level=logging.INFO)
        log.addHandler(handler)
        try:
            log.debug("quiet")
            log.info("loud")
        finally:
            log.removeHandler(handler)
        assert [json.loads(r.content)["message"] for r in sent] == ["loud"]

    def test_http_error_does_not_raise(self, monkeypatch):
        errors = []
        handler = self._handler([], status=500)
        monkeypatch.setattr(handler, "handleError", lambda record: errors.append(record))
        handler.handle(_record())
        assert len(errors) == 1


class TestSetupLogging:
    @pytest.fixture
    def fresh(self, monkeypatch):
        log = logging.getLogger(logger_module.ROOT_LOGGER)
        saved = list(log.handlers)
        monkeypatch.setattr(logger_module, "_configured", False)
        monkeypatch.setattr(logger_module, "_listener", None)
        monkeypatch.setattr(sys, "excepthook", sys.excepthook)
        monkeypatch.setattr(threading, "excepthook", threading.excepthook)
        log.handlers = []
        yield log
        logger_module._stop_listener()
        log.handlers = saved

    def test_console_only_without_token(self, fresh):
        setup_logging(Settings(DATABASE_URL="sqlite://", LOGGLY_TOKEN=None))
        assert len(_console_handlers(fresh)) == 1
        assert not any(isinstance(h, QueueHandler) for h in fresh.handlers)
        assert fresh.propagate is False

    def test_remote_sink_with_token(self, fresh):
        setup_logging(
            Settings(DATABASE_URL="sqlite://", LOGGLY_TOKEN="tok", LOGGLY_SUBDOMAIN="acme"),
            tags=["web"],
        )
        assert any(isinstance(h, QueueHandler) for h in fresh.handlers)
        (loggly,) = logger_module._listener.handlers
        assert isinstance(loggly, LogglyHandler)
        assert loggly.url.endswith("/inputs/tok/tag/web/")
        assert loggly.level == logging.INFO

    def test_idempotent(self, fresh):
        settings = Settings(DATABASE_URL="sqlite://")
        first = setup_logging(settings)
        handlers = list(fresh.handlers)
        second = setup_logging(settings)
        assert first is second
        assert fresh.handlers == handlers
        assert len(_console_handlers(fresh)) == 1

    def test_excepthook_logs_without_exiting(self, fresh):
        setup_logging(Settings(DATABASE_URL="sqlite://"))
        seen = []
        fresh.addHandler(logging.Handler())
        fresh.handlers[-1].emit = seen.append
        try:
            raise RuntimeError("unhandled")
        except RuntimeError:
            sys.excepthook(*sys.exc_info())
        assert seen and seen[0].levelno == logging.CRITICAL

    def test_exception_is_shipped_as_its_own_field(self, fresh):
        setup_logging(Settings(DATABASE_URL="sqlite://", LOGGLY_TOKEN="tok"))
        sent = []

        def _respond(request):
            sent.append(json.loads(request.content))
            return httpx.Response(200)

        (loggly,) = logger_module._listener.handlers
        loggly.client.close()
        loggly.client = httpx.Client(transport=httpx.MockTransport(_respond))

        try:
            raise ValueError("bad")
        except ValueError:
            fresh.exception("failed %s", "query")
        logger_module._stop_listener()

        (event,) = sent
        assert event["message"] == "failed query"
        assert event["level"] == "error"
        assert "ValueError: bad" in event["exception"]


class TestShippingQueueHandler:
    def test_full_queue_drops_and_counts(self):
        log_queue = queue.Queue(1)
        handler = ShippingQueueHandler(log_queue)
        handler.handle(_record())
        handler.handle(_record())
        handler.handle(_record())
        assert log_queue.qsize() == 1
        assert handler.dropped == 2

    def test_prepare_keeps_exc_info(self):
        try:
            raise ValueError("bad")
        except ValueError:
            record = _record(exc_info=sys.exc_info())
        prepared = ShippingQueueHandler(queue.Queue()).prepare(record)
        assert prepared is not record
        assert prepared.exc_info is record.exc_info
        assert prepared.msg == "hello world"
        assert prepared.args is None
