import json
import logging

from api.errors import AuthFailure, NetworkFailure
from services.dispatcher import Dispatcher
from utils.constants import SERVICE_NAME
from utils.logging_setup import LOG_FILE_NAME, CustomJsonFormatter, setup_logging


def test_success_reaches_continuation():
    results = []
    Dispatcher().submit(lambda: 41 + 1, on_success=results.append)
    assert results == [42]


def test_failure_reaches_on_error():
    errors = []

    def boom():
        raise NetworkFailure("Network error")

    Dispatcher().submit(boom, on_success=lambda _: errors.append("wrong"), on_error=errors.append)
    assert len(errors) == 1
    assert isinstance(errors[0], NetworkFailure)


def test_unexpected_exception_still_reported():
    errors = []
    Dispatcher().submit(lambda: 1 / 0, on_error=errors.append)
    assert isinstance(errors[0], ZeroDivisionError)


def test_auth_failure_only_goes_to_handler():
    handled, errors = [], []

    def rejected():
        raise AuthFailure("Unauthorized", 401)

    dispatcher = Dispatcher()
    dispatcher.set_auth_failure_handler(lambda: handled.append(True))
    dispatcher.submit(rejected, on_error=errors.append)

    assert handled == [True]
    assert errors == []


def test_json_log_line_carries_service_fields():
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord("api.http_client", logging.WARNING, __file__, 1, "Backend timeout", None, None)
    record.path = "/transactions"

    line = json.loads(formatter.format(record))

    assert line["message"] == "Backend timeout"
    assert line["level"] == "WARNING"
    assert line["service"] == SERVICE_NAME
    assert line["path"] == "/transactions"
    assert "timestamp" in line


def test_setup_logging_installs_one_handler():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        setup_logging("debug")
        setup_logging("debug")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])


def test_timestamp_is_the_record_time():
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord("services.session", logging.INFO, __file__, 1, "Session started", None, None)
    record.created = 1709335800.0  # 2024-03-01T23:30:00Z

    line = json.loads(formatter.format(record))

    assert line["timestamp"] == "2024-03-01T23:30:00+00:00"


def test_log_file_gets_the_same_json_lines(tmp_path):
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    log_file = tmp_path / "logs" / LOG_FILE_NAME
    try:
        setup_logging("info", log_file)
        logging.getLogger("services.session").info("Session started", extra={"username": "alice"})
        for handler in root.handlers:
            handler.flush()

        line = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert line["message"] == "Session started"
        assert line["username"] == "alice"
        assert len(root.handlers) == 2
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
