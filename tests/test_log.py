import logging
import time

from native_tables._log import UTCColoredFormatter, make_formatter, setup_logging


def test_utc_timestamp_format():
    fmt = make_formatter()
    record = logging.LogRecord('native_tables', logging.INFO, __file__, 1, 'hello', None, None)
    record.created = 0.0
    assert fmt.formatTime(record) == '1970-01-01T00:00:00Z'
    assert isinstance(fmt, UTCColoredFormatter)
    assert fmt.converter is time.gmtime


def test_setup_logging_single_handler(monkeypatch):
    root = logging.getLogger()
    prev_level = root.level
    prev_handlers = root.handlers[:]
    try:
        monkeypatch.setenv('NATIVE_TABLES_LOGLEVEL', 'warning')
        setup_logging()
        handler = setup_logging(silence=('noisy.lib',))

        assert root.handlers == [handler]
        assert root.level == logging.WARNING
        assert logging.getLogger('noisy.lib').level == logging.WARNING

    finally:
        root.handlers[:] = prev_handlers
        root.setLevel(prev_level)
