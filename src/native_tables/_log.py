import logging
import time
from typing import Iterable

from colorlog import ColoredFormatter

from native_tables.config import get_settings


class UTCColoredFormatter(ColoredFormatter):
    '''
    A ColoredFormatter that uses UTC for timestamps
    and formats them in ISO8601 with a trailing 'Z'.

    '''

    # switch time converter to UTC
    converter = time.gmtime

    def formatTime(self, record, datefmt=None):
        if datefmt:
            return super().formatTime(record, datefmt)

        ct = self.converter(record.created)
        t = time.strftime('%Y-%m-%dT%H:%M:%S', ct)
        return f'{t}Z'


def make_formatter() -> UTCColoredFormatter:
    return UTCColoredFormatter(
        '%(asctime)s %(log_color)s%(levelname)s%(reset)s %(name)s: %(message)s',
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'bold_red',
        },
    )


def setup_logging(
    loglevel: str | None = None,
    silence: Iterable[str] = (),
) -> logging.Handler:
    '''
    Install a single colored stream handler on the root logger, level taken
    from `NATIVE_TABLES_LOGLEVEL` unless given.

    '''
    if loglevel is None:
        loglevel = get_settings().loglevel

    # silence chatty dependencies
    for noisy in silence:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    root = logging.getLogger()

    # avoid duplicates if called twice
    if root.handlers:
        root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(make_formatter())
    root.addHandler(handler)
    root.setLevel(loglevel.upper())
    return handler
