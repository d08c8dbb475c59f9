"""JSON logging for the lambdas

Call `initialize_logging()` from a lambda package's `__init__.py`, so it runs
once per cold start before the handler module logs anything.

Each record becomes one JSON object on stdout. Values passed through
`extra=` become top-level fields, which is how handlers tag outcomes with an
`event` code and services attach the short code and cache status:

{"timestamp": "2026-10-19T12:00:00.000Z", "level": "WARNING",
 "logger": "linkshortener.services.cache_aside",
 "message": "Resolution cache write failed. Continuing without cache.",
 "shortcode": "b", "exception": "Traceback (most recent call last): ..."}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkshortener.constants import ENV


# Attributes every LogRecord carries; anything else on a record came from `extra=`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', None, None))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render LogRecords, including their extras, as single-line JSON"""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        log = {
            'timestamp': created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            log['stack'] = self.formatStack(record.stack_info)

        # Extras such as datetimes or enums are logged by their str()
        return json.dumps(log, default=str)


def initialize_logging() -> None:
    """Route the root logger to stdout through JsonFormatter at LOG_LEVEL (default INFO)."""
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper(),
                'handlers': ['stdout'],
            },
        }
    )
