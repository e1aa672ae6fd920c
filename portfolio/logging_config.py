import os
import logging
import pytz
from datetime import datetime

STRUCTURED_FIELDS = ('event', 'kind', 'error')


class TimezoneFormatter(logging.Formatter):
    def __init__(self, fmt=None, datefmt=None, timezone='UTC'):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.timezone = pytz.timezone(timezone)

    def formatTime(self, record, datefmt=None):
        # Convert the timestamp to the configured zone
        record_time = datetime.fromtimestamp(record.created, self.timezone)
        return record_time.strftime(datefmt) if datefmt else record_time.isoformat()

    def format(self, record):
        message = super().format(record)
        fields = [f'{name}={getattr(record, name)}' for name in STRUCTURED_FIELDS if hasattr(record, name)]
        if fields:
            message = f"{message} [{' '.join(fields)}]"
        return message


def setup_logging(timezone=None):
    logger = logging.getLogger()
    if not logger.handlers:
        formatter = TimezoneFormatter(
            fmt='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
            timezone=timezone or os.environ.get('LOG_TIMEZONE', 'UTC'),
        )

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        logger.setLevel(logging.INFO)
        logger.addHandler(handler)

    return logger
