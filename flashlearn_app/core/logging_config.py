"""
Logging for FlashLearn.

Everything logs under the ``flashlearn`` logger tree: ``flashlearn.study``
for the session engine, ``flashlearn.study.sync`` for background statistics
writes. Request code keeps using ``current_app.logger``.
"""

import json
import logging
import logging.handlers
import os
from typing import List, Optional

LOGGER_NAME = 'flashlearn'
LOG_FILE_NAME = 'flashlearn.log'
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Thread name matters: statistics syncs run on "stats-sync-<card_id>" threads
TEXT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'time': self.formatTime(record, DATE_FORMAT),
            'level': record.levelname,
            'logger': record.name,
            'thread': record.threadName,
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _build_handlers(level: int, formatter: logging.Formatter, log_dir: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding='utf-8',
        ))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    app=None,
    log_level: str = 'INFO',
    log_dir: Optional[str] = None,
    json_format: bool = False
) -> logging.Logger:
    """
    (Re)configure the ``flashlearn`` logger.

    Args:
        app: Flask application; when given, werkzeug request logs are quieted
        log_level: DEBUG, INFO, WARNING or ERROR
        log_dir: directory for the rotating log file; console only when None
        json_format: emit JSON lines instead of text

    Returns:
        The ``flashlearn`` logger.
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = JsonFormatter() if json_format else logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(level, formatter, log_dir):
        logger.addHandler(handler)

    if app is not None:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)

    logger.debug("Logging ready: level=%s file=%s", logging.getLevelName(level), log_dir or '-')
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)
