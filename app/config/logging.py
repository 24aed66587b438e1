"""
Logging configuration for the complaint portal.
Provides structured logging with different handlers and formatters.
"""

import os
import logging
import logging.config
from typing import Dict, Any
from datetime import datetime, timezone

from pythonjsonlogger import jsonlogger

from app.config.settings import settings

LOG_DIR = settings.LOG_DIR


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        """Add custom fields to the log record"""
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['environment'] = settings.ENVIRONMENT

        for key in ('request_id', 'user_id', 'complaint_id', 'event_type'):
            if hasattr(record, key):
                log_record[key] = getattr(record, key)

        if record.exc_info:
            log_record['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }


def _file_handler(filename: str, level: str, formatter: str) -> Dict[str, Any]:
    return {
        'level': level,
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': os.path.join(LOG_DIR, filename),
        'maxBytes': 10485760,  # 10MB
        'backupCount': 10,
        'formatter': formatter,
        'encoding': 'utf8'
    }


def build_logging_config(log_to_file: bool = settings.LOG_TO_FILE) -> Dict[str, Any]:
    """Build the dictConfig payload; file handlers are only attached when enabled"""
    handlers: Dict[str, Any] = {
        'console': {
            'level': 'DEBUG' if settings.DEBUG else 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'colored' if settings.is_development() else 'standard'
        },
    }
    if log_to_file:
        handlers['file'] = _file_handler('app.log', 'INFO', 'standard')
        handlers['error_file'] = _file_handler('error.log', 'ERROR', 'standard')
        handlers['json_file'] = _file_handler('app.json.log', 'INFO', 'json')

    app_handlers = list(handlers)

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
            'json': {
                '()': CustomJsonFormatter,
                'format': '%(timestamp)s %(level)s %(logger)s %(message)s'
            },
            'colored': {
                '()': 'colorlog.ColoredFormatter',
                'format': '%(log_color)s%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                'log_colors': {
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white',
                }
            }
        },
        'handlers': handlers,
        'loggers': {
            '': {  # Root logger
                'handlers': app_handlers,
                'level': settings.LOG_LEVEL,
            },
            'app': {  # Application logger
                'handlers': app_handlers,
                'level': settings.LOG_LEVEL,
                'propagate': False
            },
            'sqlalchemy.engine': {
                'handlers': ['console'],
                'level': 'INFO' if settings.DATABASE_ECHO else 'WARNING',
                'propagate': False
            },
            'uvicorn.access': {
                'handlers': ['console'],
                'level': 'INFO',
                'propagate': False
            }
        }
    }


LOGGING_CONFIG = build_logging_config()


def setup_logging():
    """Configure application logging"""
    if settings.LOG_TO_FILE:
        os.makedirs(LOG_DIR, exist_ok=True)
    logging.config.dictConfig(LOGGING_CONFIG)
    logger = logging.getLogger("app")
    logger.info(f"Logging initialized with level: {settings.LOG_LEVEL}")
    return logger


def get_logger(name: str):
    """Get logger with context"""
    return logging.getLogger(name)
