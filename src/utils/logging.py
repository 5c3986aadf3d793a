"""Logging configuration utilities."""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from src.core.config import settings

SIMPLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Domain context passed through ``extra=`` and copied into JSON entries
CONTEXT_FIELDS = ("source", "nip", "letter_number", "action")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, service_name):
        super().__init__()
        self.service_name = service_name

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry['exc_info'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


def _writable_log_file(log_directory: str) -> Optional[str]:
    """Path of the service log file, or None when the directory is unusable."""
    try:
        os.makedirs(log_directory, exist_ok=True)
    except OSError as e:
        print(f"Cannot create log directory {log_directory}: {e}")
        return None
    if not os.access(log_directory, os.W_OK):
        print(f"Log directory {log_directory} is not writable")
        return None
    return os.path.join(log_directory, f'{settings.SERVICE_NAME}.log')


def build_logging_config(log_file_path: Optional[str]) -> Dict[str, Any]:
    """dictConfig for console output plus, when possible, a rotating JSON file."""
    level = 'DEBUG' if settings.DEBUG else 'INFO'
    handler_names = ['console']

    handlers: Dict[str, Any] = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': level,
            'formatter': 'simple',
            'stream': 'ext://sys.stdout',
        },
    }
    if log_file_path:
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': 'INFO',
            'formatter': 'json',
            'filename': log_file_path,
            'maxBytes': settings.LOG_MAX_BYTES,
            'backupCount': settings.LOG_BACKUP_COUNT,
            'encoding': 'utf-8',
        }
        handler_names.append('file')

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {
                '()': 'src.utils.logging.JSONFormatter',
                'service_name': settings.SERVICE_NAME,
            },
            'simple': {'format': SIMPLE_FORMAT},
        },
        'handlers': handlers,
        'loggers': {
            '': {  # Root logger
                'level': level,
                'handlers': handler_names,
            },
            'uvicorn': {
                'level': 'INFO',
                'handlers': handler_names,
                'propagate': False,
            },
            # Every sheet fetch is an httpx request; keep those out of INFO
            'httpx': {
                'level': 'WARNING',
                'handlers': handler_names,
                'propagate': False,
            },
        },
    }


def setup_logging():
    """Setup application logging; falls back to console-only output."""
    log_file_path = _writable_log_file(os.path.abspath(settings.LOG_DIRECTORY))
    if log_file_path is None:
        print("Falling back to console-only logging")

    try:
        logging.config.dictConfig(build_logging_config(log_file_path))
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        print(f"Error setting up logging configuration: {e}")
        logging.basicConfig(level=logging.INFO, format=SIMPLE_FORMAT)
