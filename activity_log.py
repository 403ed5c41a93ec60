"""Activity log: one append-only file per calendar day plus optional console echo.

Lines look like ``[2025-03-05T10:00:00.000Z] [INFO] message`` and may be
followed by a pretty-printed JSON payload. Tool calls are logged at the
TOOL level and framed by separator lines.
"""
import json
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime, timezone

TOOL = 25
logging.addLevelName(TOOL, 'TOOL')

SEPARATOR = '=' * 80


@dataclass
class LogSettings:
    console_enabled: bool = True
    logs_dir: str = 'logs'


def _iso_timestamp(created=None):
    moment = datetime.fromtimestamp(created, timezone.utc) if created else datetime.now(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class ActivityFormatter(logging.Formatter):
    def format(self, record):
        formatted = f"[{_iso_timestamp(record.created)}] [{record.levelname}] {record.getMessage()}"
        data = getattr(record, 'data', None)
        if data:
            formatted += '\n' + json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if record.levelno == TOOL:
            formatted = f"\n{SEPARATOR}\n{formatted}\n{SEPARATOR}\n"
        return formatted


class DailyFileHandler(logging.Handler):
    """Appends each record to <logs_dir>/log-YYYY-MM-DD.log, opening the file per write."""

    def __init__(self, settings):
        super().__init__()
        self.settings = settings

    def filename_for(self, created):
        day = datetime.fromtimestamp(created)
        return os.path.join(self.settings.logs_dir, f"log-{day:%Y-%m-%d}.log")

    def emit(self, record):
        try:
            message = self.format(record)
            os.makedirs(self.settings.logs_dir, exist_ok=True)
            with open(self.filename_for(record.created), 'a', encoding='utf-8') as f:
                f.write(message + '\n')
        except Exception:
            self.handleError(record)


class ConsoleEchoFilter(logging.Filter):
    def __init__(self, settings, errors):
        super().__init__()
        self.settings = settings
        self.errors = errors

    def filter(self, record):
        if not self.settings.console_enabled:
            return False
        return (record.levelno >= logging.ERROR) == self.errors


class ActivityLog:
    """Writes the service activity to the daily log file and, when enabled, the console.

    The console toggle lives in the LogSettings passed at construction and
    is only changed through set_console_enabled().
    """

    def __init__(self, settings, name='cronogramas.activity'):
        self.settings = settings
        # Kept out of the logging registry so each instance owns its handlers
        self.logger = logging.Logger(name, logging.INFO)

        formatter = ActivityFormatter()
        file_handler = DailyFileHandler(settings)
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

        for stream, errors in ((sys.stdout, False), (sys.stderr, True)):
            console_handler = logging.StreamHandler(stream)
            console_handler.setFormatter(formatter)
            console_handler.addFilter(ConsoleEchoFilter(settings, errors))
            self.logger.addHandler(console_handler)

    @property
    def console_enabled(self):
        return self.settings.console_enabled

    @property
    def logs_directory(self):
        return self.settings.logs_dir

    def set_console_enabled(self, enabled):
        self.settings.console_enabled = enabled
        self.info(f"Console logs {'ENABLED' if enabled else 'DISABLED'}")

    def info(self, message, data=None):
        self.logger.info(message, extra={'data': data})

    def error(self, message, error=None):
        data = None
        if isinstance(error, BaseException):
            data = {'error': type(error).__name__, 'message': str(error)}
        elif error is not None:
            data = error
        self.logger.error(message, extra={'data': data})

    def tool_call(self, tool_name, request, response):
        data = {
            'request': request,
            'response': response,
            'timestamp': _iso_timestamp(),
        }
        self.logger.log(TOOL, f"TOOL CALL: {tool_name}", extra={'data': data})
