import logging
import sys
import os
from logging import Logger, StreamHandler
from logging.handlers import TimedRotatingFileHandler
from datetime import datetime
from pythonjsonlogger import jsonlogger
from typing import Literal


class ColoredStructuredFormatter(logging.Formatter):
    """Colored structured log formatter."""

    COLORS = {
        'DEBUG': '\033[36m',  # Cyan
        'INFO': '\033[32m',  # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',  # Red
        'RESET': '\033[0m'
    }

    def format(self, record):
        level_color = self.COLORS.get(record.levelname, '')
        reset = self.COLORS['RESET']

        # Resolver events carry a cache tag: [hit], [miss], [shared]
        if hasattr(record, 'cache'):
            msg_parts = [f"{level_color}[{record.cache}]{reset}", record.getMessage()]

            details = []
            if getattr(record, 'source_url', None):
                details.append(f"  🔗 Source: {record.source_url}")
            if getattr(record, 'iframe_url', None):
                details.append(f"  🎬 Iframe: {record.iframe_url}")
            if getattr(record, 'elapsed_ms', None) is not None:
                details.append(f"  ⏱  Elapsed: {record.elapsed_ms} ms")

            full_msg = " ".join(msg_parts)
            if details:
                full_msg += "\n" + "\n".join(details)
            return full_msg

        # For other logs, show level only for ERROR/WARNING
        level_indicator = ""
        if record.levelname == 'ERROR':
            level_indicator = f"{self.COLORS['ERROR']}[ERROR]{reset} "
        elif record.levelname == 'WARNING':
            level_indicator = f"{self.COLORS['WARNING']}[WARN]{reset} "

        return f"{level_indicator}{record.getMessage()}"


class HumanReadableFormatter(logging.Formatter):
    """Human-readable file log format, keep emojis."""

    SKIP_FIELDS = {
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
        'filename', 'module', 'lineno', 'funcName', 'created',
        'msecs', 'relativeCreated', 'thread', 'threadName',
        'processName', 'process', 'getMessage', 'exc_info',
        'exc_text', 'stack_info', 'message', 'taskName', 'asctime',
    }

    def format(self, record):
        timestamp = self.formatTime(record, '%Y-%m-%d %H:%M:%S')

        level_prefix = ""
        if record.levelname in ['ERROR', 'WARNING']:
            level_prefix = f"[{record.levelname}] "

        base_info = f"[{timestamp}] {level_prefix}{record.getMessage()}"

        extras = []
        for key, value in record.__dict__.items():
            if key in self.SKIP_FIELDS or value is None:
                continue
            if key == 'source_url':
                extras.append(f"source={value}")
            elif key == 'iframe_url':
                extras.append(f"iframe={value}")
            elif key == 'elapsed_ms':
                extras.append(f"elapsed={value}ms")
            else:
                extras.append(f"{key}={value}")

        if extras:
            base_info += f" | {' | '.join(extras)}"

        if record.exc_info:
            base_info += "\n" + self.formatException(record.exc_info)

        return base_info


class CompactJsonFormatter(jsonlogger.JsonFormatter):
    """Compact JSON formatter that removes redundant fields."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record.pop('name', None)
        log_record['level'] = record.levelname

        # Simplify time format to seconds
        asctime = log_record.get('asctime')
        if isinstance(asctime, str) and ',' in asctime:
            log_record['asctime'] = asctime.split(',')[0]


def create_logger(
        lgr_nm: str,
        log_folder: str,
        enable_console: bool = True,
        file_format: Literal["jsonl", "readable", "both"] = "both",
) -> tuple[Logger, str]:
    """
    Create an independent logger instance, supporting multiple file formats.

    Args:
        lgr_nm: Logger name
        log_folder: Log folder
        enable_console: Whether to enable console output
        file_format: File log format

    Returns:
        (logger instance, timestamp)
    """
    if not os.path.exists(log_folder):
        os.makedirs(log_folder)

    current_time = datetime.now().strftime("%Y%m%d_%H%M%S")

    # Create a unique logger name to avoid duplication
    unique_logger_name = f"{lgr_nm}_{current_time}_{id(log_folder)}"

    # If a logger already exists, clean it up first
    existing_logger = logging.getLogger(unique_logger_name)
    if existing_logger.handlers:
        cleanup_logger(existing_logger)

    new_logger = logging.getLogger(unique_logger_name)
    new_logger.setLevel(logging.DEBUG)
    new_logger.propagate = False

    if file_format in ["jsonl", "both"]:
        jsonl_file = os.path.join(log_folder, f"{current_time}_{lgr_nm}.jsonl")
        jsonl_handler = TimedRotatingFileHandler(
            jsonl_file,
            when="D",
            backupCount=14,
            encoding="utf-8"
        )
        jsonl_handler.setFormatter(CompactJsonFormatter('%(asctime)s %(message)s'))
        jsonl_handler.setLevel(logging.DEBUG)
        new_logger.addHandler(jsonl_handler)

    if file_format in ["readable", "both"]:
        readable_file = os.path.join(log_folder, f"{current_time}_{lgr_nm}.log")
        readable_handler = TimedRotatingFileHandler(
            readable_file,
            when="D",
            backupCount=14,
            encoding="utf-8"
        )
        readable_handler.setFormatter(HumanReadableFormatter())
        readable_handler.setLevel(logging.DEBUG)
        new_logger.addHandler(readable_handler)

    if enable_console:
        console_handler = StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredStructuredFormatter())
        console_handler.setLevel(logging.INFO)
        new_logger.addHandler(console_handler)

    return new_logger, current_time


def create_sub_logger(parent_logger: Logger, sub_name: str) -> Logger:
    """
    Create sublogger based on parent logger, inherit parent logger's handlers
    through propagation.
    """
    sub_logger = logging.getLogger(f"{parent_logger.name}.{sub_name}")
    sub_logger.setLevel(parent_logger.level)
    sub_logger.propagate = True

    return sub_logger


def cleanup_logger(logger: Logger) -> None:
    """Close and detach all handlers of the logger."""
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
