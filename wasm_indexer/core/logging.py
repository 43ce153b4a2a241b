# wasm_indexer/core/logging.py
"""
Logging for the wasm indexer.

Everything logs under the `wasm_indexer` namespace. Handlers are attached
once, from a LoggingConfig, by IndexerLogger.configure(). Pipeline context
(tx hash, message index, contract address, ...) travels as record
attributes and is rendered by IndexerFormatter.
"""

import logging
import sys
from logging import DEBUG, INFO, WARNING, ERROR
from datetime import datetime
from typing import Any, Optional

from ..types.config import LoggingConfig


ROOT_LOGGER = 'wasm_indexer'

# Rendered in this order when present on a record
CONTEXT_ATTRS = ('tx_hash', 'height', 'msg_index', 'msg_type', 'contract_address',
                 'code_id', 'event_type', 'attribute', 'operation', 'stage', 'error')


class IndexerFormatter(logging.Formatter):
    """`time - logger - LEVEL - message | key=value ...`"""

    def __init__(self, include_context: bool = True):
        super().__init__()
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        line = f"{timestamp} - {record.name} - {record.levelname} - {record.getMessage()}"

        if self.include_context:
            context = " ".join(
                f"{attr}={_render(getattr(record, attr))}"
                for attr in CONTEXT_ATTRS if hasattr(record, attr)
            )
            if context:
                line = f"{line} | {context}"

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _render(value: Any) -> str:
    text = str(value)
    return repr(text) if not text or " " in text else text


class IndexerLogger:
    """Process-wide handler setup for the wasm_indexer logger tree"""

    _configured = False

    @classmethod
    def configure(cls, config: LoggingConfig) -> None:
        if cls._configured:
            return

        level = getattr(logging, config.log_level.upper())
        root_logger = logging.getLogger(ROOT_LOGGER)
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        if config.console_enabled:
            # stdout is left to CLI output
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            if config.structured_format:
                console_handler.setFormatter(IndexerFormatter())
            else:
                console_handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                ))
            root_logger.addHandler(console_handler)

        if config.file_enabled and config.log_dir:
            config.log_dir.mkdir(parents=True, exist_ok=True)
            file_formatter = IndexerFormatter()

            file_handler = logging.FileHandler(config.log_dir / 'wasm_indexer.log')
            file_handler.setLevel(level)
            file_handler.setFormatter(file_formatter)
            root_logger.addHandler(file_handler)

            # Failures halt the run, keep them in their own file
            error_handler = logging.FileHandler(config.log_dir / 'wasm_indexer_errors.log')
            error_handler.setLevel(ERROR)
            error_handler.setFormatter(file_formatter)
            root_logger.addHandler(error_handler)

        cls._configured = True

    @classmethod
    def reset(cls) -> None:
        """Close handlers so the next configure() call takes effect"""
        root_logger = logging.getLogger(ROOT_LOGGER)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        root_logger.setLevel(logging.NOTSET)
        cls._configured = False

    @staticmethod
    def get_logger(name: str) -> logging.Logger:
        if not name.startswith(ROOT_LOGGER):
            name = f'{ROOT_LOGGER}.{name}'
        return logging.getLogger(name)


def get_class_logger(instance: Any) -> logging.Logger:
    module = type(instance).__module__
    prefix = f'{ROOT_LOGGER}.'
    if module.startswith(prefix):
        module = module[len(prefix):]
    return IndexerLogger.get_logger(f"{module}.{type(instance).__name__}")


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """Log `message` with every non-None context value set as a record attribute"""
    if not logger.isEnabledFor(level):
        return

    record = logger.makeRecord(logger.name, level, "", 0, message, (), None)
    for key, value in context.items():
        if value is not None:
            setattr(record, key, value)
    logger.handle(record)


class LoggingMixin:
    """Per-class logger plus context-aware log helpers"""

    _logger: Optional[logging.Logger] = None

    @property
    def logger(self) -> logging.Logger:
        if self._logger is None:
            self._logger = get_class_logger(self)
        return self._logger

    def log_debug(self, message: str, **context) -> None:
        log_with_context(self.logger, DEBUG, message, **context)

    def log_info(self, message: str, **context) -> None:
        log_with_context(self.logger, INFO, message, **context)

    def log_warning(self, message: str, **context) -> None:
        log_with_context(self.logger, WARNING, message, **context)

    def log_error(self, message: str, **context) -> None:
        log_with_context(self.logger, ERROR, message, **context)

    def log_failure(self, message: str, error: Exception) -> None:
        """Log an indexer error at ERROR with its stage and accumulated context"""
        context = dict(getattr(error, 'context', {}))
        context['stage'] = getattr(error, 'stage', None)
        context['error'] = getattr(error, 'message', str(error))
        log_with_context(self.logger, ERROR, message, **context)


__all__ = [
    'IndexerFormatter',
    'IndexerLogger',
    'LoggingMixin',
    'get_class_logger',
    'log_with_context',
    'DEBUG',
    'INFO',
    'WARNING',
    'ERROR',
]
