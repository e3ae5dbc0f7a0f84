"""Logging setup for the generator and renderer.

Console output is plain text unless ``MANNEQUIN_LOG_FORMAT=json``. When
``MANNEQUIN_LOG_FILE`` is set, records are also written there through a
queue so that render workers never block on file IO.
"""

from __future__ import annotations

import logging
import os
import queue
from collections.abc import Mapping
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from mannequin.api.logging import JsonFormatter, MannequinLoggingConfig

LOG_FORMATS = ("text", "json")
TEXT_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"

_QUEUE_LISTENER: QueueListener | None = None


def resolve_log_level_name(default: str = "INFO", env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with the package-prefixed override taking priority."""
    source = os.environ if env is None else env
    value = source.get("MANNEQUIN_LOG_LEVEL")
    if value is None:
        value = source.get("LOG_LEVEL", default)
    return value.strip().upper()


def resolve_log_format(key: str, default: str, env: Mapping[str, str] | None = None) -> str:
    """Read a ``text``/``json`` choice; unknown values keep ``default``."""
    source = os.environ if env is None else env
    value = source.get(key, "").strip().lower()
    return value if value in LOG_FORMATS else default


def logging_config_from_env(env: Mapping[str, str] | None = None) -> MannequinLoggingConfig:
    defaults = MannequinLoggingConfig()
    source = os.environ if env is None else env
    return MannequinLoggingConfig(
        level_name=resolve_log_level_name(defaults.level_name, env=source),
        console_format=resolve_log_format("MANNEQUIN_LOG_FORMAT", defaults.console_format, env=source),
        file_path=source.get("MANNEQUIN_LOG_FILE") or defaults.file_path,
        file_format=resolve_log_format("MANNEQUIN_LOG_FILE_FORMAT", defaults.file_format, env=source),
    )


def _stop_listener() -> None:
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None


def _build_handlers(config: MannequinLoggingConfig) -> list[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(_resolve_formatter(config.console_format))
    if not config.file_path:
        return [console]
    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    file_handler.setFormatter(_resolve_formatter(config.file_format))
    return [console, file_handler]


def configure_logging(config: MannequinLoggingConfig) -> None:
    """Replace root handlers according to ``config``."""
    global _QUEUE_LISTENER

    _stop_listener()
    handlers = _build_handlers(config)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def setup_logging() -> None:
    """Configure logging from env if no handlers are present."""
    if logging.getLogger().handlers:
        return
    configure_logging(logging_config_from_env())


def get_logger(name: str) -> logging.Logger:
    """Return namespaced logger instance."""
    return logging.getLogger(name)


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT)
