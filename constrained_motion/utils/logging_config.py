# Copyright 2025-2026 Dimensional Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Structured logging for constrained_motion.

Loggers are structlog front-ends over stdlib ``logging``: a compact single-line
console handler plus a rotating JSON-lines file handler, one per module.
"""

from collections.abc import Mapping
from datetime import datetime
import inspect
import logging
import logging.handlers
import os
from pathlib import Path
import sys
import tempfile
from typing import Any

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

from constrained_motion.constants import CMOTION_LOG_DIR, CMOTION_PROJECT_ROOT
from constrained_motion.core.global_config import GlobalConfig

_LOG_FILE_PATH: Path | None = None

_CONSOLE_NAME_WIDTH = 36


def _get_log_directory() -> Path:
    if (CMOTION_PROJECT_ROOT / ".git").exists():
        log_dir = CMOTION_LOG_DIR
    else:
        xdg_state_home = os.getenv("XDG_STATE_HOME")
        if xdg_state_home:
            log_dir = Path(xdg_state_home) / "constrained_motion" / "logs"
        else:
            log_dir = Path.home() / ".local" / "state" / "constrained_motion" / "logs"

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        log_dir = Path(tempfile.gettempdir()) / "constrained_motion" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

    return log_dir


def _configure_structlog() -> Path:
    global _LOG_FILE_PATH

    if _LOG_FILE_PATH:
        return _LOG_FILE_PATH

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    _LOG_FILE_PATH = _get_log_directory() / f"cmotion_{timestamp}_{os.getpid()}.jsonl"

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            CallsiteParameterAdder(
                parameters=[CallsiteParameter.FUNC_NAME, CallsiteParameter.LINENO]
            ),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return _LOG_FILE_PATH


def _compact_console_processor(logger: Any, method_name: str, event_dict: Mapping[str, Any]) -> str:
    """Format log lines as: HH:MM:SS.mmm [lvl][module] event key=value ..."""
    event_dict = dict(event_dict)

    timestamp = event_dict.pop("timestamp", "")
    try:
        dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        dt = datetime.now()
    time_str = dt.strftime("%H:%M:%S") + f".{dt.microsecond // 1000:03d}"

    level_short = event_dict.pop("level", "???")[:3].lower()
    name = event_dict.pop("logger", "")[-_CONSOLE_NAME_WIDTH:]
    event = event_dict.pop("event", "")

    for key in ("func_name", "lineno", "exception", "exc_info", "_record", "_from_structlog"):
        event_dict.pop(key, None)

    line = f"{time_str} [{level_short}][{name:<{_CONSOLE_NAME_WIDTH}s}] {event}"
    if event_dict:
        line += " " + " ".join(f"{k}={v}" for k, v in sorted(event_dict.items()))
    return line


def setup_logger(*, level: int | None = None) -> Any:
    """Set up a structured logger named after the calling module's file.

    Args:
        level: The logging level. Defaults to ``GlobalConfig().log_level``.

    Returns:
        A configured structlog logger instance.
    """

    name = inspect.stack()[1].filename
    try:
        name = str(Path(name).relative_to(CMOTION_PROJECT_ROOT))
    except (ValueError, TypeError):
        pass

    log_file_path = _configure_structlog()

    if level is None:
        level = getattr(logging, GlobalConfig().log_level.upper(), logging.INFO)

    stdlib_logger = logging.getLogger(name)
    if stdlib_logger.hasHandlers():
        stdlib_logger.handlers.clear()
    stdlib_logger.setLevel(level)
    stdlib_logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=_compact_console_processor)
    )
    stdlib_logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        mode="a",
        maxBytes=10 * 1024 * 1024,  # 10MiB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer())
    )
    stdlib_logger.addHandler(file_handler)

    return structlog.get_logger(name)
