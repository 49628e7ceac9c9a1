import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from .config import Settings

# モジュールは logging.getLogger(__name__) を使うため、すべてこのロガーの子になる
PROJECT_LOGGER = "src"

_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs', 'message',
    'pathname', 'process', 'processName', 'relativeCreated',
    'thread', 'threadName', 'taskName', 'exc_info', 'exc_text',
    'stack_info',
])


class JSONFormatter(logging.Formatter):
    """1レコードを1行のJSONとして出力するフォーマッタ"""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        log_obj.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        )
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


def setup_logging(
    name: str,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = False
) -> logging.Logger:
    """
    指定ロガーにJSONハンドラを設定する

    ハンドラは毎回作り直すため、同じ名前で再設定してもログは重複しない。
    log_fileもconsoleも指定しない場合は標準出力に書き出す。
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    handlers = []
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    if console or not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))

    formatter = JSONFormatter()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def configure_logging(settings: Settings, log_file: Optional[str] = None) -> logging.Logger:
    """設定のlog_levelをプロジェクト全体のロガーに適用する"""
    return setup_logging(
        PROJECT_LOGGER,
        level=settings.log_level,
        log_file=log_file,
        console=log_file is None,
    )
