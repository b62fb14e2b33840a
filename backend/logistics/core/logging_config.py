"""
日志配置

控制台彩色输出 + 按日期的运行日志 / 错误日志文件，
级别、文件名、静默的第三方日志器都取自 settings。
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from logistics.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 本项目的日志器前缀，级别跟随 settings.LOG_LEVEL
PROJECT_LOGGER = "logistics"


class ConsoleFormatter(logging.Formatter):
    """控制台格式：级别名着色"""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def formatMessage(self, record):
        color = self.LEVEL_COLORS.get(record.levelno)
        if not color:
            return super().formatMessage(record)
        # 只改格式化用的字典，不动 record 本身（文件处理器共用同一条 record）
        values = dict(record.__dict__, levelname=f"{color}{record.levelname:<8}{self.RESET}")
        return self._style._fmt % values


def _log_file(log_dir: Path, pattern: str, level: int) -> logging.FileHandler:
    handler = logging.FileHandler(log_dir / pattern.format(date=date.today().isoformat()), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return handler


def setup_logging(log_level: Optional[str] = None, log_dir: Optional[str] = None) -> Path:
    """
    配置根日志器，重复调用会替换掉上一次的处理器

    Args:
        log_level: 本项目日志级别，默认 settings.LOG_LEVEL
        log_dir: 日志目录，默认 settings.LOG_DIR

    Returns:
        实际使用的日志目录
    """
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)
    log_path = Path(log_dir or settings.LOG_DIR)
    log_path.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(ConsoleFormatter(LOG_FORMAT, DATE_FORMAT))

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(console)
    root_logger.addHandler(_log_file(log_path, settings.LOG_FILE_NAME, logging.INFO))
    root_logger.addHandler(_log_file(log_path, settings.LOG_ERROR_FILE_NAME, logging.ERROR))

    logging.getLogger(PROJECT_LOGGER).setLevel(level)
    for name in settings.LOG_QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    get_logger(__name__).info(f"📋 日志已就绪: 级别 {logging.getLevelName(level)}, 目录 {log_path}")
    return log_path


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
