"""
ログ設定

ライブラリはインポート時にログ設定を行わない。
組み込み側が textmaster のログを見たい場合に setup_logging を呼ぶ。
"""
import logging
import sys
from typing import Optional, TextIO

from textmaster.config import settings

PACKAGE_LOGGER = "textmaster"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ColoredFormatter(logging.Formatter):
    """レベル名を色付けするフォーマッター（開発用）"""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        # 他のハンドラーに色コードが漏れないようコピーに対して着色
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname)
        if color:
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


class _PackageHandler(logging.StreamHandler):
    """setup_logging が追加したハンドラーの目印"""
    pass


def setup_logging(
    log_level: Optional[str] = None,
    enable_colors: Optional[bool] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    textmaster パッケージのロガーにハンドラーを設定

    ルートロガーには触れない。繰り返し呼んでもハンドラーは1つのまま。

    Args:
        log_level: ログレベル（省略時は settings.LOG_LEVEL）
        enable_colors: 色付きログを有効にするか（省略時は settings.LOG_COLORS）
        stream: 出力先（省略時は標準出力）

    Returns:
        設定したパッケージロガー
    """
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper())
    if enable_colors is None:
        enable_colors = settings.LOG_COLORS

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, _PackageHandler):
            logger.removeHandler(handler)

    handler = _PackageHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        ColoredFormatter(LOG_FORMAT) if enable_colors
        else logging.Formatter(LOG_FORMAT)
    )
    logger.addHandler(handler)

    return logger
