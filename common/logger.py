import logging
import sys
from typing import Optional

from common.config import settings

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_ROOT = "antiplagiat"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Loggers are children of the project root logger, which owns the only
    stderr handler; its level comes from ANTIPLAGIAT_LOG_LEVEL.
    """
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(settings.log_level.upper())
        root.propagate = False
    if not name or name == _ROOT:
        return root
    return root.getChild(name)


def set_level(level: str) -> None:
    get_logger().setLevel(level.upper())
