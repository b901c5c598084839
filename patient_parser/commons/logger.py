import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger


def setup_logging(root: Optional[str], level: str = "INFO"):
    """Log diario en root/YYYY/MM/DD/app.log + consola. root=None solo consola."""
    logger.remove()
    if root:
        logdir = Path(root) / datetime.now().strftime("%Y/%m/%d")
        logdir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(logdir / "app.log"),
            rotation="00:00",
            retention="14 days",
            level=level,
            enqueue=True,
            backtrace=True,
            diagnose=False,
        )
    logger.add(sys.stderr, level=level)
    return logger
