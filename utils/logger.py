import sys
from pathlib import Path

from loguru import logger

LOG_DIR = Path("logs")
LOG_FORMAT = "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - {message}"

_configured = False


def setup_logging(level: str = "INFO", log_dir: Path = LOG_DIR):
    """配置 loguru：控制台 + 按大小滚动的文件日志。重复调用无副作用"""
    global _configured
    if _configured:
        return logger

    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)

    log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(log_dir / "run.log", level="DEBUG", rotation="5 MB", retention=5, encoding="utf-8")

    _configured = True
    return logger
