"""Logging configuration for the market proxy."""
import sys

from loguru import logger

from .config import PROJECT_ROOT, config

LOG_DIR = PROJECT_ROOT / "logs"

# Remove default handler
logger.remove()

# Console handler
logger.add(
    sys.stderr,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[name]}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    level=config.log_level,
    colorize=True,
)

# File handler - off on read-only serverless filesystems
if config.log_to_file:
    LOG_DIR.mkdir(exist_ok=True)
    logger.add(
        LOG_DIR / "twproxy_{time:YYYY-MM-DD}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}",
        level="DEBUG",
        rotation="1 day",
        retention="30 days",
        compression="zip",
    )

logger.configure(extra={"name": "twproxy"})


def get_logger(name: str):
    """Get a logger with the specified name."""
    return logger.bind(name=name)
