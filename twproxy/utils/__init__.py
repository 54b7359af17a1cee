from .config import config, Config
from .logger import get_logger

__all__ = ["config", "Config", "get_logger"]
