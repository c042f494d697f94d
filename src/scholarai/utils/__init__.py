"""
Utility modules for ScholarAI.
"""

from scholarai.utils.config import AppConfig, load_config
from scholarai.utils.logging import get_logger, set_log_level, uvicorn_log_config

__all__ = [
    "AppConfig",
    "load_config",
    "get_logger",
    "set_log_level",
    "uvicorn_log_config",
]
