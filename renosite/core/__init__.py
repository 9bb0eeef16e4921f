"""
renosite Core
=============

Configuration, database access and logging shared by every module.
"""

from .config import Config, get_config_value
from .database import Database
from .logging_service import LoggingService

__all__ = ['Config', 'get_config_value', 'Database', 'LoggingService']
