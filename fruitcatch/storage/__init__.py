"""
排行榜存储模块
Leaderboard Storage Layer
"""
from .base import StorageBase
from .factory.storage_factory import StorageFactory
from .implementations import SQLiteStorage, MemoryStorage
from .config_manager import StorageConfigManager

__all__ = [
    'StorageBase',
    'StorageFactory',
    'SQLiteStorage',
    'MemoryStorage',
    'StorageConfigManager'
]
