"""
存储实现模块
Storage Implementations
"""
from .sqlite_storage import SQLiteStorage
from .memory_storage import MemoryStorage
from ..factory.storage_factory import StorageFactory

# 自动注册到工厂类
StorageFactory.register_storage('sqlite', SQLiteStorage)
StorageFactory.register_storage('memory', MemoryStorage)

__all__ = ['SQLiteStorage', 'MemoryStorage']
