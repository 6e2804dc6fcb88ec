"""
存储工厂类
Storage Factory Class
"""
from typing import Dict, Any
from ..base.storage_base import StorageBase


class StorageFactory:
    """存储工厂类，负责创建排行榜存储实例"""

    _storage_classes: Dict[str, type] = {}

    @classmethod
    def register_storage(cls, name: str, storage_class: type):
        """
        注册存储类

        Args:
            name: 存储名称（如 'sqlite'）
            storage_class: 存储类（必须继承自StorageBase）
        """
        if not issubclass(storage_class, StorageBase):
            raise TypeError(f"{storage_class} must be a subclass of StorageBase")
        cls._storage_classes[name.lower()] = storage_class

    @classmethod
    def create_storage(cls, name: str, config: Dict[str, Any]) -> StorageBase:
        """
        创建存储实例

        Args:
            name: 存储名称
            config: 配置参数

        Returns:
            StorageBase: 存储实例
        """
        name_lower = name.lower()
        if name_lower not in cls._storage_classes:
            raise ValueError(f"Unknown storage: {name}")

        storage_class = cls._storage_classes[name_lower]
        return storage_class(**config)

    @classmethod
    def list_storages(cls) -> list:
        """列出所有已注册的存储类型"""
        return list(cls._storage_classes.keys())

    @classmethod
    def is_storage_registered(cls, name: str) -> bool:
        """检查存储类型是否已注册"""
        return name.lower() in cls._storage_classes
