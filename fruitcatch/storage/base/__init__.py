"""
存储抽象基类
Storage Base Classes
"""
from .storage_base import StorageBase

__all__ = ['StorageBase']
