"""
排行榜存储抽象基类
Leaderboard Storage Base Class
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from ...leaderboard.leaderboard_entry import LeaderboardEntry


class StorageBase(ABC):
    """存储抽象基类，定义所有排行榜存储必须实现的接口

    所有读写方法在存储不可用时抛出 StorageUnavailable。
    """

    @abstractmethod
    def connect(self) -> bool:
        """
        连接存储

        Returns:
            bool: 连接是否成功
        """
        pass

    @abstractmethod
    def disconnect(self) -> bool:
        """
        断开存储连接

        Returns:
            bool: 断开是否成功
        """
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """检查存储是否已连接"""
        pass

    @abstractmethod
    def insert(self, entry: LeaderboardEntry):
        """
        新增一条记录

        Args:
            entry: 排行榜记录
        """
        pass

    @abstractmethod
    def replace(self, entry: LeaderboardEntry):
        """
        用新记录替换同一玩家的记录

        Args:
            entry: 排行榜记录
        """
        pass

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[LeaderboardEntry]:
        """
        按玩家名查找记录（多条时返回排名最高的一条）

        Args:
            username: 玩家名

        Returns:
            Optional[LeaderboardEntry]: 记录，不存在返回None
        """
        pass

    @abstractmethod
    def top(self, limit: int) -> List[LeaderboardEntry]:
        """
        按分数降序、时间升序返回前 limit 条记录

        Args:
            limit: 返回数量上限

        Returns:
            List[LeaderboardEntry]: 排好序的记录
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """记录总数"""
        pass

    def get_status(self) -> dict:
        """
        获取存储状态信息

        Returns:
            dict: 状态信息字典
        """
        return {
            "connected": self.is_connected(),
            "type": self.__class__.__name__
        }

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
        return False
