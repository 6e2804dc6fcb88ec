"""
内存排行榜存储实现
In-Memory Leaderboard Storage Implementation
"""
import threading
from dataclasses import replace
from typing import List, Optional
from ..base.storage_base import StorageBase
from ...leaderboard.leaderboard_entry import LeaderboardEntry
from ...utils.exceptions import StorageUnavailable
from ...utils.logger import setup_logger

logger = setup_logger("FruitCatch.MemoryStorage")


class MemoryStorage(StorageBase):
    """内存存储实现类，进程退出后数据丢失"""

    def __init__(self):
        self._rows: List[LeaderboardEntry] = []
        self._connected = False
        self._lock = threading.Lock()

    def connect(self) -> bool:
        self._connected = True
        logger.info("内存存储已就绪")
        return True

    def disconnect(self) -> bool:
        self._connected = False
        return True

    def is_connected(self) -> bool:
        return self._connected

    def _check(self):
        if not self._connected:
            raise StorageUnavailable("内存存储未连接", backend="memory")

    def insert(self, entry: LeaderboardEntry):
        self._check()
        with self._lock:
            self._rows.append(replace(entry))

    def replace(self, entry: LeaderboardEntry):
        self._check()
        with self._lock:
            self._rows = [row for row in self._rows if row.username != entry.username]
            self._rows.append(replace(entry))

    def find_by_username(self, username: str) -> Optional[LeaderboardEntry]:
        self._check()
        with self._lock:
            rows = [row for row in self._rows if row.username == username]
        if not rows:
            return None
        return replace(min(rows, key=lambda row: row.rank_key))

    def top(self, limit: int) -> List[LeaderboardEntry]:
        self._check()
        with self._lock:
            # sorted 是稳定排序，同分同时间按插入顺序
            ranked = sorted(self._rows, key=lambda row: row.rank_key)
        return [replace(row) for row in ranked[:limit]]

    def count(self) -> int:
        self._check()
        with self._lock:
            return len(self._rows)
