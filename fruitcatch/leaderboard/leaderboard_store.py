"""
排行榜
Leaderboard Store

负责成绩写入策略（追加 / 每人最佳）和排名视图，存储介质由 StorageBase 提供。
"""
import threading
from typing import List, Optional, Tuple, TYPE_CHECKING
from .leaderboard_entry import LeaderboardEntry, LeaderboardPolicy, SubmitOutcome
from ..utils.exceptions import StorageUnavailable
from ..utils.logger import setup_logger

if TYPE_CHECKING:
    from ..storage.base.storage_base import StorageBase

logger = setup_logger("FruitCatch.LeaderboardStore")

DEFAULT_LIMIT = 10

# 存储不可用时返回的示例排行
FALLBACK_LEADERBOARD = [
    ("SpeedyHands", 20, 45),
    ("FruitMaster", 20, 52),
    ("SwipeKing", 20, 58),
    ("QuickCatch", 19, 40),
    ("HandsOfSteel", 18, 35),
]


class LeaderboardStore:
    """排行榜类"""

    def __init__(self, storage: "StorageBase",
                 policy: LeaderboardPolicy = LeaderboardPolicy.BEST_PER_USER,
                 limit: int = DEFAULT_LIMIT):
        """
        初始化排行榜

        Args:
            storage: 存储实例
            policy: 写入策略
            limit: 排名视图最多返回的条数
        """
        self.storage = storage
        self.policy = LeaderboardPolicy.from_string(policy)
        self.limit = limit
        self._lock = threading.Lock()

        logger.info(f"排行榜初始化，策略: {self.policy}, 上限: {limit}, "
                    f"存储: {storage.__class__.__name__}")

    def submit(self, entry: LeaderboardEntry) -> SubmitOutcome:
        """
        提交一条候选成绩

        Args:
            entry: 候选记录

        Returns:
            SubmitOutcome: 新增 / 更新 / 拒绝

        Raises:
            StorageUnavailable: 存储不可用，未写入
        """
        with self._lock:
            if self.policy == LeaderboardPolicy.APPEND_ONLY:
                self.storage.insert(entry)
                outcome = SubmitOutcome.INSERTED
            else:
                outcome = self._upsert_best(entry)

        logger.info(f"成绩提交 {entry.username}: 分数={entry.score}, "
                    f"时间={entry.time_seconds}s -> {outcome}")
        return outcome

    def _upsert_best(self, entry: LeaderboardEntry) -> SubmitOutcome:
        existing = self.storage.find_by_username(entry.username)
        if existing is None:
            self.storage.insert(entry)
            return SubmitOutcome.INSERTED
        if entry.is_better_than(existing):
            self.storage.replace(entry)
            return SubmitOutcome.UPDATED
        return SubmitOutcome.REJECTED

    def top_n(self, n: Optional[int] = None) -> List[LeaderboardEntry]:
        """
        获取排名前 n 的记录（分数降序，时间升序）

        Args:
            n: 数量，不超过 limit，None 时为 limit

        Returns:
            List[LeaderboardEntry]: 排好序的记录

        Raises:
            StorageUnavailable: 存储不可用
        """
        count = self.limit if n is None else max(0, min(n, self.limit))
        if count == 0:
            return []
        return self.storage.top(count)

    def top_n_or_fallback(self, n: Optional[int] = None) -> Tuple[List[LeaderboardEntry], bool]:
        """
        获取排名，存储不可用时返回示例排行

        Args:
            n: 数量

        Returns:
            Tuple[List[LeaderboardEntry], bool]: (记录列表, 是否为示例数据)
        """
        try:
            return self.top_n(n), False
        except StorageUnavailable as e:
            logger.warning(f"读取排行榜失败，返回示例数据: {e.message}")
            entries = self.fallback_entries()
            if n is not None:
                entries = entries[:max(0, n)]
            return entries, True

    @staticmethod
    def fallback_entries() -> List[LeaderboardEntry]:
        """示例排行数据"""
        return [
            LeaderboardEntry(username=username, score=score, time_seconds=time_seconds)
            for username, score, time_seconds in FALLBACK_LEADERBOARD
        ]
