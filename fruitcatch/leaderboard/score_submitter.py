"""
成绩提交器
Score Submitter

游戏结束时以“发出即不管”的方式提交成绩，不阻塞游戏循环。
"""
import threading
from enum import Enum
from typing import Callable, Optional
from .leaderboard_entry import LeaderboardEntry, SubmitOutcome
from ..utils.exceptions import StorageUnavailable, ValidationError
from ..utils.error_handler import global_error_handler
from ..utils.logger import setup_logger

logger = setup_logger("FruitCatch.ScoreSubmitter")


class SubmissionStatus(Enum):
    """提交状态枚举"""
    IDLE = "idle"                  # 尚未提交
    PENDING = "pending"            # 提交中
    CONFIRMED = "confirmed"        # 排行榜已确认
    UNCONFIRMED = "unconfirmed"    # 提交失败，未得到排行榜确认

    def __str__(self):
        return self.value


class ScoreSubmitter:
    """成绩提交器类"""

    def __init__(self, target: Callable[[LeaderboardEntry], SubmitOutcome],
                 background: bool = True):
        """
        初始化成绩提交器

        Args:
            target: 实际提交函数（如 LeaderboardStore.submit 或 HttpScoreClient.submit）
            background: 是否在后台线程中提交
        """
        self.target = target
        self.background = background
        self.status = SubmissionStatus.IDLE
        self.last_outcome: Optional[SubmitOutcome] = None
        self._generation = 0
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    def submit(self, entry: LeaderboardEntry):
        """
        提交成绩，立即返回

        Args:
            entry: 候选记录
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.status = SubmissionStatus.PENDING
            self.last_outcome = None

        if not self.background:
            self._run(entry, generation)
            return

        self._thread = threading.Thread(
            target=self._run, args=(entry, generation),
            name="ScoreSubmitter", daemon=True
        )
        self._thread.start()

    def _run(self, entry: LeaderboardEntry, generation: int):
        try:
            outcome = self.target(entry)
        except (StorageUnavailable, ValidationError) as e:
            global_error_handler.handle(e, context=f"提交成绩 {entry.username}")
            self._finish(generation, SubmissionStatus.UNCONFIRMED)
        except Exception as e:
            logger.error(f"提交成绩异常: {e}", exc_info=True)
            self._finish(generation, SubmissionStatus.UNCONFIRMED)
        else:
            self._finish(generation, SubmissionStatus.CONFIRMED, outcome)

    def _finish(self, generation: int, status: SubmissionStatus,
                outcome: Optional[SubmitOutcome] = None):
        # 重置或新提交之后，旧线程的结果作废
        with self._lock:
            if generation != self._generation:
                return
            self.status = status
            self.last_outcome = outcome

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        等待后台提交完成

        Args:
            timeout: 超时时间（秒）

        Returns:
            bool: 是否已完成
        """
        if self._thread is not None:
            self._thread.join(timeout)
            return not self._thread.is_alive()
        return True

    def reset(self):
        """清除提交状态"""
        with self._lock:
            self._generation += 1
            self.status = SubmissionStatus.IDLE
            self.last_outcome = None
