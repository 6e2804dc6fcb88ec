"""
游戏会话数据
Game Session Data
"""
from typing import Optional
from enum import Enum
from dataclasses import dataclass


class SessionOutcome(Enum):
    """会话结束结果枚举"""
    WON = "won"      # 达到目标分数
    LOST = "lost"    # 生命值耗尽

    def __str__(self):
        return self.value


@dataclass
class Session:
    """一局游戏的分数、生命值和计时"""
    username: str = ""
    score: int = 0
    health: int = 3
    start_time_ms: Optional[float] = None
    duration_ms: float = 0.0
    last_timer_sample_ms: Optional[float] = None
    active: bool = False
    outcome: Optional[SessionOutcome] = None

    @property
    def elapsed_seconds(self) -> int:
        """已用整秒数"""
        return int(self.duration_ms // 1000)

    def begin(self, username: str, now_ms: float, initial_health: int = 3):
        """
        开始新一局

        Args:
            username: 玩家名
            now_ms: 开始时间戳
            initial_health: 初始生命值
        """
        self.username = username
        self.score = 0
        self.health = initial_health
        self.start_time_ms = now_ms
        self.duration_ms = 0.0
        self.last_timer_sample_ms = now_ms
        self.active = True
        self.outcome = None

    def sample_timer(self, now_ms: float, interval_ms: float = 100):
        """
        按固定间隔更新显示用的游戏时长

        Args:
            now_ms: 当前时间戳
            interval_ms: 采样间隔
        """
        if not self.active or self.start_time_ms is None:
            return
        if self.last_timer_sample_ms is None or now_ms - self.last_timer_sample_ms >= interval_ms:
            self.duration_ms = now_ms - self.start_time_ms
            self.last_timer_sample_ms = now_ms

    def finish(self, outcome: SessionOutcome, now_ms: float):
        """
        结束本局并停止计时

        Args:
            outcome: 结束结果
            now_ms: 结束时间戳
        """
        if self.start_time_ms is not None:
            self.duration_ms = now_ms - self.start_time_ms
        self.active = False
        self.outcome = outcome

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'username': self.username,
            'score': self.score,
            'health': self.health,
            'elapsed_seconds': self.elapsed_seconds,
            'active': self.active,
            'outcome': self.outcome.value if self.outcome else None
        }
