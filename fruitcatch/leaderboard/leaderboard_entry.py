"""
排行榜记录
Leaderboard Entry
"""
from typing import Any, Dict, Optional, Tuple
from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from ..utils.exceptions import ValidationError, ConfigurationException

MAX_USERNAME_LENGTH = 20


class SubmitOutcome(Enum):
    """成绩提交结果枚举"""
    INSERTED = "inserted"    # 新增记录
    UPDATED = "updated"      # 替换了该玩家原有记录
    REJECTED = "rejected"    # 不优于原有记录，保留原记录

    def __str__(self):
        return self.value


class LeaderboardPolicy(Enum):
    """排行榜写入策略枚举"""
    APPEND_ONLY = "append"       # 每次提交都新增一行
    BEST_PER_USER = "best"       # 每个玩家只保留最好成绩

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value) -> "LeaderboardPolicy":
        """
        从字符串创建策略枚举

        Args:
            value: 策略字符串（append, best）

        Returns:
            LeaderboardPolicy: 策略

        Raises:
            ConfigurationException: 未知策略
        """
        if isinstance(value, cls):
            return value
        value_lower = str(value).lower()
        for policy in cls:
            if policy.value == value_lower:
                return policy
        raise ConfigurationException(f"未知的排行榜策略: {value}", config_key="leaderboard.policy")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class LeaderboardEntry:
    """排行榜记录数据类"""
    username: str
    score: int
    time_seconds: int
    recorded_at: datetime = field(default_factory=_now)

    def __post_init__(self):
        self.username = self.username[:MAX_USERNAME_LENGTH]

    @property
    def rank_key(self) -> Tuple[int, int]:
        """排序键：分数降序，时间升序"""
        return -self.score, self.time_seconds

    def is_better_than(self, other: "LeaderboardEntry") -> bool:
        """
        是否严格优于另一条记录

        Args:
            other: 另一条记录

        Returns:
            bool: 分数更高，或分数相同且用时更短
        """
        if self.score != other.score:
            return self.score > other.score
        return self.time_seconds < other.time_seconds

    def to_dict(self) -> dict:
        """转换为接口使用的字典"""
        return {
            'username': self.username,
            'score': self.score,
            'time': self.time_seconds,
            'date': self.recorded_at.isoformat()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeaderboardEntry":
        """从接口字典创建（不做校验，用于读取可信数据）"""
        date = data.get('date')
        recorded_at = datetime.fromisoformat(date) if isinstance(date, str) else _now()
        return cls(
            username=data['username'],
            score=int(data['score']),
            time_seconds=int(data['time']),
            recorded_at=recorded_at
        )


def _require_int(payload: Dict[str, Any], key: str) -> int:
    value = payload.get(key)
    # bool 是 int 的子类，需要单独排除
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"字段 {key} 必须是整数", field=key)
    if value < 0:
        raise ValidationError(f"字段 {key} 不能为负数", field=key)
    return value


def validate_submission(payload: Optional[Any]) -> LeaderboardEntry:
    """
    校验成绩提交请求体

    Args:
        payload: 解析后的JSON请求体 {username, score, time}

    Returns:
        LeaderboardEntry: 校验通过的候选记录

    Raises:
        ValidationError: 字段缺失或类型错误
    """
    if not isinstance(payload, dict):
        raise ValidationError("请求体必须是JSON对象")

    username = payload.get('username')
    if not isinstance(username, str) or not username.strip():
        raise ValidationError("字段 username 必须是非空字符串", field='username')

    score = _require_int(payload, 'score')
    time_seconds = _require_int(payload, 'time')

    return LeaderboardEntry(username=username.strip(), score=score, time_seconds=time_seconds)
