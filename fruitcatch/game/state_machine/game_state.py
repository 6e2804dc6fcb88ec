"""
游戏状态枚举
Game State Enumeration
"""
from enum import Enum, auto


class GameState(Enum):
    """游戏状态枚举"""
    NOT_STARTED = auto()   # 未开始
    ACTIVE = auto()        # 游戏进行中
    WON = auto()           # 获胜
    LOST = auto()          # 失败

    def __str__(self):
        return self.name

    @property
    def is_terminal(self) -> bool:
        return self in (GameState.WON, GameState.LOST)
