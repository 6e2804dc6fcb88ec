"""
游戏规则实现
Game Rules Implementation
"""
from typing import Optional
from .collision_resolver import Collision, CollisionOutcome
from .session import Session, SessionOutcome
from ...utils.logger import setup_logger

logger = setup_logger("FruitCatch.GameRules")


class GameRules:
    """游戏规则类"""

    # 各碰撞结果对应的分数变化
    SCORE_DELTAS = {
        CollisionOutcome.PLAIN_CATCH: 1,
        CollisionOutcome.SWIPE_CATCH: 3,
        CollisionOutcome.HAZARD_HIT: 0
    }

    # 各碰撞结果对应的生命值变化
    HEALTH_DELTAS = {
        CollisionOutcome.PLAIN_CATCH: 0,
        CollisionOutcome.SWIPE_CATCH: 0,
        CollisionOutcome.HAZARD_HIT: -1
    }

    @staticmethod
    def is_valid_username(username: Optional[str], min_length: int = 2) -> bool:
        """
        检查玩家名是否可以开始游戏

        Args:
            username: 玩家名
            min_length: 最小长度（去除首尾空白后）

        Returns:
            bool: 是否有效
        """
        if not isinstance(username, str):
            return False
        return len(username.strip()) >= min_length

    @staticmethod
    def apply(session: Session, collision: Collision):
        """
        将碰撞结果应用到会话（生命值不低于0）

        Args:
            session: 当前会话
            collision: 碰撞结果
        """
        outcome = collision.outcome
        session.score += GameRules.SCORE_DELTAS[outcome]
        session.health = max(0, session.health + GameRules.HEALTH_DELTAS[outcome])

        if outcome == CollisionOutcome.HAZARD_HIT:
            logger.info(f"碰到炸弹 {collision.entity.symbol}，生命值: {session.health}")
        else:
            logger.debug(f"{outcome}: {collision.entity.symbol}，分数: {session.score}")

    @staticmethod
    def judge(session: Session, win_score: int) -> Optional[SessionOutcome]:
        """
        判断本局是否结束

        Args:
            session: 当前会话
            win_score: 获胜分数

        Returns:
            Optional[SessionOutcome]: 结束结果，未结束返回None
        """
        if session.health <= 0:
            return SessionOutcome.LOST
        if session.score >= win_score:
            return SessionOutcome.WON
        return None
