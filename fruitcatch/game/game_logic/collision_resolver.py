"""
碰撞判定
Collision Resolver
"""
from typing import List, Optional, Sequence
from enum import Enum
from dataclasses import dataclass, field
import numpy as np
from .entity import Entity, SwipeEffect
from ..motion_tracking.hand_state import HandState
from ...utils.logger import setup_logger

logger = setup_logger("FruitCatch.CollisionResolver")


class CollisionOutcome(Enum):
    """碰撞结果枚举"""
    PLAIN_CATCH = "plain_catch"    # 静止接住水果 +1
    SWIPE_CATCH = "swipe_catch"    # 挥动接住水果 +3
    HAZARD_HIT = "hazard_hit"      # 碰到炸弹 -1血

    def __str__(self):
        return self.value


@dataclass
class Collision:
    """一次碰撞：被消耗的物体、消耗它的手以及结果"""
    entity: Entity
    hand: HandState
    outcome: CollisionOutcome
    distance: float

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'outcome': self.outcome.value,
            'entity': self.entity.to_dict(),
            'track_id': self.hand.track_id,
            'distance': self.distance
        }


@dataclass
class ResolveResult:
    """一帧碰撞判定的结果"""
    consumed: List[Collision] = field(default_factory=list)
    unconsumed: List[Entity] = field(default_factory=list)
    effects: List[SwipeEffect] = field(default_factory=list)


class CollisionResolver:
    """碰撞判定类"""

    def __init__(self,
                 height: float = 720,
                 swipe_leniency: float = 1.2,
                 hazard_factor: float = 0.8,
                 exit_margin: float = 100,
                 effect_lifetime_ms: float = 2000):
        """
        初始化碰撞判定

        Args:
            height: 游戏区域高度
            swipe_leniency: 挥动时接取半径的放大系数
            hazard_factor: 炸弹判定时接取半径的缩放系数
            exit_margin: 物体越过底边多少后移除
            effect_lifetime_ms: 挥动特效持续时间
        """
        self.height = height
        self.swipe_leniency = swipe_leniency
        self.hazard_factor = hazard_factor
        self.exit_margin = exit_margin
        self.effect_lifetime_ms = effect_lifetime_ms

    def hit_radius(self, hand: HandState, entity: Entity) -> float:
        """
        计算手与物体的碰撞判定半径

        Args:
            hand: 手部状态
            entity: 下落物体

        Returns:
            float: 判定半径
        """
        half_size = entity.size / 2
        if entity.is_hazard:
            return hand.catch_radius * self.hazard_factor + half_size
        if hand.is_swipe:
            return hand.catch_radius * self.swipe_leniency + half_size
        return hand.catch_radius + half_size

    @staticmethod
    def distance(hand: HandState, entity: Entity) -> float:
        """手与物体中心的欧氏距离"""
        return float(np.hypot(entity.x - hand.x, entity.y - hand.y))

    def outcome_for(self, hand: HandState, entity: Entity) -> CollisionOutcome:
        """碰撞结果只取决于物体类型和手的动作"""
        if entity.is_hazard:
            return CollisionOutcome.HAZARD_HIT
        if hand.is_swipe:
            return CollisionOutcome.SWIPE_CATCH
        return CollisionOutcome.PLAIN_CATCH

    def check(self, hand: HandState, entity: Entity) -> Optional[Collision]:
        """
        检测单只手与单个物体是否碰撞

        Returns:
            Optional[Collision]: 碰撞结果，未碰撞返回None
        """
        distance = self.distance(hand, entity)
        radius = self.hit_radius(hand, entity)
        if distance >= radius:
            return None

        return Collision(
            entity=entity,
            hand=hand,
            outcome=self.outcome_for(hand, entity),
            distance=distance
        )

    def has_exited(self, entity: Entity) -> bool:
        """物体是否已落出可见区域"""
        return entity.y >= self.height + self.exit_margin

    def resolve(self, hands: Sequence[HandState], entities: Sequence[Entity],
                now_ms: float = 0.0) -> ResolveResult:
        """
        对所有物体和手做碰撞判定

        物体按给定顺序处理，每个物体按手的顺序检测，第一只命中的手消耗该物体。

        Args:
            hands: 本帧手部状态列表
            entities: 当前所有物体
            now_ms: 当前时间戳（用于特效计时）

        Returns:
            ResolveResult: 被消耗的碰撞、保留的物体和新特效
        """
        result = ResolveResult()

        for entity in entities:
            collision = None
            for hand in hands:
                collision = self.check(hand, entity)
                if collision is not None:
                    break

            if collision is None:
                if not self.has_exited(entity):
                    result.unconsumed.append(entity)
                continue

            result.consumed.append(collision)
            logger.debug(f"碰撞: {collision.outcome} {entity.symbol} "
                         f"手={collision.hand.track_id} 距离={collision.distance:.2f}")

            if collision.outcome == CollisionOutcome.SWIPE_CATCH:
                result.effects.append(SwipeEffect(
                    x=collision.hand.x,
                    y=collision.hand.y,
                    created_ms=now_ms,
                    lifetime_ms=self.effect_lifetime_ms,
                    source_symbol=entity.symbol
                ))

        return result

    @classmethod
    def from_config(cls, config: dict, height: float) -> "CollisionResolver":
        """从配置字典创建碰撞判定"""
        return cls(height=height, **(config or {}))
