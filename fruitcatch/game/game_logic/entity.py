"""
下落物体与特效
Falling Entities and Effects
"""
from enum import Enum
from dataclasses import dataclass


class EntityKind(Enum):
    """下落物体类型枚举"""
    FRUIT = "fruit"    # 水果（加分）
    BOMB = "bomb"      # 炸弹（扣血）

    def __str__(self):
        return self.value


@dataclass
class Entity:
    """下落物体数据类，size 同时作为碰撞直径使用"""
    kind: EntityKind
    x: float
    y: float
    speed: float
    size: float
    rotation: float = 0.0
    rotation_speed: float = 0.0
    symbol: str = ""

    @property
    def is_hazard(self) -> bool:
        return self.kind == EntityKind.BOMB

    def advance(self):
        """下落一帧；旋转仅用于显示"""
        self.y += self.speed
        self.rotation = (self.rotation + self.rotation_speed) % 360

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'kind': self.kind.value,
            'x': self.x,
            'y': self.y,
            'speed': self.speed,
            'size': self.size,
            'rotation': self.rotation,
            'symbol': self.symbol
        }


@dataclass
class SwipeEffect:
    """挥动接住水果时产生的特效，不影响计分"""
    x: float
    y: float
    created_ms: float
    lifetime_ms: float = 2000
    label: str = "+3 SWIPE!"
    source_symbol: str = ""

    def age(self, now_ms: float) -> float:
        """特效已存在的时长"""
        return now_ms - self.created_ms

    def is_expired(self, now_ms: float) -> bool:
        """
        检查特效是否已过期

        Args:
            now_ms: 当前时间戳

        Returns:
            bool: 存在时长达到生命周期即过期
        """
        return self.age(now_ms) >= self.lifetime_ms

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'x': self.x,
            'y': self.y,
            'created_ms': self.created_ms,
            'lifetime_ms': self.lifetime_ms,
            'label': self.label,
            'source_symbol': self.source_symbol
        }
