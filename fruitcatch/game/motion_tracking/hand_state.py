"""
手部运动状态数据类型
Hand Motion State Types
"""
from enum import Enum
from dataclasses import dataclass, field


class MotionGesture(Enum):
    """手部动作分类枚举"""
    STILL = "still"    # 静止接住
    SWIPE = "swipe"    # 快速挥动

    def __str__(self):
        return self.value


class Handedness(Enum):
    """左右手枚举"""
    LEFT = "Left"
    RIGHT = "Right"
    UNKNOWN = "Hand"   # 检测器未给出左右手

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value) -> "Handedness":
        """
        从字符串创建左右手枚举

        Args:
            value: 左右手字符串（Left, Right），大小写不敏感

        Returns:
            Handedness: 左右手枚举值，无法识别返回UNKNOWN
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.UNKNOWN
        value_lower = str(value).lower()
        for handedness in cls:
            if handedness.value.lower() == value_lower:
                return handedness
        return cls.UNKNOWN

    def mirrored(self) -> "Handedness":
        """镜像后的左右手（自拍摄像头画面左右翻转）"""
        if self == Handedness.LEFT:
            return Handedness.RIGHT
        if self == Handedness.RIGHT:
            return Handedness.LEFT
        return self


@dataclass
class HandSample:
    """单次检测得到的手部位置采样（像素坐标）"""
    track_id: str
    x: float
    y: float
    timestamp_ms: float


@dataclass
class Velocity:
    """手部速度（单位/秒）"""
    x: float = 0.0
    y: float = 0.0
    magnitude: float = 0.0

    def to_dict(self) -> dict:
        """转换为字典"""
        return {'x': self.x, 'y': self.y, 'magnitude': self.magnitude}


@dataclass
class HandState:
    """每帧重新计算的手部状态"""
    track_id: str
    x: float
    y: float
    catch_radius: float
    velocity: Velocity = field(default_factory=Velocity)
    gesture: MotionGesture = MotionGesture.STILL
    handedness: Handedness = Handedness.UNKNOWN

    @property
    def is_swipe(self) -> bool:
        return self.gesture == MotionGesture.SWIPE

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'track_id': self.track_id,
            'x': self.x,
            'y': self.y,
            'catch_radius': self.catch_radius,
            'velocity': self.velocity.to_dict(),
            'gesture': self.gesture.value,
            'handedness': self.handedness.value
        }
