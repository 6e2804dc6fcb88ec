"""
手部检测输入
Hand Detection Input

检测器（摄像头 + 手部关键点模型）每个检测周期输出的归一化结果。
"""
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from .hand_state import Handedness

# MediaPipe 手部21关键点中使用的索引
WRIST = 0
INDEX_FINGER_TIP = 8
MIDDLE_FINGER_MCP = 9  # 掌心位置

Point = Tuple[float, float]


def _point(landmark) -> Point:
    """兼容 (x, y) 元组和带 x/y 属性的关键点对象"""
    if hasattr(landmark, 'x') and hasattr(landmark, 'y'):
        return float(landmark.x), float(landmark.y)
    return float(landmark[0]), float(landmark[1])


@dataclass
class HandDetection:
    """单只手的归一化检测结果，坐标范围 [0, 1]"""
    index: int
    x: float
    y: float
    handedness: Handedness = Handedness.UNKNOWN
    wrist: Optional[Point] = None
    index_tip: Optional[Point] = None

    @property
    def track_id(self) -> str:
        """跟踪ID：左右手 + 检测序号"""
        return f"{self.handedness.value}_{self.index}"

    def mirrored(self) -> "HandDetection":
        """
        返回左右翻转后的检测结果

        Returns:
            HandDetection: x 坐标取 1-x，左右手标签互换
        """
        def flip(point: Optional[Point]) -> Optional[Point]:
            if point is None:
                return None
            return 1.0 - point[0], point[1]

        return HandDetection(
            index=self.index,
            x=1.0 - self.x,
            y=self.y,
            handedness=self.handedness.mirrored(),
            wrist=flip(self.wrist),
            index_tip=flip(self.index_tip)
        )

    @classmethod
    def from_landmarks(cls, landmarks: Sequence, index: int,
                       handedness=None) -> "HandDetection":
        """
        从21个手部关键点创建检测结果

        Args:
            landmarks: 关键点序列（MediaPipe 顺序）
            index: 本帧中的手部序号
            handedness: 检测器给出的左右手标签

        Returns:
            HandDetection: 以掌心为位置，手腕和食指尖为尺寸参考点
        """
        if len(landmarks) <= max(WRIST, INDEX_FINGER_TIP, MIDDLE_FINGER_MCP):
            raise ValueError(f"关键点数量不足: {len(landmarks)}")

        palm_x, palm_y = _point(landmarks[MIDDLE_FINGER_MCP])
        return cls(
            index=index,
            x=palm_x,
            y=palm_y,
            handedness=Handedness.from_string(handedness),
            wrist=_point(landmarks[WRIST]),
            index_tip=_point(landmarks[INDEX_FINGER_TIP])
        )

    @classmethod
    def from_dict(cls, data: dict, index: int = 0) -> "HandDetection":
        """从字典创建（用于回放录制的检测数据）"""
        if 'landmarks' in data:
            return cls.from_landmarks(data['landmarks'], data.get('index', index),
                                      data.get('handedness'))

        def optional_point(key: str) -> Optional[Point]:
            value = data.get(key)
            return _point(value) if value is not None else None

        return cls(
            index=int(data.get('index', index)),
            x=float(data['x']),
            y=float(data['y']),
            handedness=Handedness.from_string(data.get('handedness')),
            wrist=optional_point('wrist'),
            index_tip=optional_point('index_tip')
        )


@dataclass
class DetectionFrame:
    """一个检测周期的全部结果"""
    timestamp_ms: float
    detections: List[HandDetection] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "DetectionFrame":
        """
        从字典创建检测帧

        Args:
            data: {'timestamp_ms': ..., 'hands': [...]}

        Returns:
            DetectionFrame: 检测帧
        """
        hands = data.get('hands') or []
        return cls(
            timestamp_ms=float(data['timestamp_ms']),
            detections=[HandDetection.from_dict(hand, i) for i, hand in enumerate(hands)]
        )
