"""
手部运动跟踪器
Hand Motion Tracker

根据每只手最近的位置采样估计速度，并将动作分为静止（STILL）或挥动（SWIPE）。
"""
from typing import Dict, List, Optional, Sequence
import numpy as np
from .hand_state import HandSample, HandState, Velocity, MotionGesture
from .hand_detection import HandDetection
from ...utils.logger import setup_logger

logger = setup_logger("FruitCatch.MotionTracker")


class MotionTracker:
    """手部运动跟踪器类"""

    def __init__(self,
                 width: float = 1280,
                 height: float = 720,
                 mirror: bool = True,
                 history_window_ms: float = 300,
                 lookback_ms: float = 150,
                 min_interval_ms: float = 16,
                 swipe_speed_threshold: float = 600.0,
                 min_catch_radius: float = 30.0,
                 catch_radius_scale: float = 0.4):
        """
        初始化运动跟踪器

        Args:
            width: 游戏区域宽度（像素）
            height: 游戏区域高度（像素）
            mirror: 是否左右镜像输入（自拍摄像头）
            history_window_ms: 历史采样保留时长
            lookback_ms: 速度估计回看窗口
            min_interval_ms: 速度估计的最小时间间隔，防止采样过密时除数过小
            swipe_speed_threshold: 挥动判定速度阈值（严格大于）
            min_catch_radius: 最小接取半径
            catch_radius_scale: 手部尺寸到接取半径的比例
        """
        self.width = width
        self.height = height
        self.mirror = mirror
        self.history_window_ms = history_window_ms
        self.lookback_ms = lookback_ms
        self.min_interval_ms = min_interval_ms
        self.swipe_speed_threshold = swipe_speed_threshold
        self.min_catch_radius = min_catch_radius
        self.catch_radius_scale = catch_radius_scale

        self.history: Dict[str, List[HandSample]] = {}

        logger.info(f"运动跟踪器初始化，区域: {width}x{height}, 挥动阈值: {swipe_speed_threshold}")

    def classify_speed(self, magnitude: float) -> MotionGesture:
        """
        按速度大小分类动作（无滞回，阈值处判为静止）

        Args:
            magnitude: 速度大小

        Returns:
            MotionGesture: 动作分类
        """
        if magnitude > self.swipe_speed_threshold:
            return MotionGesture.SWIPE
        return MotionGesture.STILL

    def estimate_velocity(self, history: Sequence[HandSample], now_ms: float) -> Velocity:
        """
        用回看窗口内最近的两个采样估计速度

        Args:
            history: 同一跟踪ID的采样序列
            now_ms: 当前时间戳

        Returns:
            Velocity: 速度，采样不足两个时为零
        """
        recent = sorted(
            (s for s in history if now_ms - s.timestamp_ms < self.lookback_ms),
            key=lambda s: s.timestamp_ms,
            reverse=True
        )
        if len(recent) < 2:
            return Velocity()

        current, previous = recent[0], recent[1]
        elapsed_ms = max(self.min_interval_ms, current.timestamp_ms - previous.timestamp_ms)
        vx = (current.x - previous.x) * 1000.0 / elapsed_ms
        vy = (current.y - previous.y) * 1000.0 / elapsed_ms
        return Velocity(x=vx, y=vy, magnitude=float(np.hypot(vx, vy)))

    def classify(self, history: Sequence[HandSample], now_ms: float,
                 catch_radius: Optional[float] = None, handedness=None) -> HandState:
        """
        根据采样历史计算手部状态

        Args:
            history: 同一跟踪ID的采样序列（最后一个为当前位置）
            now_ms: 当前时间戳
            catch_radius: 接取半径，None时使用最小半径
            handedness: 左右手

        Returns:
            HandState: 手部状态
        """
        if not history:
            raise ValueError("采样历史为空")

        latest = max(history, key=lambda s: s.timestamp_ms)
        velocity = self.estimate_velocity(history, now_ms)
        state = HandState(
            track_id=latest.track_id,
            x=latest.x,
            y=latest.y,
            catch_radius=self.min_catch_radius if catch_radius is None else catch_radius,
            velocity=velocity,
            gesture=self.classify_speed(velocity.magnitude)
        )
        if handedness is not None:
            state.handedness = handedness
        return state

    def catch_radius_for(self, detection: HandDetection) -> float:
        """
        由手腕到食指尖的距离计算接取半径

        Args:
            detection: 已镜像处理的归一化检测结果

        Returns:
            float: 接取半径（不小于最小半径）
        """
        if detection.wrist is None or detection.index_tip is None:
            return self.min_catch_radius

        hand_size = float(np.hypot(
            (detection.index_tip[0] - detection.wrist[0]) * self.width,
            (detection.index_tip[1] - detection.wrist[1]) * self.height
        ))
        return max(self.min_catch_radius, hand_size * self.catch_radius_scale)

    def prune(self, now_ms: float):
        """
        移除超出历史窗口的采样，清空的跟踪ID一并移除

        Args:
            now_ms: 当前时间戳
        """
        for track_id in list(self.history):
            kept = [s for s in self.history[track_id]
                    if now_ms - s.timestamp_ms < self.history_window_ms]
            if kept:
                self.history[track_id] = kept
            else:
                del self.history[track_id]
                logger.debug(f"手部跟踪丢失: {track_id}")

    def track(self, detections: Sequence[HandDetection], now_ms: float) -> List[HandState]:
        """
        处理一帧检测结果，返回本帧的手部状态

        Args:
            detections: 归一化检测结果列表
            now_ms: 当前时间戳

        Returns:
            List[HandState]: 与检测顺序一致的手部状态列表
        """
        self.prune(now_ms)

        hands: List[HandState] = []
        for detection in detections:
            if self.mirror:
                detection = detection.mirrored()

            track_id = detection.track_id
            sample = HandSample(
                track_id=track_id,
                x=detection.x * self.width,
                y=detection.y * self.height,
                timestamp_ms=now_ms
            )
            track_history = self.history.setdefault(track_id, [])
            track_history.append(sample)

            hand = self.classify(
                track_history, now_ms,
                catch_radius=self.catch_radius_for(detection),
                handedness=detection.handedness
            )
            hands.append(hand)

        return hands

    def reset(self):
        """清空全部采样历史"""
        self.history.clear()
        logger.debug("手部采样历史已清空")

    @classmethod
    def from_config(cls, config: dict, width: float, height: float,
                    mirror: bool = True) -> "MotionTracker":
        """从配置字典创建跟踪器"""
        return cls(width=width, height=height, mirror=mirror, **(config or {}))
