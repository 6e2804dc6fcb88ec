"""
手部运动跟踪模块
Hand Motion Tracking Module
"""
from .hand_state import MotionGesture, Handedness, HandSample, HandState, Velocity
from .hand_detection import HandDetection, DetectionFrame
from .motion_tracker import MotionTracker

__all__ = [
    'MotionGesture',
    'Handedness',
    'HandSample',
    'HandState',
    'Velocity',
    'HandDetection',
    'DetectionFrame',
    'MotionTracker'
]
