"""
游戏逻辑模块
Game Logic Module
"""
from .game_controller import GameController, GameSnapshot, SubmitMode
from .game_logic import (
    Entity, EntityKind, SwipeEffect, EntitySpawner, CollisionResolver, CollisionOutcome,
    Collision, ResolveResult, Session, SessionOutcome, GameRules
)
from .state_machine import GameState, GameStateMachine
from .motion_tracking import (
    MotionGesture, Handedness, HandSample, HandState, Velocity, HandDetection,
    DetectionFrame, MotionTracker
)

__all__ = [
    'GameController',
    'GameSnapshot',
    'SubmitMode',
    'Entity',
    'EntityKind',
    'SwipeEffect',
    'EntitySpawner',
    'CollisionResolver',
    'CollisionOutcome',
    'Collision',
    'ResolveResult',
    'Session',
    'SessionOutcome',
    'GameRules',
    'GameState',
    'GameStateMachine',
    'MotionGesture',
    'Handedness',
    'HandSample',
    'HandState',
    'Velocity',
    'HandDetection',
    'DetectionFrame',
    'MotionTracker'
]
