"""
游戏状态机模块
Game State Machine Module

NOT_STARTED -> ACTIVE -> WON / LOST，结束后可重新开始。
"""
from .game_state import GameState
from .game_state_machine import GameStateMachine

__all__ = ['GameState', 'GameStateMachine']
