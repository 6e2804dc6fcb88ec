"""
游戏逻辑模块
Game Logic Module
"""
from .entity import Entity, EntityKind, SwipeEffect
from .entity_spawner import EntitySpawner
from .collision_resolver import CollisionResolver, CollisionOutcome, Collision, ResolveResult
from .session import Session, SessionOutcome
from .game_rules import GameRules

__all__ = [
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
    'GameRules'
]
