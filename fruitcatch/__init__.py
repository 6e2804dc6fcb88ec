"""
手势接水果游戏核心
Hand Fruit Catch Core
"""
__version__ = "0.1.0"
