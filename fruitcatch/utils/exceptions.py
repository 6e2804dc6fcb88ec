"""
自定义异常类
Custom Exception Classes
"""
from typing import Optional


class ValidationError(Exception):
    """输入数据校验异常（如成绩提交字段缺失或类型错误）"""
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.message = message


class StorageUnavailable(Exception):
    """排行榜存储不可用异常"""
    def __init__(self, message: str, backend: Optional[str] = None):
        super().__init__(message)
        self.backend = backend
        self.message = message


class GameException(Exception):
    """游戏逻辑异常"""
    def __init__(self, message: str, game_state: Optional[str] = None):
        super().__init__(message)
        self.game_state = game_state
        self.message = message


class ConfigurationException(Exception):
    """配置异常"""
    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
        self.message = message
