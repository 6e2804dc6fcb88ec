"""
存储配置管理模块
Storage Configuration Manager
"""
from typing import Dict, Any, Optional
from .factory.storage_factory import StorageFactory
from .base.storage_base import StorageBase
from ..leaderboard.leaderboard_entry import LeaderboardPolicy
from ..utils.exceptions import ConfigurationException
from ..utils.logger import setup_logger

logger = setup_logger("FruitCatch.StorageConfigManager")


class StorageConfigManager:
    """存储配置管理器，负责根据排行榜配置创建存储实例"""

    def __init__(self, leaderboard_config: Optional[Dict[str, Any]] = None):
        """
        初始化存储配置管理器

        Args:
            leaderboard_config: 排行榜配置段（包含 policy 和 storage 键）
        """
        self.config: Dict[str, Any] = dict(leaderboard_config or {})
        self._storage: Optional[StorageBase] = None

    def get_policy(self) -> LeaderboardPolicy:
        """获取排行榜策略，默认每人最佳成绩"""
        return LeaderboardPolicy.from_string(self.config.get('policy', 'best'))

    def create_storage(self) -> StorageBase:
        """
        根据配置创建并连接存储实例

        连接失败时仍返回实例，读写时由存储抛出 StorageUnavailable。

        Returns:
            StorageBase: 存储实例

        Raises:
            ConfigurationException: 存储类型未指定或未注册
        """
        storage_config = dict(self.config.get('storage') or {'type': 'memory'})

        storage_type = storage_config.pop('type', None)
        if not storage_type:
            raise ConfigurationException("存储配置中未指定类型", config_key="leaderboard.storage.type")
        if not StorageFactory.is_storage_registered(storage_type):
            raise ConfigurationException(f"未知的存储类型: {storage_type}",
                                         config_key="leaderboard.storage.type")

        if storage_type.lower() == 'sqlite':
            storage_config.setdefault(
                'unique_username', self.get_policy() == LeaderboardPolicy.BEST_PER_USER)

        self._storage = StorageFactory.create_storage(storage_type, storage_config)
        if not self._storage.connect():
            logger.error(f"存储连接失败，排行榜将以降级模式运行: {storage_type}")
        else:
            logger.info(f"成功创建存储实例: {storage_type}")
        return self._storage

    def get_storage(self) -> Optional[StorageBase]:
        """获取存储实例"""
        return self._storage
