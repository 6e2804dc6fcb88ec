"""
应用程序主类
Application Main Class
"""
from pathlib import Path
from typing import Optional, Any, Dict
import yaml
from flask import Flask
from .game import GameController, GameSnapshot, DetectionFrame, GameState
from .leaderboard import LeaderboardStore, ScoreSubmitter, HttpScoreClient
from .storage import StorageBase, StorageConfigManager
from .server import create_app
from .utils.logger import setup_logger, setup_logger_from_config
from .utils.config_loader import ConfigLoader, DEFAULT_CONFIG_PATH
from .utils.error_handler import global_error_handler
from .utils.exceptions import ConfigurationException, GameException

logger = setup_logger("FruitCatch.App")


class Application:
    """应用程序主类：组装存储、排行榜、游戏控制器和HTTP接口"""

    def __init__(self, config_path: Optional[str] = None):
        """
        初始化应用程序

        Args:
            config_path: 配置文件路径，None时使用 config/config.yaml
        """
        self.config_path = str(config_path or DEFAULT_CONFIG_PATH)
        self.config: Dict[str, Any] = {}

        self.storage: Optional[StorageBase] = None
        self.store: Optional[LeaderboardStore] = None
        self.game_controller: Optional[GameController] = None
        self.web_app: Optional[Flask] = None

        self.is_initialized = False

    def initialize(self) -> bool:
        """
        初始化所有组件

        Returns:
            bool: 初始化是否成功
        """
        logger.info("=" * 50)
        logger.info("开始初始化应用程序")
        logger.info("=" * 50)

        if not self._load_config():
            return False

        try:
            self._initialize_leaderboard()
            self._initialize_game_controller()
        except ConfigurationException as e:
            global_error_handler.handle(e, "初始化")
            return False

        self.web_app = create_app(self.store)
        self.is_initialized = True

        logger.info("应用程序初始化成功")
        return True

    def _load_config(self) -> bool:
        """加载配置文件"""
        try:
            self.config = ConfigLoader.load_config(self.config_path)
        except FileNotFoundError:
            logger.error(f"配置文件不存在: {self.config_path}")
            return False
        except yaml.YAMLError as e:
            global_error_handler.handle(ConfigurationException(str(e)), "加载配置")
            return False

        logging_config = ConfigLoader.get_logging_config(self.config)
        if logging_config:
            setup_logger_from_config(logging_config)
        return True

    def _initialize_leaderboard(self):
        """初始化存储和排行榜"""
        leaderboard_config = ConfigLoader.get_leaderboard_config(self.config)
        manager = StorageConfigManager(leaderboard_config)

        self.storage = manager.create_storage()
        self.store = LeaderboardStore(
            storage=self.storage,
            policy=manager.get_policy(),
            limit=leaderboard_config.get('limit', 10)
        )
        logger.info(f"✓ 排行榜初始化成功，策略: {self.store.policy}")

    def _initialize_game_controller(self):
        """初始化游戏控制器"""
        leaderboard_config = ConfigLoader.get_leaderboard_config(self.config)
        remote_url = leaderboard_config.get('remote_url')

        if remote_url:
            client = HttpScoreClient(remote_url, timeout=leaderboard_config.get('timeout', 5.0))
            submitter = ScoreSubmitter(client.submit)
            logger.info(f"成绩将提交到远程排行榜: {remote_url}")
        else:
            submitter = ScoreSubmitter(self.store.submit)

        game_config = ConfigLoader.get_game_config(self.config)
        self.game_controller = GameController.from_config(game_config, submitter=submitter)
        logger.info("✓ 游戏控制器初始化成功")

    def serve(self, host: Optional[str] = None, port: Optional[int] = None):
        """
        启动排行榜HTTP服务（阻塞）

        Args:
            host: 监听地址，None时使用配置
            port: 监听端口，None时使用配置
        """
        if not self.is_initialized:
            raise GameException("应用程序未初始化，无法启动服务")

        server_config = ConfigLoader.get_server_config(self.config)
        host = host or server_config.get('host', '127.0.0.1')
        port = port or server_config.get('port', 8787)

        logger.info(f"排行榜服务启动: http://{host}:{port}")
        try:
            self.web_app.run(host=host, port=port, debug=server_config.get('debug', False))
        finally:
            self.cleanup()

    def replay(self, replay_path: str) -> GameSnapshot:
        """
        回放录制的检测数据

        Args:
            replay_path: 回放文件（YAML或JSON），包含 username 和 frames

        Returns:
            GameSnapshot: 最后一帧的游戏快照
        """
        if not self.is_initialized:
            raise GameException("应用程序未初始化，无法回放")

        with open(replay_path, 'r', encoding='utf-8') as f:
            recording = yaml.safe_load(f) or {}

        frames = [DetectionFrame.from_dict(frame) for frame in recording.get('frames') or []]
        if not frames:
            raise GameException(f"回放文件中没有检测帧: {replay_path}")

        controller = self.game_controller
        username = recording.get('username', 'replay')
        if not controller.start(username, frames[0].timestamp_ms):
            raise GameException(f"无法开始回放，玩家名无效: {username!r}",
                                game_state=str(controller.get_current_state()))

        logger.info(f"开始回放: {Path(replay_path).name}，共 {len(frames)} 帧")
        snapshot = controller.snapshot()
        for frame in frames:
            snapshot = controller.update(frame)
            for collision in snapshot.collisions:
                logger.info(f"[{frame.timestamp_ms:.0f}ms] {collision.outcome} "
                            f"{collision.entity.symbol} 分数={snapshot.score} 生命={snapshot.health}")
            if snapshot.state != GameState.ACTIVE:
                break

        if controller.submitter is not None:
            controller.submitter.wait(timeout=5.0)
            snapshot = controller.snapshot()

        logger.info(f"回放结束: 状态={snapshot.state}, 分数={snapshot.score}, "
                    f"生命={snapshot.health}, 用时={snapshot.elapsed_seconds}s, "
                    f"排行榜={snapshot.leaderboard_status}")
        return snapshot

    def cleanup(self):
        """清理资源"""
        logger.info("开始清理资源...")
        if self.storage is not None and self.storage.is_connected():
            self.storage.disconnect()
            logger.info("✓ 存储已断开")
        logger.info("资源清理完成")
