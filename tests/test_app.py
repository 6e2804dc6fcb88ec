"""
应用程序集成测试
Application Integration Tests
"""
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
import yaml
from fruitcatch.app import Application
from fruitcatch.game import GameController, GameState
from fruitcatch.leaderboard import SubmissionStatus
from fruitcatch.storage import MemoryStorage
from fruitcatch.utils.config_loader import ConfigLoader, DEFAULT_CONFIG_PATH
from fruitcatch.utils.exceptions import GameException


def write_config(tmp_path, **game_overrides) -> str:
    """写入一个小区域、每帧必出水果的测试配置"""
    game = {
        'width': 10,
        'height': 10,
        'mirror': False,
        'win_score': 3,
        'spawner': {
            'fruit_probability': 1.0,
            'bomb_probability': 0.0,
            'spawn_y': 0,
            'fruit_speed_range': [0.0, 0.0],
            'fruit_size_range': [40.0, 40.0],
            'seed': 1
        }
    }
    game.update(game_overrides)
    config = {
        'game': game,
        'leaderboard': {'policy': 'best', 'storage': {'type': 'memory'}},
        'logging': {'level': 'WARNING', 'file': None}
    }
    path = tmp_path / "config.yaml"
    assert ConfigLoader.save_config(config, str(path))
    return str(path)


def write_replay(tmp_path, username="replayer", frames=5) -> str:
    recording = {
        'username': username,
        'frames': [
            {'timestamp_ms': 1000 + i * 33, 'hands': [{'x': 0.5, 'y': 0.0, 'handedness': 'Left'}]}
            for i in range(frames)
        ]
    }
    path = tmp_path / "replay.yaml"
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(recording, f, allow_unicode=True)
    return str(path)


def test_bundled_config_builds_controller():
    """测试默认配置文件可以创建游戏控制器"""
    config = ConfigLoader.load_config(str(DEFAULT_CONFIG_PATH))
    controller = GameController.from_config(ConfigLoader.get_game_config(config))
    assert controller.win_score == 50
    assert controller.tracker.width == 1280
    assert controller.spawner.fruit_probability == 0.025
    assert ConfigLoader.get_leaderboard_config(config)['policy'] == 'best'
    assert ConfigLoader.get_server_config(config)['port'] == 8787


def test_initialize_with_memory_storage(tmp_path):
    """测试使用内存存储初始化应用"""
    app = Application(config_path=write_config(tmp_path))
    assert app.initialize()
    assert isinstance(app.storage, MemoryStorage)
    assert app.web_app is not None

    response = app.web_app.test_client().get('/api/leaderboard')
    assert response.status_code == 200
    assert response.get_json() == []
    app.cleanup()
    assert not app.storage.is_connected()


def test_initialize_missing_config(tmp_path):
    """测试配置文件不存在时初始化失败"""
    app = Application(config_path=str(tmp_path / "missing.yaml"))
    assert not app.initialize()


def test_initialize_bad_storage_type(tmp_path):
    """测试未知存储类型时初始化失败"""
    path = tmp_path / "bad.yaml"
    ConfigLoader.save_config({'leaderboard': {'storage': {'type': 'redis'}}}, str(path))
    assert not Application(config_path=str(path)).initialize()


def test_replay_wins_and_records_score(tmp_path):
    """测试回放录制数据直到获胜，成绩写入排行榜"""
    app = Application(config_path=write_config(tmp_path))
    assert app.initialize()

    snapshot = app.replay(write_replay(tmp_path))
    assert snapshot.state == GameState.WON
    assert snapshot.score == 3
    assert snapshot.leaderboard_status == SubmissionStatus.CONFIRMED

    rows = app.store.top_n()
    assert [(e.username, e.score) for e in rows] == [("replayer", 3)]
    app.cleanup()


def test_replay_requires_frames_and_username(tmp_path):
    """测试回放文件无检测帧或玩家名无效时报错"""
    app = Application(config_path=write_config(tmp_path))
    assert app.initialize()

    with pytest.raises(GameException):
        app.replay(write_replay(tmp_path, frames=0))

    with pytest.raises(GameException):
        app.replay(write_replay(tmp_path, username="x"))
    app.cleanup()


def test_replay_before_initialize():
    """测试未初始化时不能回放"""
    with pytest.raises(GameException):
        Application().replay("unused.yaml")


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
