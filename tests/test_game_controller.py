"""
游戏控制器测试
Game Controller Tests
"""
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fruitcatch.game import (
    GameController, GameState, SubmitMode, MotionTracker, EntitySpawner, CollisionResolver,
    Entity, EntityKind, HandDetection, DetectionFrame, CollisionOutcome
)
from fruitcatch.leaderboard import ScoreSubmitter, SubmissionStatus, SubmitOutcome
from fruitcatch.utils.exceptions import StorageUnavailable, ConfigurationException


class RecordingTarget:
    """记录提交调用的测试目标"""

    def __init__(self, error=None):
        self.entries = []
        self.error = error

    def __call__(self, entry):
        self.entries.append(entry)
        if self.error is not None:
            raise self.error
        return SubmitOutcome.INSERTED


def make_controller(target=None, **kwargs) -> GameController:
    submitter = ScoreSubmitter(target, background=False) if target is not None else None
    return GameController(
        tracker=MotionTracker(width=1000, height=1000, mirror=False),
        spawner=EntitySpawner(width=1000, fruit_probability=0.0, bomb_probability=0.0),
        resolver=CollisionResolver(height=1000),
        submitter=submitter,
        **kwargs
    )


def frame(t, x=0.5, y=0.5):
    """手在 (x, y) 的检测帧，像素坐标为 (x*1000, y*1000)"""
    return DetectionFrame(timestamp_ms=t, detections=[HandDetection(index=0, x=x, y=y)])


def place(controller, kind=EntityKind.FRUIT, x=500.0, y=500.0, count=1):
    for _ in range(count):
        controller.entities.append(Entity(kind=kind, x=x, y=y, speed=0.0, size=40.0))


def test_start_requires_valid_username():
    """测试玩家名校验"""
    controller = make_controller()
    assert not controller.start("", 0)
    assert not controller.start(" a ", 0)
    assert not controller.start(None, 0)
    assert controller.get_current_state() == GameState.NOT_STARTED

    assert controller.start("ab", 0)
    assert controller.get_current_state() == GameState.ACTIVE
    assert controller.session.username == "ab"


def test_cannot_start_while_active():
    """测试进行中不能重新开始"""
    controller = make_controller()
    assert controller.start("player", 0)
    assert not controller.start("other", 10)
    assert controller.session.username == "player"


def test_update_ignored_when_not_active():
    """测试未开始时更新不改变状态"""
    controller = make_controller()
    place(controller)
    snapshot = controller.update(frame(0))
    assert snapshot.state == GameState.NOT_STARTED
    assert snapshot.score == 0
    assert snapshot.collisions == []


def test_plain_catch_scores_one():
    """测试静止接住水果加1分"""
    controller = make_controller()
    controller.start("player", 0)
    place(controller)

    snapshot = controller.update(frame(16))
    assert snapshot.score == 1
    assert snapshot.health == 3
    assert [c.outcome for c in snapshot.collisions] == [CollisionOutcome.PLAIN_CATCH]
    assert snapshot.entities == []


def test_swipe_catch_scores_three_and_creates_effect():
    """测试挥动接住水果加3分并生成特效，特效到期后移除"""
    controller = make_controller()
    controller.start("player", 0)
    controller.update(frame(1000, x=0.10))

    place(controller, x=150.0)
    snapshot = controller.update(frame(1033, x=0.15))
    assert snapshot.score == 3
    assert snapshot.collisions[0].outcome == CollisionOutcome.SWIPE_CATCH
    assert len(snapshot.effects) == 1

    snapshot = controller.update(DetectionFrame(timestamp_ms=3032))
    assert len(snapshot.effects) == 1
    snapshot = controller.update(DetectionFrame(timestamp_ms=3033))
    assert snapshot.effects == []


def test_three_hazards_lose_game():
    """测试碰到三次炸弹后失败，生命值为0"""
    target = RecordingTarget()
    controller = make_controller(target)
    controller.start("player", 0)

    for t in (100, 200):
        place(controller, kind=EntityKind.BOMB)
        snapshot = controller.update(frame(t))
        assert snapshot.state == GameState.ACTIVE
    assert snapshot.health == 1

    place(controller, kind=EntityKind.BOMB)
    snapshot = controller.update(frame(300))
    assert snapshot.state == GameState.LOST
    assert snapshot.health == 0
    assert snapshot.score == 0
    # 默认仅获胜时提交
    assert target.entries == []
    assert snapshot.leaderboard_status == SubmissionStatus.IDLE


def test_hazard_hits_end_to_end():
    """测试玩家 ab 开局后一次炸弹扣1血，再三次炸弹后失败且生命值为0"""
    controller = make_controller()
    assert controller.start("ab", 0)
    snapshot = controller.snapshot()
    assert (snapshot.state, snapshot.health, snapshot.score) == (GameState.ACTIVE, 3, 0)

    place(controller, kind=EntityKind.BOMB)
    snapshot = controller.update(frame(100))
    assert (snapshot.health, snapshot.score) == (2, 0)

    for t in (200, 300, 400):
        place(controller, kind=EntityKind.BOMB)
        snapshot = controller.update(frame(t))

    assert snapshot.state == GameState.LOST
    assert snapshot.health == 0
    assert snapshot.score == 0


def test_health_never_negative():
    """测试同一帧多个炸弹时生命值不为负，且在第一次结束后停止结算"""
    controller = make_controller()
    controller.start("player", 0)
    place(controller, kind=EntityKind.BOMB, count=5)

    snapshot = controller.update(frame(100))
    assert snapshot.state == GameState.LOST
    assert snapshot.health == 0
    assert len(snapshot.collisions) == 3


def test_win_submits_once():
    """测试达到目标分数获胜，且只提交一次成绩"""
    target = RecordingTarget()
    controller = make_controller(target, win_score=2)
    controller.start("  winner  ", 1000)

    place(controller, count=3)
    snapshot = controller.update(frame(3500))
    assert snapshot.state == GameState.WON
    assert snapshot.score == 2
    assert len(snapshot.collisions) == 2
    assert snapshot.elapsed_seconds == 2
    assert snapshot.leaderboard_status == SubmissionStatus.CONFIRMED

    place(controller)
    controller.update(frame(3600))
    controller.update(frame(3700))

    assert len(target.entries) == 1
    entry = target.entries[0]
    assert (entry.username, entry.score, entry.time_seconds) == ("winner", 2, 2)


def test_submit_on_any_end():
    """测试配置为任意结束都提交时失败也提交"""
    target = RecordingTarget()
    controller = make_controller(target, submit_on="any")
    assert controller.submit_on == SubmitMode.ANY_END
    controller.start("player", 0)
    place(controller, kind=EntityKind.BOMB, count=3)
    controller.update(frame(100))

    assert controller.get_current_state() == GameState.LOST
    assert len(target.entries) == 1
    assert target.entries[0].score == 0


def test_failed_submission_is_unconfirmed():
    """测试存储不可用时提交状态为未确认，游戏结果不受影响"""
    target = RecordingTarget(error=StorageUnavailable("down", backend="test"))
    controller = make_controller(target, win_score=1)
    controller.start("player", 0)
    place(controller)

    snapshot = controller.update(frame(100))
    assert snapshot.state == GameState.WON
    assert snapshot.leaderboard_status == SubmissionStatus.UNCONFIRMED


def test_timer_sampling_and_freeze():
    """测试计时按间隔采样，结束后冻结"""
    controller = make_controller(win_score=1)
    controller.start("player", 1000)

    controller.update(frame(1050, x=0.0, y=0.0))
    assert controller.session.duration_ms == 0
    controller.update(frame(2100, x=0.0, y=0.0))
    assert controller.snapshot().elapsed_seconds == 1

    place(controller)
    controller.update(frame(3999))
    assert controller.get_current_state() == GameState.WON
    assert controller.session.duration_ms == 2999

    controller.update(frame(9000))
    assert controller.snapshot().elapsed_seconds == 2


def test_restart_after_game_over_and_reset():
    """测试结束后可重新开始，重置回到未开始状态"""
    target = RecordingTarget()
    controller = make_controller(target, win_score=1)
    controller.start("player", 0)
    place(controller)
    controller.update(frame(100))
    assert controller.get_current_state() == GameState.WON

    assert controller.start("player", 200)
    assert controller.get_current_state() == GameState.ACTIVE
    assert controller.session.score == 0
    assert controller.snapshot().leaderboard_status == SubmissionStatus.IDLE

    place(controller)
    controller.reset()
    assert controller.get_current_state() == GameState.NOT_STARTED
    assert controller.entities == []
    assert controller.session.score == 0
    assert controller.session.health == 3


def test_spawner_feeds_entities():
    """测试进行中每帧从生成器获得新物体"""
    controller = make_controller()
    controller.spawner = EntitySpawner(width=1000, fruit_probability=1.0,
                                       bomb_probability=0.0, seed=1)
    controller.start("player", 0)
    controller.update(DetectionFrame(timestamp_ms=16))
    controller.update(DetectionFrame(timestamp_ms=32))
    assert controller.count_entities(EntityKind.FRUIT) == 2
    assert controller.count_entities(EntityKind.BOMB) == 0


def test_snapshot_to_dict():
    """测试快照序列化"""
    controller = make_controller()
    controller.start("player", 0)
    place(controller)
    data = controller.update(frame(16)).to_dict()
    assert data['state'] == 'ACTIVE'
    assert data['score'] == 1
    assert data['collisions'][0]['outcome'] == 'plain_catch'
    assert data['leaderboard_status'] == 'idle'


def test_from_config():
    """测试从配置创建控制器"""
    controller = GameController.from_config({
        'width': 640,
        'height': 480,
        'mirror': False,
        'win_score': 10,
        'submit_on': 'any',
        'spawner': {'fruit_probability': 0.05, 'seed': 1},
        'collision': {'swipe_leniency': 1.5},
        'effects': {'lifetime_ms': 500}
    })
    assert controller.win_score == 10
    assert controller.tracker.width == 640
    assert controller.spawner.fruit_probability == 0.05
    assert controller.resolver.swipe_leniency == 1.5
    assert controller.resolver.effect_lifetime_ms == 500
    assert controller.submit_on == SubmitMode.ANY_END


def test_from_config_rejects_bad_values():
    """测试错误配置抛出配置异常"""
    with pytest.raises(ConfigurationException):
        GameController.from_config({'spawner': {'unknown_option': 1}})
    with pytest.raises(ConfigurationException):
        GameController.from_config({'submit_on': 'sometimes'})


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
