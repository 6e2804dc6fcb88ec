"""
游戏控制器
Game Controller - 整合所有游戏逻辑

每帧调用一次 update()：运动跟踪 -> 物体生成 -> 碰撞判定 -> 计分与状态转换。
"""
from typing import List, Optional
from enum import Enum
from dataclasses import dataclass, field
from .state_machine import GameState, GameStateMachine
from .motion_tracking import MotionTracker, HandState, DetectionFrame
from .game_logic import (
    Entity, EntityKind, SwipeEffect, EntitySpawner, CollisionResolver, Collision,
    Session, SessionOutcome, GameRules
)
from ..leaderboard.leaderboard_entry import LeaderboardEntry
from ..leaderboard.score_submitter import ScoreSubmitter, SubmissionStatus
from ..utils.exceptions import ConfigurationException
from ..utils.logger import setup_logger

logger = setup_logger("FruitCatch.GameController")


class SubmitMode(Enum):
    """游戏结束时的成绩提交策略"""
    WIN_ONLY = "win"   # 仅获胜时提交
    ANY_END = "any"    # 获胜或失败都提交

    @classmethod
    def from_string(cls, value) -> "SubmitMode":
        if isinstance(value, cls):
            return value
        for mode in cls:
            if mode.value == str(value).lower():
                return mode
        raise ConfigurationException(f"未知的成绩提交策略: {value}", config_key="game.submit_on")


@dataclass
class GameSnapshot:
    """每帧输出给渲染层的游戏快照"""
    state: GameState
    score: int
    health: int
    elapsed_seconds: int
    hands: List[HandState] = field(default_factory=list)
    entities: List[Entity] = field(default_factory=list)
    effects: List[SwipeEffect] = field(default_factory=list)
    collisions: List[Collision] = field(default_factory=list)
    leaderboard_status: SubmissionStatus = SubmissionStatus.IDLE

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'state': self.state.name,
            'score': self.score,
            'health': self.health,
            'elapsed_seconds': self.elapsed_seconds,
            'hands': [hand.to_dict() for hand in self.hands],
            'entities': [entity.to_dict() for entity in self.entities],
            'effects': [effect.to_dict() for effect in self.effects],
            'collisions': [collision.to_dict() for collision in self.collisions],
            'leaderboard_status': self.leaderboard_status.value
        }


class GameController:
    """游戏控制器类，整合所有游戏组件"""

    def __init__(self,
                 tracker: MotionTracker,
                 spawner: EntitySpawner,
                 resolver: CollisionResolver,
                 submitter: Optional[ScoreSubmitter] = None,
                 win_score: int = 50,
                 initial_health: int = 3,
                 min_username_length: int = 2,
                 submit_on: SubmitMode = SubmitMode.WIN_ONLY,
                 timer_interval_ms: float = 100):
        """
        初始化游戏控制器

        Args:
            tracker: 手部运动跟踪器
            spawner: 物体生成器
            resolver: 碰撞判定
            submitter: 成绩提交器（可选，None时不提交）
            win_score: 获胜分数
            initial_health: 初始生命值
            min_username_length: 玩家名最小长度
            submit_on: 成绩提交策略
            timer_interval_ms: 计时显示的采样间隔
        """
        self.tracker = tracker
        self.spawner = spawner
        self.resolver = resolver
        self.submitter = submitter
        self.win_score = win_score
        self.initial_health = initial_health
        self.min_username_length = min_username_length
        self.submit_on = SubmitMode.from_string(submit_on)
        self.timer_interval_ms = timer_interval_ms

        self.session = Session(health=initial_health)
        self.hands: List[HandState] = []
        self.entities: List[Entity] = []
        self.effects: List[SwipeEffect] = []

        # 初始化状态机
        self.state_machine = GameStateMachine(initial_state=GameState.NOT_STARTED)
        self.state_machine.register_state_handler(GameState.WON, self._handle_game_over)
        self.state_machine.register_state_handler(GameState.LOST, self._handle_game_over)

        logger.info(f"游戏控制器初始化完成，获胜分数: {win_score}, 提交策略: {self.submit_on.value}")

    def start(self, username: str, now_ms: float) -> bool:
        """
        开始游戏

        Args:
            username: 玩家名（去除首尾空白后至少 min_username_length 个字符）
            now_ms: 当前时间戳

        Returns:
            bool: 是否成功开始
        """
        if not GameRules.is_valid_username(username, self.min_username_length):
            logger.warning(f"玩家名无效，无法开始游戏: {username!r}")
            return False

        if not self.state_machine.can_transition_to(GameState.ACTIVE):
            logger.warning(f"当前状态无法开始游戏: {self.state_machine.get_current_state()}")
            return False

        self._clear_round()
        self.session.begin(username.strip(), now_ms, self.initial_health)
        if self.submitter is not None:
            self.submitter.reset()

        self.state_machine.transition_to(GameState.ACTIVE)
        logger.info(f"游戏开始，玩家: {self.session.username}")
        return True

    def reset(self):
        """重置游戏，丢弃进行中的全部状态"""
        logger.info("重置游戏")
        self._clear_round()
        self.session = Session(health=self.initial_health)
        if self.submitter is not None:
            self.submitter.reset()
        self.state_machine.reset(GameState.NOT_STARTED)

    def _clear_round(self):
        self.tracker.reset()
        self.hands = []
        self.entities = []
        self.effects = []

    def update(self, frame: DetectionFrame) -> GameSnapshot:
        """
        执行一帧游戏逻辑

        Args:
            frame: 本帧检测结果（无手时 detections 为空）

        Returns:
            GameSnapshot: 本帧结束时的游戏快照
        """
        if not self.state_machine.is_in_state(GameState.ACTIVE):
            return self.snapshot()

        now_ms = frame.timestamp_ms

        self.hands = self.tracker.track(frame.detections, now_ms)

        self.entities.extend(self.spawner.tick(active=True))
        for entity in self.entities:
            entity.advance()

        result = self.resolver.resolve(self.hands, self.entities, now_ms)
        self.entities = result.unconsumed
        self.effects = [effect for effect in self.effects if not effect.is_expired(now_ms)]
        self.effects.extend(result.effects)

        applied: List[Collision] = []
        for collision in result.consumed:
            GameRules.apply(self.session, collision)
            applied.append(collision)

            outcome = GameRules.judge(self.session, self.win_score)
            if outcome is not None:
                self._finish(outcome, now_ms)
                break

        self.session.sample_timer(now_ms, self.timer_interval_ms)
        return self.snapshot(collisions=applied)

    def _finish(self, outcome: SessionOutcome, now_ms: float):
        self.session.finish(outcome, now_ms)
        target = GameState.WON if outcome == SessionOutcome.WON else GameState.LOST
        self.state_machine.transition_to(target)

    def _handle_game_over(self):
        """处理游戏结束状态"""
        session = self.session
        logger.info(f"游戏结束: {session.outcome}，分数: {session.score}, "
                    f"生命值: {session.health}, 用时: {session.elapsed_seconds}s")

        if not self._should_submit(session.outcome):
            logger.info("本局不提交成绩")
            return

        entry = LeaderboardEntry(
            username=session.username,
            score=session.score,
            time_seconds=session.elapsed_seconds
        )
        self.submitter.submit(entry)

    def _should_submit(self, outcome: Optional[SessionOutcome]) -> bool:
        if self.submitter is None or outcome is None:
            return False
        if self.submit_on == SubmitMode.ANY_END:
            return True
        return outcome == SessionOutcome.WON

    def snapshot(self, collisions: Optional[List[Collision]] = None) -> GameSnapshot:
        """
        获取当前游戏快照

        Args:
            collisions: 本帧发生的碰撞

        Returns:
            GameSnapshot: 游戏快照
        """
        status = self.submitter.status if self.submitter is not None else SubmissionStatus.IDLE
        return GameSnapshot(
            state=self.state_machine.get_current_state(),
            score=self.session.score,
            health=self.session.health,
            elapsed_seconds=self.session.elapsed_seconds,
            hands=list(self.hands),
            entities=list(self.entities),
            effects=list(self.effects),
            collisions=list(collisions or []),
            leaderboard_status=status
        )

    def get_current_state(self) -> GameState:
        """获取当前状态"""
        return self.state_machine.get_current_state()

    def count_entities(self, kind: EntityKind) -> int:
        """统计当前某类物体数量"""
        return sum(1 for entity in self.entities if entity.kind == kind)

    @classmethod
    def from_config(cls, game_config: dict,
                    submitter: Optional[ScoreSubmitter] = None) -> "GameController":
        """
        从游戏配置段创建控制器

        Args:
            game_config: 配置中的 game 段
            submitter: 成绩提交器

        Returns:
            GameController: 游戏控制器
        """
        config = dict(game_config or {})
        width = config.get('width', 1280)
        height = config.get('height', 720)

        effects_config = config.get('effects') or {}
        collision_config = dict(config.get('collision') or {})
        collision_config.setdefault('effect_lifetime_ms', effects_config.get('lifetime_ms', 2000))

        try:
            tracker = MotionTracker.from_config(config.get('motion'), width, height,
                                                mirror=config.get('mirror', True))
            spawner = EntitySpawner.from_config(config.get('spawner'), width)
            resolver = CollisionResolver.from_config(collision_config, height)
        except TypeError as e:
            raise ConfigurationException(f"游戏配置参数错误: {e}", config_key="game") from e

        return cls(
            tracker=tracker,
            spawner=spawner,
            resolver=resolver,
            submitter=submitter,
            win_score=config.get('win_score', 50),
            initial_health=config.get('initial_health', 3),
            min_username_length=config.get('min_username_length', 2),
            submit_on=config.get('submit_on', SubmitMode.WIN_ONLY.value),
            timer_interval_ms=config.get('timer_interval_ms', 100)
        )
