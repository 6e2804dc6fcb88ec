"""
下落物体生成器
Entity Spawner
"""
from typing import List, Optional, Sequence, Tuple
import numpy as np
from .entity import Entity, EntityKind
from ...utils.logger import setup_logger

logger = setup_logger("FruitCatch.EntitySpawner")

FRUIT_SYMBOLS = ['🍎', '🍊', '🍌', '🍇', '🥝', '🍓', '🍑', '🍒', '🥭', '🍍', '🍋', '🥥', '🥑', '🍈']
BOMB_SYMBOLS = ['💣', '🧨', '💥']


class EntitySpawner:
    """下落物体生成器类，每帧对水果和炸弹各做一次独立的伯努利试验"""

    def __init__(self,
                 width: float = 1280,
                 fruit_probability: float = 0.025,
                 bomb_probability: float = 0.008,
                 spawn_y: float = -60,
                 fruit_speed_range: Tuple[float, float] = (2.0, 4.0),
                 fruit_size_range: Tuple[float, float] = (35.0, 45.0),
                 fruit_rotation_speed: float = 10.0,
                 bomb_speed_range: Tuple[float, float] = (1.5, 3.0),
                 bomb_size_range: Tuple[float, float] = (40.0, 50.0),
                 bomb_rotation_speed: float = 15.0,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        初始化生成器

        Args:
            width: 游戏区域宽度，x 在 [0, width) 内均匀分布
            fruit_probability: 每帧生成水果的概率
            bomb_probability: 每帧生成炸弹的概率
            spawn_y: 生成位置的 y 坐标（可见区域上方）
            fruit_speed_range: 水果下落速度范围
            fruit_size_range: 水果尺寸范围
            fruit_rotation_speed: 水果旋转速度范围宽度（以0为中心）
            bomb_speed_range: 炸弹下落速度范围
            bomb_size_range: 炸弹尺寸范围
            bomb_rotation_speed: 炸弹旋转速度范围宽度（以0为中心）
            seed: 随机种子（可选）
            rng: 外部随机数生成器（优先于seed）
        """
        if not 0.0 <= fruit_probability <= 1.0 or not 0.0 <= bomb_probability <= 1.0:
            raise ValueError("生成概率必须在 [0, 1] 范围内")

        self.width = width
        self.fruit_probability = fruit_probability
        self.bomb_probability = bomb_probability
        self.spawn_y = spawn_y
        self.fruit_speed_range = tuple(fruit_speed_range)
        self.fruit_size_range = tuple(fruit_size_range)
        self.fruit_rotation_speed = fruit_rotation_speed
        self.bomb_speed_range = tuple(bomb_speed_range)
        self.bomb_size_range = tuple(bomb_size_range)
        self.bomb_rotation_speed = bomb_rotation_speed
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        logger.info(f"物体生成器初始化，水果概率: {fruit_probability}, 炸弹概率: {bomb_probability}")

    def _uniform(self, bounds: Sequence[float]) -> float:
        return float(self.rng.uniform(bounds[0], bounds[1]))

    def _create(self, kind: EntityKind) -> Entity:
        if kind == EntityKind.FRUIT:
            speed_range, size_range = self.fruit_speed_range, self.fruit_size_range
            spin, symbols = self.fruit_rotation_speed, FRUIT_SYMBOLS
        else:
            speed_range, size_range = self.bomb_speed_range, self.bomb_size_range
            spin, symbols = self.bomb_rotation_speed, BOMB_SYMBOLS

        return Entity(
            kind=kind,
            x=float(self.rng.uniform(0, self.width)),
            y=self.spawn_y,
            speed=self._uniform(speed_range),
            size=self._uniform(size_range),
            rotation=float(self.rng.uniform(0, 360)),
            rotation_speed=float(self.rng.uniform(-0.5, 0.5) * spin),
            symbol=symbols[int(self.rng.integers(len(symbols)))]
        )

    def tick(self, active: bool = True) -> List[Entity]:
        """
        执行一帧生成

        Args:
            active: 游戏是否进行中，非进行中不生成

        Returns:
            List[Entity]: 本帧新生成的物体（0到2个）
        """
        if not active:
            return []

        spawned: List[Entity] = []
        if self.rng.random() < self.fruit_probability:
            spawned.append(self._create(EntityKind.FRUIT))
        if self.rng.random() < self.bomb_probability:
            spawned.append(self._create(EntityKind.BOMB))

        for entity in spawned:
            logger.debug(f"生成{entity.kind}: {entity.symbol} x={entity.x:.1f}")
        return spawned

    @classmethod
    def from_config(cls, config: dict, width: float) -> "EntitySpawner":
        """从配置字典创建生成器"""
        return cls(width=width, **(config or {}))
