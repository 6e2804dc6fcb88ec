"""
SQLite排行榜存储实现
SQLite Leaderboard Storage Implementation
"""
import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import List, Optional
from ..base.storage_base import StorageBase
from ...leaderboard.leaderboard_entry import LeaderboardEntry
from ...utils.exceptions import StorageUnavailable
from ...utils.logger import setup_logger

logger = setup_logger("FruitCatch.SQLiteStorage")


class SQLiteStorage(StorageBase):
    """SQLite存储实现类"""

    def __init__(self, path: str = "data/leaderboard.db", table: str = "leaderboard",
                 unique_username: bool = False):
        """
        初始化SQLite存储

        Args:
            path: 数据库文件路径（":memory:" 为内存数据库）
            table: 表名
            unique_username: 是否为 username 建唯一索引（每人最佳成绩策略）
        """
        if not table.isidentifier():
            raise ValueError(f"非法表名: {table}")

        self.path = str(path)
        self.table = table
        self.unique_username = unique_username
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

        logger.info(f"初始化SQLite存储: path={self.path}, table={table}, unique={unique_username}")

    def connect(self) -> bool:
        """
        连接数据库并建表

        Returns:
            bool: 连接是否成功
        """
        if self._conn is not None:
            logger.warning("数据库已经连接")
            return True

        try:
            if self.path != ":memory:":
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.path, check_same_thread=False)
            self._initialize(conn)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"数据库连接失败: {e}")
            return False

        self._conn = conn
        logger.info(f"数据库连接成功: {self.path}")
        return True

    def _initialize(self, conn: sqlite3.Connection):
        conn.execute(f'''
            CREATE TABLE IF NOT EXISTS {self.table} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT NOT NULL,
                score INTEGER NOT NULL,
                time INTEGER NOT NULL,
                date TEXT NOT NULL
            )
        ''')
        if self.unique_username:
            self._collapse_to_best(conn)
            conn.execute(f'DROP INDEX IF EXISTS idx_{self.table}_username')
            conn.execute(
                f'CREATE UNIQUE INDEX IF NOT EXISTS idx_{self.table}_unique_username '
                f'ON {self.table} (username)'
            )
        else:
            # 从每人最佳切换到追加时，旧的唯一索引会拒绝重复玩家
            conn.execute(f'DROP INDEX IF EXISTS idx_{self.table}_unique_username')
            conn.execute(
                f'CREATE INDEX IF NOT EXISTS idx_{self.table}_username '
                f'ON {self.table} (username)'
            )
        conn.execute(
            f'CREATE INDEX IF NOT EXISTS idx_{self.table}_rank '
            f'ON {self.table} (score DESC, time ASC)'
        )
        conn.commit()

    def _collapse_to_best(self, conn: sqlite3.Connection):
        """
        每个玩家只保留排名最高的一行（追加模式留下的数据切换到每人最佳时）

        Args:
            conn: 数据库连接
        """
        cursor = conn.execute(f'''
            DELETE FROM {self.table} WHERE EXISTS (
                SELECT 1 FROM {self.table} AS better
                WHERE better.username = {self.table}.username
                  AND (better.score > {self.table}.score
                       OR (better.score = {self.table}.score
                           AND (better.time < {self.table}.time
                                OR (better.time = {self.table}.time
                                    AND better.id < {self.table}.id))))
            )
        ''')
        if cursor.rowcount > 0:
            logger.warning(f"切换为每人最佳策略，已合并 {cursor.rowcount} 条重复记录")

    def disconnect(self) -> bool:
        """
        断开数据库连接

        Returns:
            bool: 断开是否成功
        """
        if self._conn is None:
            return True
        try:
            self._conn.close()
        except sqlite3.Error as e:
            logger.error(f"关闭数据库失败: {e}")
            return False
        finally:
            self._conn = None
        logger.info("数据库已断开")
        return True

    def is_connected(self) -> bool:
        return self._conn is not None

    def _execute(self, sql: str, params: tuple = (), commit: bool = False) -> list:
        if self._conn is None:
            raise StorageUnavailable("数据库未连接", backend="sqlite")
        try:
            with self._lock:
                cursor = self._conn.execute(sql, params)
                rows = cursor.fetchall()
                if commit:
                    self._conn.commit()
                return rows
        except sqlite3.Error as e:
            raise StorageUnavailable(f"数据库操作失败: {e}", backend="sqlite") from e

    @staticmethod
    def _to_entry(row: tuple) -> LeaderboardEntry:
        username, score, time_seconds, date = row
        return LeaderboardEntry(
            username=username,
            score=int(score),
            time_seconds=int(time_seconds),
            recorded_at=datetime.fromisoformat(date)
        )

    def insert(self, entry: LeaderboardEntry):
        self._execute(
            f'INSERT INTO {self.table} (username, score, time, date) VALUES (?, ?, ?, ?)',
            (entry.username, entry.score, entry.time_seconds, entry.recorded_at.isoformat()),
            commit=True
        )

    def replace(self, entry: LeaderboardEntry):
        self._execute(
            f'UPDATE {self.table} SET score = ?, time = ?, date = ? WHERE username = ?',
            (entry.score, entry.time_seconds, entry.recorded_at.isoformat(), entry.username),
            commit=True
        )

    def find_by_username(self, username: str) -> Optional[LeaderboardEntry]:
        rows = self._execute(
            f'SELECT username, score, time, date FROM {self.table} WHERE username = ? '
            f'ORDER BY score DESC, time ASC, id ASC LIMIT 1',
            (username,)
        )
        return self._to_entry(rows[0]) if rows else None

    def top(self, limit: int) -> List[LeaderboardEntry]:
        rows = self._execute(
            f'SELECT username, score, time, date FROM {self.table} '
            f'ORDER BY score DESC, time ASC, id ASC LIMIT ?',
            (int(limit),)
        )
        return [self._to_entry(row) for row in rows]

    def count(self) -> int:
        rows = self._execute(f'SELECT COUNT(*) FROM {self.table}')
        return int(rows[0][0])

    def get_status(self) -> dict:
        status = super().get_status()
        status.update({"path": self.path, "table": self.table})
        return status
