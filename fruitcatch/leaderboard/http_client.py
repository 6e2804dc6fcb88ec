"""
排行榜HTTP客户端
Leaderboard HTTP Client
"""
from typing import List, Optional, Tuple
import requests
from .leaderboard_entry import LeaderboardEntry, SubmitOutcome
from ..utils.exceptions import StorageUnavailable, ValidationError
from ..utils.logger import setup_logger

logger = setup_logger("FruitCatch.HttpScoreClient")

FALLBACK_HEADER = "X-Leaderboard-Fallback"


class HttpScoreClient:
    """通过HTTP接口提交成绩和读取排行榜"""

    def __init__(self, base_url: str, timeout: float = 5.0,
                 session: Optional[requests.Session] = None):
        """
        初始化客户端

        Args:
            base_url: 服务地址，如 http://localhost:8787
            timeout: 请求超时（秒）
            session: 复用的 requests 会话（可选）
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def submit(self, entry: LeaderboardEntry) -> SubmitOutcome:
        """
        提交成绩

        Args:
            entry: 候选记录

        Returns:
            SubmitOutcome: 服务端返回的结果

        Raises:
            ValidationError: 服务端拒绝了请求体
            StorageUnavailable: 网络错误，或服务端未能持久化
        """
        payload = {
            'username': entry.username,
            'score': entry.score,
            'time': entry.time_seconds
        }
        try:
            response = self.session.post(f"{self.base_url}/api/save-score",
                                         json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise StorageUnavailable(f"无法连接排行榜服务: {e}", backend="http") from e

        if response.status_code == 400:
            body = self._json(response)
            raise ValidationError(body.get('error', '请求被拒绝'), field=body.get('field'))
        if response.status_code == 202:
            raise StorageUnavailable("服务端已接收但未持久化", backend="http")
        if response.status_code != 200:
            raise StorageUnavailable(f"排行榜服务返回 HTTP {response.status_code}", backend="http")

        outcome = SubmitOutcome(self._json(response).get('outcome'))
        logger.debug(f"成绩已提交: {entry.username} -> {outcome}")
        return outcome

    def fetch_leaderboard(self) -> Tuple[List[LeaderboardEntry], bool]:
        """
        读取排行榜

        Returns:
            Tuple[List[LeaderboardEntry], bool]: (记录列表, 是否为示例数据)

        Raises:
            StorageUnavailable: 网络错误或服务端错误
        """
        try:
            response = self.session.get(f"{self.base_url}/api/leaderboard", timeout=self.timeout)
        except requests.RequestException as e:
            raise StorageUnavailable(f"无法连接排行榜服务: {e}", backend="http") from e

        if response.status_code != 200:
            raise StorageUnavailable(f"排行榜服务返回 HTTP {response.status_code}", backend="http")

        entries = [LeaderboardEntry.from_dict(row) for row in response.json()]
        is_fallback = response.headers.get(FALLBACK_HEADER, '').lower() == 'true'
        return entries, is_fallback

    @staticmethod
    def _json(response) -> dict:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
