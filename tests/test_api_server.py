"""
排行榜HTTP接口测试
Leaderboard HTTP API Tests
"""
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fruitcatch.leaderboard import LeaderboardStore, LeaderboardPolicy
from fruitcatch.server import create_app
from fruitcatch.storage import MemoryStorage, SQLiteStorage


@pytest.fixture
def storage():
    storage = MemoryStorage()
    storage.connect()
    return storage


@pytest.fixture
def client(storage):
    app = create_app(LeaderboardStore(storage, policy=LeaderboardPolicy.BEST_PER_USER))
    app.config['TESTING'] = True
    return app.test_client()


def test_save_score_and_read_leaderboard(client):
    """测试提交成绩后可在排行榜中读到"""
    response = client.post('/api/save-score', json={"username": "alice", "score": 12, "time": 40})
    assert response.status_code == 200
    assert response.get_json() == {"outcome": "inserted", "durable": True}

    client.post('/api/save-score', json={"username": "bob", "score": 12, "time": 30})
    client.post('/api/save-score', json={"username": "carol", "score": 20, "time": 90})

    response = client.get('/api/leaderboard')
    assert response.status_code == 200
    assert 'X-Leaderboard-Fallback' not in response.headers
    rows = response.get_json()
    assert [row['username'] for row in rows] == ["carol", "bob", "alice"]
    assert set(rows[0]) == {"username", "score", "time", "date"}


def test_best_policy_outcomes(client):
    """测试每人最佳策略下的提交结果"""
    client.post('/api/save-score', json={"username": "u", "score": 10, "time": 30})
    worse = client.post('/api/save-score', json={"username": "u", "score": 8, "time": 20})
    assert worse.get_json()["outcome"] == "rejected"
    better = client.post('/api/save-score', json={"username": "u", "score": 10, "time": 20})
    assert better.get_json()["outcome"] == "updated"

    rows = client.get('/api/leaderboard').get_json()
    assert [(r['username'], r['score'], r['time']) for r in rows] == [("u", 10, 20)]


@pytest.mark.parametrize("payload, field", [
    ({"score": 1, "time": 1}, "username"),
    ({"username": "", "score": 1, "time": 1}, "username"),
    ({"username": "a", "score": "ten", "time": 1}, "score"),
    ({"username": "a", "score": 1, "time": -5}, "time"),
])
def test_invalid_submission_rejected(client, storage, payload, field):
    """测试字段错误时返回400且不写入"""
    response = client.post('/api/save-score', json=payload)
    assert response.status_code == 400
    body = response.get_json()
    assert body["field"] == field
    assert body["error"]
    assert storage.count() == 0


def test_non_json_body_rejected(client, storage):
    """测试非JSON请求体返回400"""
    response = client.post('/api/save-score', data="not json", content_type='text/plain')
    assert response.status_code == 400
    assert storage.count() == 0


def test_storage_down_returns_accepted(client, storage):
    """测试存储不可用时提交返回202，读取返回示例数据"""
    storage.disconnect()

    response = client.post('/api/save-score', json={"username": "alice", "score": 1, "time": 1})
    assert response.status_code == 202
    assert response.get_json() == {"outcome": "accepted", "durable": False}

    response = client.get('/api/leaderboard')
    assert response.status_code == 200
    assert response.headers['X-Leaderboard-Fallback'] == 'true'
    assert response.get_json()[0]['username'] == "SpeedyHands"


def test_long_username_truncated(client):
    """测试玩家名截断为20个字符"""
    client.post('/api/save-score', json={"username": "n" * 25, "score": 3, "time": 9})
    rows = client.get('/api/leaderboard').get_json()
    assert rows[0]['username'] == "n" * 20


def test_sqlite_backend(tmp_path):
    """测试使用SQLite存储的接口"""
    storage = SQLiteStorage(path=str(tmp_path / "api.db"), unique_username=True)
    storage.connect()
    client = create_app(LeaderboardStore(storage)).test_client()

    for i in range(12):
        client.post('/api/save-score', json={"username": f"p{i}", "score": i, "time": 10})

    rows = client.get('/api/leaderboard').get_json()
    assert len(rows) == 10
    assert rows[0]['score'] == 11
    storage.disconnect()


def test_unknown_route_and_method(client):
    """测试未知路径和方法返回JSON错误"""
    assert client.get('/api/unknown').status_code == 404
    response = client.get('/api/save-score')
    assert response.status_code == 405
    assert response.get_json() == {"error": "Method Not Allowed"}


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
