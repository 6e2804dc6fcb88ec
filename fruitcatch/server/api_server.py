"""
排行榜HTTP接口
Leaderboard HTTP API
"""
from flask import Flask, jsonify, request
from ..leaderboard.leaderboard_entry import validate_submission
from ..leaderboard.leaderboard_store import LeaderboardStore
from ..leaderboard.http_client import FALLBACK_HEADER
from ..utils.exceptions import ValidationError, StorageUnavailable
from ..utils.error_handler import global_error_handler
from ..utils.logger import setup_logger

logger = setup_logger("FruitCatch.ApiServer")


def create_app(store: LeaderboardStore) -> Flask:
    """
    创建排行榜HTTP应用

    Args:
        store: 排行榜

    Returns:
        Flask: Flask应用
    """
    app = Flask(__name__)
    app.config['LEADERBOARD_STORE'] = store
    app.json.ensure_ascii = False

    ### API ENDPOINTS ###

    @app.route('/api/save-score', methods=['POST'])
    def save_score():
        payload = request.get_json(silent=True)
        try:
            entry = validate_submission(payload)
        except ValidationError as e:
            global_error_handler.handle(e, context="POST /api/save-score")
            return jsonify({"error": e.message, "field": e.field}), 400

        try:
            outcome = store.submit(entry)
        except StorageUnavailable as e:
            global_error_handler.handle(e, context="POST /api/save-score")
            # 已接收但未持久化，不能报告为已保存
            return jsonify({"outcome": "accepted", "durable": False}), 202

        return jsonify({"outcome": outcome.value, "durable": True}), 200

    @app.route('/api/leaderboard', methods=['GET'])
    def leaderboard():
        entries, is_fallback = store.top_n_or_fallback()
        response = jsonify([entry.to_dict() for entry in entries])
        if is_fallback:
            response.headers[FALLBACK_HEADER] = 'true'
        return response

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not Found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method Not Allowed"}), 405

    logger.info("排行榜HTTP接口已创建")
    return app
