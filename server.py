# server.py
"""
HTTP 服务
- GET /api/git-log : 最近提交的 JSON 列表
- GET /            : 服务端渲染的 GitLog 页面
"""
import logging
from typing import Optional

from flask import Flask, jsonify, request

from context import RunContext
from data_sources.local_git import LocalGitDataSource
from models import DisplayMode, LogToolError
from renderer import GitLogView

logger = logging.getLogger(__name__)


def create_app(context: Optional[RunContext] = None) -> Flask:
    """创建 Flask 应用。每个请求都重新执行一次 git，不做缓存。"""
    context = context or RunContext()
    global_config = context.global_config

    app = Flask(__name__)
    app.config["GITLOG_CONTEXT"] = context

    @app.get(global_config.API_PATH)
    def git_log():
        try:
            commits = LocalGitDataSource(context).get_commits()
        except LogToolError as e:
            logger.error(f"❌ Failed to fetch git log: {e}")
            return jsonify({"error": global_config.FETCH_ERROR_MESSAGE}), 500
        return jsonify({"commits": commits})

    @app.get("/")
    def index():
        mode_name = request.args.get("mode")
        try:
            mode = DisplayMode.from_name(mode_name) if mode_name else context.display_mode
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        view = GitLogView(
            LocalGitDataSource(context), display_mode=mode, global_config=global_config
        )
        view.wait()
        return view.render_html()

    logger.info(f"✅ Flask 应用已创建 (仓库: {context.repo_path})")
    return app
