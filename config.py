# config.py
"""
全局配置
从脚本目录 (或 CWD) 的 .env 加载环境变量。
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


# --- 脚本基础路径 ---
SCRIPT_BASE_PATH = os.path.abspath(os.path.dirname(__file__))
env_path = os.path.join(SCRIPT_BASE_PATH, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
    logger.debug(f"已从脚本目录加载 .env: {env_path}")
else:
    load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


class GlobalConfig:
    """
    GitLog 查看器的全局应用配置。
    """

    # --- 路径配置 ---
    SCRIPT_BASE_PATH: str = SCRIPT_BASE_PATH
    TEMPLATES_DIR_NAME: str = "templates"

    # --- Git 命令格式 ---
    GIT_LOG_FORMAT = "git log --oneline -n {max_count}"
    # 接口最多返回 20 条，GITLOG_MAX_COMMITS 只能调小
    GIT_LOG_LIMIT: int = 20
    MAX_COMMITS: int = min(int(os.getenv("GITLOG_MAX_COMMITS", "20")), GIT_LOG_LIMIT)
    # 默认不设超时，与 git 进程本身的失败路径保持一致
    GIT_TIMEOUT: Optional[float] = _optional_float("GITLOG_GIT_TIMEOUT")

    # --- HTTP 服务 ---
    SERVER_HOST: str = os.getenv("GITLOG_HOST", "127.0.0.1")
    SERVER_PORT: int = int(os.getenv("GITLOG_PORT", "5000"))
    API_PATH: str = "/api/git-log"

    # --- 客户端 (远程数据源) ---
    HTTP_TIMEOUT: float = float(os.getenv("GITLOG_HTTP_TIMEOUT", "10"))

    # --- 展示 ---
    DEFAULT_DISPLAY_MODE: str = os.getenv("GITLOG_DISPLAY_MODE", "rich").lower()
    HTML_TEMPLATE: str = "git_log.html.j2"
    CSS_FILE: str = "styles.css"

    # --- 对外错误信息 ---
    FETCH_ERROR_MESSAGE: str = "Failed to fetch git log"

    @property
    def templates_dir(self) -> str:
        return os.path.join(self.SCRIPT_BASE_PATH, self.TEMPLATES_DIR_NAME)
