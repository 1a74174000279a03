# data_sources/http_api.py
import logging
from typing import List
from urllib.parse import urlparse

import requests

from .base import DataSource
from context import RunContext
from models import FetchError

logger = logging.getLogger(__name__)


class HttpApiDataSource(DataSource):
    """
    远程数据源实现
    通过 HTTP 访问另一个 GitLog 服务的 /api/git-log 接口。
    """

    def __init__(self, context: RunContext, session: requests.Session = None):
        self.context = context
        self.global_config = context.global_config
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return self.context.repo_path

    def validate(self) -> bool:
        parsed = urlparse(self.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            logger.error(f"❌ 无法识别的接口地址: {self.url}")
            return False
        return True

    def get_commits(self) -> List[str]:
        message = self.global_config.FETCH_ERROR_MESSAGE
        try:
            logger.info(f"🌐 正在请求接口: {self.url}")
            response = self.session.get(self.url, timeout=self.global_config.HTTP_TIMEOUT)
        except requests.RequestException as e:
            logger.error(f"❌ 请求接口失败: {e}")
            raise FetchError(message) from e

        if not response.ok:
            logger.error(f"❌ 接口返回错误状态: {response.status_code}")
            raise FetchError(message)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"❌ 接口返回的不是合法 JSON: {e}")
            raise FetchError(message) from e

        commits = data.get("commits") if isinstance(data, dict) else None
        if not isinstance(commits, list):
            logger.error(f"❌ 接口返回格式异常: {data!r}")
            raise FetchError(message)

        logger.info(f"✅ 获取到 {len(commits)} 条提交")
        return [str(line) for line in commits]
