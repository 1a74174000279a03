# data_sources/factory.py
import logging
from context import RunContext
from .base import DataSource
from .local_git import LocalGitDataSource
from .http_api import HttpApiDataSource

logger = logging.getLogger(__name__)


def get_data_source(context: RunContext) -> DataSource:
    """
    数据源工厂
    http(s) 地址视为远程 /api/git-log 接口，其余视为本地仓库路径。
    """
    if context.is_remote:
        logger.info("🔌 [Factory] 检测到远程 URL，初始化数据源: HTTP API")
        return HttpApiDataSource(context)

    logger.info("🔌 [Factory] 初始化数据源: Local Git")
    return LocalGitDataSource(context)
