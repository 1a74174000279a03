# data_sources/base.py
from abc import ABC, abstractmethod
from typing import List


class DataSource(ABC):
    """
    数据源抽象基类
    定义了获取最近提交列表的标准接口，屏蔽了底层是本地 Git 还是远程 HTTP API 的差异。
    """

    @abstractmethod
    def validate(self) -> bool:
        """
        验证数据源是否可用。
        例如：本地路径是否存在且为 Git 仓库，或者 URL 是否合法。
        """
        pass

    @abstractmethod
    def get_commits(self) -> List[str]:
        """
        获取最近的提交列表 (`<短哈希> <标题>` 形式的原始行)，最新的在前。
        失败时抛出 GitLogError 的子类。
        """
        pass
