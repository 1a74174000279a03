# models.py
from dataclasses import dataclass
from enum import Enum


class GitLogError(Exception):
    """所有 GitLog 错误的基类"""


class LogToolError(GitLogError):
    """git 命令执行失败或没有可用输出 (服务端)"""


class FetchError(GitLogError):
    """无法从 /api/git-log 获取数据 (网络或 HTTP 错误)"""


class FetchState(Enum):
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class DisplayMode(Enum):
    PLAIN = "plain"
    RICH = "rich"

    @classmethod
    def from_name(cls, name: str) -> "DisplayMode":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"未知的展示模式: {name!r} (可选: plain, rich)") from None


# 约定式提交类型 -> 样式类名
TYPE_STYLES = {
    "feat": "commit-feat",
    "fix": "commit-fix",
    "docs": "commit-docs",
}
DEFAULT_STYLE = "commit-default"


@dataclass(frozen=True)
class ParsedCommit:
    """单行 `git log --oneline` 的解析结果"""

    hash: str
    type: str
    message: str
    full_line: str

    @property
    def has_type(self) -> bool:
        return bool(self.type)

    @property
    def style_class(self) -> str:
        return TYPE_STYLES.get(self.type, DEFAULT_STYLE)
