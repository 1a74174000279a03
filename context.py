# context.py
"""
运行时配置的数据模型
"""
import os
from dataclasses import dataclass, field

from config import GlobalConfig
from models import DisplayMode


@dataclass
class RunContext:
    """
    封装一次运行所需的所有配置。
    由 CLI 组装，传递给数据源、服务端和渲染器。
    """

    # --- 目标 ---
    # 本地仓库路径，或者远程 /api/git-log 的完整 URL
    repo_path: str = field(default_factory=os.getcwd)

    # --- 范围参数 ---
    max_count: int = 20

    # --- 展示参数 ---
    display_mode: DisplayMode = DisplayMode.RICH

    # --- 全局配置 ---
    global_config: GlobalConfig = field(default_factory=GlobalConfig)

    @property
    def is_remote(self) -> bool:
        return self.repo_path.lower().startswith(("http://", "https://"))

    @classmethod
    def from_config(cls, global_config: GlobalConfig, **overrides) -> "RunContext":
        """按 GlobalConfig 的默认值组装 Context，overrides 中非 None 的值优先。"""
        values = {
            "max_count": global_config.MAX_COMMITS,
            "display_mode": DisplayMode.from_name(global_config.DEFAULT_DISPLAY_MODE),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(global_config=global_config, **values)
