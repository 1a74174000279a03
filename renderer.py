# renderer.py
"""
GitLog 视图组件
- 初始化后发起一次异步获取任务，结果通过 loading / loaded / error 三态呈现
- 显式的取消标记：取消后到达的结果直接丢弃
- 通过 Jinja2 模板渲染 HTML，或渲染为终端文本
"""
import logging
import os
import threading
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config import GlobalConfig
from data_sources.base import DataSource
from git_utils import parse_git_log
from models import DisplayMode, FetchState, GitLogError, ParsedCommit

logger = logging.getLogger(__name__)

TITLE = "Recent Commits"
LOADING_TEXT = "Loading git log..."
EMPTY_TEXT = "No commits found"
UNKNOWN_ERROR = "Unknown error"


class GitLogView:
    """
    展示最近提交的视图组件。
    PLAIN 模式直接列出原始行，RICH 模式按约定式提交类型着色。
    """

    def __init__(
        self,
        source: DataSource,
        display_mode: DisplayMode = DisplayMode.RICH,
        executor: Optional[Executor] = None,
        global_config: Optional[GlobalConfig] = None,
    ):
        self.source = source
        self.display_mode = display_mode
        self.global_config = global_config or GlobalConfig()

        self.state = FetchState.LOADING
        self.commits: List[str] = []
        self.error: Optional[str] = None

        self._executor = executor
        self._owns_executor = executor is None
        self._future: Optional[Future] = None
        self._cancelled = threading.Event()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # 生命周期
    # ------------------------------------------------------------------
    def start(self) -> Future:
        """发起唯一一次获取任务；重复调用返回同一个 Future。"""
        with self._lock:
            if self._future is None and self._cancelled.is_set():
                # 已取消：不再启动 git 进程
                self._future = Future()
                self._future.cancel()
            if self._future is None:
                if self._executor is None:
                    self._executor = ThreadPoolExecutor(
                        max_workers=1, thread_name_prefix="gitlog-fetch"
                    )
                self._future = self._executor.submit(self._fetch)
            return self._future

    def cancel(self):
        """设置取消标记。已在途的结果到达后不会被应用。"""
        self._cancelled.set()
        if self._future is not None:
            self._future.cancel()
        logger.info("🛑 GitLog 获取任务已取消")

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def wait(self, timeout: Optional[float] = None) -> FetchState:
        """等待获取任务结束并返回当前状态"""
        future = self.start()
        try:
            future.result(timeout=timeout)
        except CancelledError:
            pass
        finally:
            if self._owns_executor and self._executor is not None:
                self._executor.shutdown(wait=False)
        return self.state

    def _fetch(self):
        try:
            commits = self.source.get_commits()
        except GitLogError as e:
            self._apply(FetchState.ERROR, error=str(e) or UNKNOWN_ERROR)
        except Exception as e:
            logger.error(f"❌ 获取提交时出现未知错误: {e}", exc_info=True)
            self._apply(FetchState.ERROR, error=UNKNOWN_ERROR)
        else:
            self._apply(FetchState.LOADED, commits=commits)

    def _apply(self, state: FetchState, commits=None, error=None):
        with self._lock:
            if self._cancelled.is_set():
                logger.info("ℹ️ 视图已取消，丢弃获取结果")
                return
            self.commits = list(commits or [])
            self.error = error
            self.state = state
        if state is FetchState.ERROR:
            logger.warning(f"⚠️ GitLog 获取失败: {error}")
        else:
            logger.info(f"✅ GitLog 已加载 {len(self.commits)} 条提交")

    # ------------------------------------------------------------------
    # 渲染
    # ------------------------------------------------------------------
    @property
    def parsed_commits(self) -> List[ParsedCommit]:
        return parse_git_log(self.commits)

    @property
    def heading(self) -> str:
        if self.state is FetchState.LOADED:
            return f"{TITLE} ({len(self.commits)})"
        return TITLE

    def render_html(self) -> str:
        """使用 Jinja2 模板渲染 HTML"""
        env = Environment(
            loader=FileSystemLoader(self.global_config.templates_dir),
            autoescape=select_autoescape(["html", "xml", "j2"]),
        )
        template_context = {
            "heading": self.heading,
            "state": self.state.value,
            "mode": self.display_mode.value,
            "loading_text": LOADING_TEXT,
            "empty_text": EMPTY_TEXT,
            "error": self.error,
            "commits": self.commits,
            "parsed_commits": self.parsed_commits,
            "css_content": _get_css_styles(self.global_config),
        }
        template = env.get_template(self.global_config.HTML_TEMPLATE)
        return template.render(**template_context)

    def render_text(self) -> str:
        """渲染为终端文本"""
        lines = [self.heading, "-" * 40]
        if self.state is FetchState.LOADING:
            lines.append(LOADING_TEXT)
        elif self.state is FetchState.ERROR:
            lines.append(f"Error: {self.error}")
        elif not self.commits:
            lines.append(EMPTY_TEXT)
        elif self.display_mode is DisplayMode.PLAIN:
            lines.extend(self.commits)
        else:
            for commit in self.parsed_commits:
                if not commit.hash:
                    lines.append(commit.full_line)
                    continue
                label = f"[{commit.type}] " if commit.has_type else ""
                lines.append(f"{commit.hash}  {label}{commit.message}")
        return "\n".join(lines)


def _get_css_styles(global_config: GlobalConfig) -> str:
    """读取 CSS 文件内容"""
    css_path = os.path.join(global_config.templates_dir, global_config.CSS_FILE)
    try:
        with open(css_path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        logger.error(f"❌ CSS 模板文件未找到: {css_path}")
        return "/* CSS 模板文件未找到 */"
