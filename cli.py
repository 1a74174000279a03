# cli.py
"""
命令行界面 (Interface) 层
- serve: 启动 HTTP 服务
- show : 获取一次最近提交并在终端显示 (或写出 HTML)
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from config import GlobalConfig
from context import RunContext
from data_sources.factory import get_data_source
from models import DisplayMode, FetchState
from renderer import GitLogView

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """负责所有 argparse 的定义。"""
    parser = argparse.ArgumentParser(
        description="GitLog 查看器",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="启动 HTTP 服务 (GET /api/git-log)")
    serve.add_argument("--host", type=str, default=None, help="监听地址 (默认: GITLOG_HOST 或 127.0.0.1)")
    serve.add_argument("--port", type=int, default=None, help="监听端口 (默认: GITLOG_PORT 或 5000)")
    serve.add_argument(
        "-r",
        "--repo-path",
        type=str,
        default=None,
        help="要读取的 Git 仓库路径。\n(默认: 当前工作目录)",
    )

    show = subparsers.add_parser("show", help="获取一次最近提交并显示")
    show.add_argument(
        "-r",
        "--repo-path",
        type=str,
        default=None,
        help="本地仓库路径，或远程 /api/git-log 的 URL。\n(默认: 当前工作目录)",
    )
    show.add_argument(
        "--mode",
        type=str,
        choices=[m.value for m in DisplayMode],
        default=None,
        help="展示模式: 'plain' 原始行, 'rich' 按提交类型着色。\n(默认: GITLOG_DISPLAY_MODE 或 rich)",
    )
    show.add_argument(
        "--html",
        type=str,
        default=None,
        help="将 HTML 渲染结果写入指定文件，而不是打印文本。",
    )

    return parser


def build_context(args: argparse.Namespace, global_config: GlobalConfig) -> RunContext:
    """合并命令行参数和全局配置，组装 RunContext"""
    repo_path = args.repo_path
    if repo_path and not repo_path.startswith(("http://", "https://")):
        repo_path = os.path.abspath(repo_path)

    mode = getattr(args, "mode", None)
    return RunContext.from_config(
        global_config,
        repo_path=repo_path,
        display_mode=DisplayMode.from_name(mode) if mode else None,
    )


def run_serve(args: argparse.Namespace, context: RunContext) -> int:
    from server import create_app

    host = args.host or context.global_config.SERVER_HOST
    port = args.port or context.global_config.SERVER_PORT
    logger.info(f"🚀 GitLog 服务启动: http://{host}:{port} (仓库: {context.repo_path})")
    app = create_app(context)
    app.run(host=host, port=port)
    return 0


def run_show(args: argparse.Namespace, context: RunContext) -> int:
    source = get_data_source(context)
    if not source.validate():
        logger.error("❌ 数据源验证失败，终止运行。")
        return 1

    view = GitLogView(source, display_mode=context.display_mode, global_config=context.global_config)
    state = view.wait()

    if args.html:
        with open(args.html, "w", encoding="utf-8") as f:
            f.write(view.render_html())
        logger.info(f"✅ HTML 已保存: {args.html}")
    else:
        print(view.render_text())

    return 1 if state is FetchState.ERROR else 0


def run_cli(argv: Optional[List[str]] = None) -> int:
    """主入口点。"""
    parser = setup_parser()
    args = parser.parse_args(argv)

    global_config = GlobalConfig()
    context = build_context(args, global_config)

    if args.command == "serve":
        return run_serve(args, context)
    return run_show(args, context)


def main():
    """console script 入口"""
    import utils

    utils.setup_logging()
    try:
        sys.exit(run_cli())
    except Exception as e:
        logger.error(f"❌ 发生未处理的全局异常: {e}", exc_info=True)
        sys.exit(1)
