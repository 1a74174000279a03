# git_utils.py
import subprocess
import re
import logging
from typing import Optional, List

from context import RunContext
from models import ParsedCommit, LogToolError

logger = logging.getLogger(__name__)

# <短哈希> <标题>
COMMIT_LINE_PATTERN = re.compile(r"^([a-f0-9]+)\s+(.+)$")
# type(scope): message，scope 只参与匹配，不出现在结果中
CONVENTIONAL_PATTERN = re.compile(r"^(\w+)(?:\([^)]+\))?:\s*(.+)$")


def run_git_command(
    cmd: str,
    repo_path: str,
    context: str = "执行Git命令",
    timeout: Optional[float] = None,
) -> Optional[str]:
    """
    统一的Git命令执行函数
    - 使用 cwd 参数在指定仓库路径下执行
    - 失败时记录日志并返回 None
    """
    try:
        logger.info(f"在 {repo_path} 中执行命令: {cmd}")
        result = subprocess.run(
            cmd,
            shell=True,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout,
            cwd=repo_path,
        )
        if result.returncode != 0:
            logger.error(f"{context}失败: {result.stderr}")
            return None
        logger.info(f"{context}成功，输出 {len(result.stdout.splitlines())} 行")
        return result.stdout
    except subprocess.TimeoutExpired:
        logger.error(f"{context}超时")
        return None
    except (OSError, ValueError) as e:
        # ValueError 包括输出不是合法 UTF-8 时的 UnicodeDecodeError
        logger.error(f"{context}出错: {e}")
        return None


def is_git_repository(repo_path: str) -> bool:
    """检查指定路径是否为Git仓库"""
    try:
        result = subprocess.run(
            "git rev-parse --is-inside-work-tree",
            shell=True,
            capture_output=True,
            text=True,
            cwd=repo_path,
        )
        return result.returncode == 0
    except OSError:
        return False


def split_log_lines(log_output: str) -> List[str]:
    """按行拆分 git 输出，丢弃空行 (包括结尾换行产生的空行)"""
    if not log_output:
        return []
    return [line for line in log_output.strip().splitlines() if line.strip()]


def get_recent_commits(context: RunContext) -> List[str]:
    """
    获取最近 N 条 `git log --oneline` 记录，最新的在前。
    git 调用失败时抛出 LogToolError，不重试，也不返回部分结果。
    """
    global_config = context.global_config
    max_count = min(context.max_count, global_config.GIT_LOG_LIMIT)
    cmd = global_config.GIT_LOG_FORMAT.format(max_count=max_count)
    output = run_git_command(
        cmd, context.repo_path, "获取Git提交历史", timeout=global_config.GIT_TIMEOUT
    )
    if output is None:
        raise LogToolError(global_config.FETCH_ERROR_MESSAGE)
    commits = split_log_lines(output)
    return commits[:max_count]


def parse_commit(line: str) -> ParsedCommit:
    """
    解析单行提交记录。
    对任何输入都返回结果：无法识别的部分回退为空 hash / 空 type。
    """
    match = COMMIT_LINE_PATTERN.match(line)
    if not match:
        return ParsedCommit(hash="", type="", message=line, full_line=line)

    commit_hash, subject = match.group(1), match.group(2)
    conventional = CONVENTIONAL_PATTERN.match(subject)
    if conventional:
        return ParsedCommit(
            hash=commit_hash,
            type=conventional.group(1),
            message=conventional.group(2),
            full_line=line,
        )
    return ParsedCommit(hash=commit_hash, type="", message=subject, full_line=line)


def parse_git_log(lines: List[str]) -> List[ParsedCommit]:
    """解析多行日志"""
    commits = [parse_commit(line) for line in lines]
    typed = sum(1 for c in commits if c.has_type)
    logger.debug(f"解析 {len(commits)} 个提交，其中 {typed} 个带约定式类型")
    return commits
