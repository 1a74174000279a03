import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

import cli
from config import GlobalConfig
from models import DisplayMode


class TestBuildContext(unittest.TestCase):

    def test_defaults_to_cwd(self):
        args = cli.setup_parser().parse_args(["show"])
        context = cli.build_context(args, GlobalConfig())
        self.assertEqual(context.repo_path, os.getcwd())
        self.assertEqual(context.max_count, 20)

    def test_url_is_kept(self):
        args = cli.setup_parser().parse_args(
            ["show", "-r", "http://localhost:5000/api/git-log", "--mode", "plain"]
        )
        context = cli.build_context(args, GlobalConfig())
        self.assertTrue(context.is_remote)
        self.assertIs(context.display_mode, DisplayMode.PLAIN)


class TestShow(unittest.TestCase):

    @patch("data_sources.local_git.git_utils.is_git_repository", return_value=True)
    @patch(
        "data_sources.local_git.git_utils.get_recent_commits",
        return_value=["a1b2c3d feat: add login page"],
    )
    def test_prints_text(self, *_):
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.run_cli(["show", "-r", tempfile.gettempdir()])
        self.assertEqual(code, 0)
        self.assertIn("a1b2c3d  [feat] add login page", out.getvalue())

    @patch("data_sources.local_git.git_utils.is_git_repository", return_value=True)
    @patch("data_sources.local_git.git_utils.get_recent_commits", return_value=[])
    def test_writes_html(self, *_):
        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "log.html")
            code = cli.run_cli(["show", "-r", tmp, "--html", target])
            with open(target, encoding="utf-8") as f:
                self.assertIn("No commits found", f.read())
        self.assertEqual(code, 0)

    @patch("data_sources.local_git.git_utils.is_git_repository", return_value=False)
    def test_invalid_repository_exits_nonzero(self, _):
        self.assertEqual(cli.run_cli(["show", "-r", tempfile.gettempdir()]), 1)


if __name__ == "__main__":
    unittest.main()
