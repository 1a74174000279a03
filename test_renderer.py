import threading
import unittest
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

from config import GlobalConfig
from data_sources.base import DataSource
from models import DisplayMode, FetchError, FetchState
from renderer import GitLogView


class StubSource(DataSource):

    def __init__(self, commits=None, error=None, gate=None):
        self.commits = commits or []
        self.error = error
        self.gate = gate
        self.started = threading.Event()
        self.calls = 0

    def validate(self) -> bool:
        return True

    def get_commits(self):
        self.calls += 1
        self.started.set()
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error
        return list(self.commits)


COMMITS = [
    "a1b2c3d feat: add login page",
    "b2c3d4e fix(auth): handle expired token",
    "c3d4e5f docs: update readme",
    "d4e5f6a cleanup old files",
]


class TestGitLogViewState(unittest.TestCase):

    def test_starts_loading(self):
        view = GitLogView(StubSource(COMMITS))
        self.assertIs(view.state, FetchState.LOADING)
        self.assertIn("Loading git log...", view.render_html())

    def test_loaded(self):
        view = GitLogView(StubSource(COMMITS))
        self.assertIs(view.wait(5), FetchState.LOADED)
        self.assertEqual(view.commits, COMMITS)
        self.assertIsNone(view.error)

    def test_fetch_error_is_shown_inline(self):
        view = GitLogView(StubSource(error=FetchError("Failed to fetch git log")))
        self.assertIs(view.wait(5), FetchState.ERROR)
        self.assertEqual(view.error, "Failed to fetch git log")
        self.assertIn("Error: Failed to fetch git log", view.render_html())

    def test_unexpected_error_is_unknown(self):
        view = GitLogView(StubSource(error=RuntimeError("boom")))
        view.wait(5)
        self.assertEqual(view.error, "Unknown error")

    def test_start_fetches_once(self):
        source = StubSource(COMMITS)
        view = GitLogView(source)
        first = view.start()
        self.assertIs(view.start(), first)
        view.wait(5)
        self.assertEqual(source.calls, 1)

    def test_cancel_discards_late_result(self):
        gate = threading.Event()
        executor = ThreadPoolExecutor(max_workers=1)
        self.addCleanup(executor.shutdown)
        source = StubSource(COMMITS, gate=gate)
        view = GitLogView(source, executor=executor)
        future = view.start()
        self.assertTrue(source.started.wait(5))
        view.cancel()
        gate.set()
        future.result(5)
        self.assertTrue(view.cancelled)
        self.assertIs(view.state, FetchState.LOADING)
        self.assertEqual(view.commits, [])

    def test_cancel_before_start_skips_fetch(self):
        source = StubSource(COMMITS)
        view = GitLogView(source)
        view.cancel()
        view.wait(5)
        self.assertEqual(source.calls, 0)
        self.assertIs(view.state, FetchState.LOADING)

    def test_wait_timeout_shuts_down_owned_executor(self):
        gate = threading.Event()
        self.addCleanup(gate.set)
        view = GitLogView(StubSource(COMMITS, gate=gate))
        with self.assertRaises(FutureTimeoutError):
            view.wait(0.01)
        with self.assertRaises(RuntimeError):
            view._executor.submit(lambda: None)


class TestGitLogViewRendering(unittest.TestCase):

    def test_empty_result_is_not_an_error(self):
        view = GitLogView(StubSource([]))
        view.wait(5)
        html = view.render_html()
        self.assertIs(view.state, FetchState.LOADED)
        self.assertIn("No commits found", html)
        self.assertNotIn("Error:", html)
        self.assertIn("No commits found", view.render_text())

    def test_heading_shows_count(self):
        view = GitLogView(StubSource(COMMITS))
        view.wait(5)
        self.assertEqual(view.heading, "Recent Commits (4)")

    def test_plain_mode_lists_raw_lines(self):
        view = GitLogView(StubSource(COMMITS), display_mode=DisplayMode.PLAIN)
        view.wait(5)
        html = view.render_html()
        self.assertIn("a1b2c3d feat: add login page", html)
        self.assertNotIn('class="commit commit-feat"', html)
        self.assertEqual(view.render_text().splitlines()[2:], COMMITS)

    def test_rich_mode_styles_by_type(self):
        view = GitLogView(StubSource(COMMITS), display_mode=DisplayMode.RICH)
        view.wait(5)
        html = view.render_html()
        for css_class in ("commit-feat", "commit-fix", "commit-docs", "commit-default"):
            self.assertIn(f'class="commit {css_class}"', html)
        self.assertIn("handle expired token", html)
        self.assertNotIn("(auth)", html)

    def test_rich_text(self):
        view = GitLogView(StubSource(COMMITS))
        view.wait(5)
        lines = view.render_text().splitlines()
        self.assertEqual(lines[2], "a1b2c3d  [feat] add login page")
        self.assertEqual(lines[5], "d4e5f6a  cleanup old files")

    def test_html_is_escaped(self):
        view = GitLogView(StubSource(["abc123 feat: <script>alert(1)</script>"]))
        view.wait(5)
        self.assertNotIn("<script>alert(1)</script>", view.render_html())

    def test_css_is_inlined(self):
        view = GitLogView(StubSource(COMMITS), global_config=GlobalConfig())
        view.wait(5)
        self.assertIn(".commit-feat", view.render_html())


if __name__ == "__main__":
    unittest.main()
