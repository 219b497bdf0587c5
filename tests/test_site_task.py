"""Tests for the site generator task."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from blogpipe.serve.reload import ReloadHub
from blogpipe.settings import PipelineConfig
from blogpipe.tasks.runner import TaskError
from blogpipe.tasks.site import run_generator


class TestRunGenerator(unittest.TestCase):
    def test_runs_command_in_root_and_notifies(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            config = PipelineConfig(root=Path(td))
            hub = ReloadHub()
            with patch("blogpipe.tasks.site.subprocess.run", return_value=MagicMock(returncode=0)) as run:
                result = run_generator(config, hub)

            run.assert_called_once_with(
                ["bundle", "exec", "jekyll", "build"], cwd=Path(td), check=False
            )
            self.assertEqual(result.outputs, [Path(td) / "_site"])
            state = hub.snapshot()
            self.assertEqual(state.message, "Running: $ jekyll build")
            self.assertEqual(state.message_id, 1)
            self.assertEqual(state.version, 0)

    def test_non_zero_exit_raises(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            config = PipelineConfig(root=Path(td), site_command=["hugo"])
            with patch("blogpipe.tasks.site.subprocess.run", return_value=MagicMock(returncode=3)):
                with self.assertRaises(TaskError) as ctx:
                    run_generator(config)
            self.assertEqual(ctx.exception.returncode, 3)
            self.assertIn("hugo", str(ctx.exception))

    def test_missing_executable(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            config = PipelineConfig(root=Path(td), site_command=["no-such-generator-xyz"])
            with self.assertRaises(TaskError) as ctx:
                run_generator(config)
            self.assertIn("Command not found", str(ctx.exception))

    def test_empty_command(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(TaskError):
                run_generator(PipelineConfig(root=Path(td), site_command=[]))


if __name__ == "__main__":
    unittest.main()
