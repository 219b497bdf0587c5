"""Tests for glob helpers."""

import tempfile
import unittest
from pathlib import Path

from blogpipe.globs import expand_braces, glob_base, glob_files


class TestExpandBraces(unittest.TestCase):
    def test_no_braces(self) -> None:
        self.assertEqual(expand_braces("src/js/**/*.js"), ["src/js/**/*.js"])

    def test_single_group(self) -> None:
        self.assertEqual(
            expand_braces("src/img/**/*.{jpg,png,gif}"),
            ["src/img/**/*.jpg", "src/img/**/*.png", "src/img/**/*.gif"],
        )

    def test_multiple_and_nested_groups(self) -> None:
        self.assertEqual(expand_braces("{a,b}/{c,d}"), ["a/c", "a/d", "b/c", "b/d"])
        self.assertEqual(expand_braces("x{1,2{a,b}}"), ["x1", "x2a", "x2b"])

    def test_unbalanced_brace_is_literal(self) -> None:
        self.assertEqual(expand_braces("a{b"), ["a{b"])


class TestGlobBase(unittest.TestCase):
    def test_base(self) -> None:
        self.assertEqual(glob_base("src/img/**/*.{jpg,png}"), "src/img")
        self.assertEqual(glob_base("src/sass/main.sass"), "src/sass")
        self.assertEqual(glob_base("*.html"), "")
        self.assertEqual(glob_base("_posts/*"), "_posts")


class TestGlobFiles(unittest.TestCase):
    def test_matches_recursively_sorted_and_unique(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            for rel in ["src/img/b.png", "src/img/a.jpg", "src/img/sub/c.gif", "src/img/skip.txt"]:
                p = root / rel
                p.parent.mkdir(parents=True, exist_ok=True)
                p.write_bytes(b"x")

            files = glob_files(root, ["src/img/**/*.{jpg,png,gif}", "src/img/*.png"])
            rel = [f.relative_to(root).as_posix() for f in files]
            self.assertEqual(rel, ["src/img/a.jpg", "src/img/b.png", "src/img/sub/c.gif"])

    def test_ignores_directories(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "_posts" / "drafts").mkdir(parents=True)
            (root / "_posts" / "2024-01-01-hello.md").write_text("hi", encoding="utf-8")
            files = glob_files(root, ["_posts/*"])
            self.assertEqual([f.name for f in files], ["2024-01-01-hello.md"])


if __name__ == "__main__":
    unittest.main()
