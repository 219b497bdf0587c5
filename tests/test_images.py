"""Tests for image optimization."""

import tempfile
import unittest
from pathlib import Path

from PIL import Image

from blogpipe.settings import PipelineConfig
from blogpipe.tasks.images import _png_options, optimize_image, optimize_images


def _gradient(size: int = 96) -> Image.Image:
    img = Image.new("RGB", (size, size))
    img.putdata([((x * 3) % 256, (y * 5) % 256, 128) for y in range(size) for x in range(size)])
    return img


class TestOptimizeImages(unittest.TestCase):
    def test_mirrors_layout_and_never_grows(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            img_dir = root / "src" / "img"
            (img_dir / "posts").mkdir(parents=True)
            _gradient().save(img_dir / "posts" / "photo.png", "PNG", compress_level=0)
            _gradient().save(img_dir / "cover.jpg", "JPEG", quality=90)
            Image.new("L", (32, 32), 200).save(img_dir / "dot.gif", "GIF")
            (img_dir / "notes.txt").write_text("not an image", encoding="utf-8")

            result = optimize_images(PipelineConfig(root=root))

            rel = sorted(p.relative_to(root).as_posix() for p in result.outputs)
            self.assertEqual(
                rel,
                ["assets/img/cover.jpg", "assets/img/dot.gif", "assets/img/posts/photo.png"],
            )
            self.assertEqual(result.warnings, [])
            for out in result.outputs:
                src = img_dir / out.relative_to(root / "assets" / "img")
                self.assertLessEqual(out.stat().st_size, src.stat().st_size)
                with Image.open(out) as im:
                    im.load()

            # Uncompressed PNG input always shrinks.
            png_out = root / "assets/img/posts/photo.png"
            self.assertLess(png_out.stat().st_size, (img_dir / "posts" / "photo.png").stat().st_size)
            with Image.open(png_out) as a, Image.open(img_dir / "posts" / "photo.png") as b:
                self.assertEqual(list(a.getdata()), list(b.getdata()))

    def test_broken_image_warns_and_continues(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            img_dir = root / "src" / "img"
            img_dir.mkdir(parents=True)
            (img_dir / "broken.png").write_bytes(b"definitely not a png")
            Image.new("RGB", (8, 8), (0, 255, 0)).save(img_dir / "ok.png", "PNG")

            result = optimize_images(PipelineConfig(root=root))

            self.assertEqual([p.name for p in result.outputs], ["ok.png"])
            self.assertEqual(len(result.warnings), 1)
            self.assertIn("broken.png", result.warnings[0])
            self.assertFalse((root / "assets/img/broken.png").exists())

    def test_keeps_original_when_reencoding_is_larger(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            src = root / "tiny.png"
            Image.new("P", (1, 1)).save(src, "PNG", optimize=True)
            dest = root / "out" / "tiny.png"

            before, after = optimize_image(src, dest, PipelineConfig(root=root, optimization_level=0))

            self.assertLessEqual(after, before)
            if after == before:
                self.assertEqual(dest.read_bytes(), src.read_bytes())

    def test_png_options_scale(self) -> None:
        self.assertEqual(_png_options(0), {"compress_level": 0})
        self.assertEqual(_png_options(3), {"compress_level": 4})
        self.assertEqual(_png_options(6), {"compress_level": 8})
        # Only the top level asks Pillow for its optimize pass.
        self.assertEqual(_png_options(7), {"optimize": True})

    def test_lower_levels_keep_their_compress_level(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            src = root / "raw.png"
            _gradient(128).save(src, "PNG", compress_level=0)
            _, fast = optimize_image(src, root / "fast.png", PipelineConfig(root=root, optimization_level=1))
            _, best = optimize_image(src, root / "best.png", PipelineConfig(root=root, optimization_level=7))
            self.assertLessEqual(best, fast)


if __name__ == "__main__":
    unittest.main()
