"""Lossless-ish image optimization with Pillow."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any

from PIL import Image

from ..globs import glob_base, glob_files
from ..settings import PipelineConfig
from .runner import TaskResult

logger = logging.getLogger(__name__)

TASK = "images"


def optimize_images(config: PipelineConfig) -> TaskResult:
    """Optimize every matched image into `image_dest`, mirroring the source layout.

    A file that cannot be decoded is reported as a warning and skipped; the
    remaining images are still processed.
    """
    result = TaskResult(name=TASK)
    dest_root = config.path(config.image_dest)
    saved_total = 0

    for pattern in config.image_sources:
        base = config.root / glob_base(pattern)
        for src in glob_files(config.root, [pattern]):
            dest = dest_root / src.relative_to(base)
            try:
                before, after = optimize_image(src, dest, config)
            except OSError as e:
                result.warnings.append(f"{src.relative_to(config.root).as_posix()}: {e}")
                continue
            saved_total += before - after
            logger.debug("%s: %d -> %d bytes", src.name, before, after)
            result.outputs.append(dest)

    if result.outputs:
        logger.info(
            "Optimized %d images, saved %.1f KB", len(result.outputs), saved_total / 1024
        )
    return result


def optimize_image(src: Path, dest: Path, config: PipelineConfig) -> tuple[int, int]:
    """Write an optimized copy of `src` to `dest`.

    The original bytes are written instead whenever re-encoding does not make
    the file smaller.

    Returns:
        (original size, written size) in bytes
    """
    original = src.read_bytes()
    encoded = _encode(original, config)

    data = encoded if encoded is not None and len(encoded) < len(original) else original
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(data)
    return len(original), len(data)


def _encode(original: bytes, config: PipelineConfig) -> bytes | None:
    level = config.optimization_level
    buf = io.BytesIO()
    with Image.open(io.BytesIO(original)) as img:
        fmt = img.format
        kwargs: dict[str, Any] = {}
        if fmt == "JPEG":
            # Reuse the source quantization so re-encoding stays visually identical.
            kwargs.update(
                quality="keep",
                subsampling="keep",
                optimize=True,
                progressive=config.progressive,
            )
            if img.info.get("icc_profile"):
                kwargs["icc_profile"] = img.info["icc_profile"]
        elif fmt == "PNG":
            kwargs.update(_png_options(level))
        elif fmt == "GIF":
            kwargs.update(optimize=True, interlace=config.interlaced)
            if getattr(img, "is_animated", False):
                kwargs["save_all"] = True
                for key in ("duration", "loop"):
                    if key in img.info:
                        kwargs[key] = img.info[key]
        else:
            return None
        img.save(buf, fmt, **kwargs)
    return buf.getvalue()


def _png_options(level: int) -> dict[str, Any]:
    # Pillow forces zlib level 9 whenever optimize is set, so only the top
    # level uses it; lower levels map the 0-7 scale onto zlib 0-9.
    if level >= 7:
        return {"optimize": True}
    return {"compress_level": min(9, round(level * 9 / 7))}
