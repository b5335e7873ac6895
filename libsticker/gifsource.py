import logging
import os
from typing import BinaryIO

import numpy as np
from PIL import GifImagePlugin, Image, ImageSequence

from .constants import *
from .errors import DecodeError
from .frames import Animation, Disposal, Frame, Palette
from .helpers import flat_to_colors

"""
Read GIF animations into frames using PIL.

PIL hands back every frame composited onto the full logical screen, so all
frames decoded here start at the origin and share the screen size.
"""

log = logging.getLogger("libsticker.gifsource")

# GIF disposal method field -> our disposal; 0 (unspecified) and 1 (keep)
# both leave the frame in place
GIF_DISPOSAL = {
    2: Disposal.BACKGROUND,
    3: Disposal.PREVIOUS,
}


def decode(fp: str | os.PathLike | BinaryIO) -> Animation:
    "decode every frame of the GIF at `fp` (a path or binary file object)"

    # LOADING_STRATEGY is a PIL module global. Conversion is single threaded, so
    # it is swapped for the duration of this decode and always put back.
    # RGB_AFTER_DIFFERENT_PALETTE_ONLY keeps frames palette indexed for as long
    # as PIL can.
    strategy = GifImagePlugin.LOADING_STRATEGY
    GifImagePlugin.LOADING_STRATEGY = GifImagePlugin.LoadingStrategy.RGB_AFTER_DIFFERENT_PALETTE_ONLY

    try:
        with Image.open(fp) as im:
            if im.format != "GIF":
                raise DecodeError(f"not a GIF: {im.format}")

            loop_count = im.info.get("loop", 1)
            frames = [read_frame(f) for f in ImageSequence.Iterator(im)]
    except (OSError, SyntaxError, EOFError, ValueError) as e:
        raise DecodeError(f"could not decode {fp}: {e}") from e
    finally:
        GifImagePlugin.LOADING_STRATEGY = strategy

    if not frames:
        raise DecodeError(f"no frames in {fp}")

    log.debug(f"decoded {len(frames)} frames, loop={loop_count}")
    return Animation(frames, loop_count)


def read_frame(im: Image.Image) -> Frame:
    "convert the current frame of `im` into an indexed Frame where possible"
    delay = im.info.get("duration", 0) // (1000 // DELAY_DENOMINATOR)
    disposal = GIF_DISPOSAL.get(getattr(im, "disposal_method", 0), Disposal.NONE)

    if im.mode == "P":
        colors = flat_to_colors(im.getpalette("RGBA"))
        transparency = im.info.get("transparency")
        if isinstance(transparency, int) and transparency < len(colors):
            r, g, b, _a = colors[transparency]
            colors[transparency] = (r, g, b, 0)

        pixels = np.array(im, dtype=np.uint8)
        return Frame(pixels, Palette(colors), delay=delay, disposal=disposal)

    pixels, palette = index_colors(np.array(im.convert("RGBA"), dtype=np.uint8))
    if palette is None:
        log.debug(f"frame has more than {MAX_COLORS} colors, keeping it explicit")
    return Frame(pixels, palette, delay=delay, disposal=disposal)


def index_colors(rgba: np.ndarray) -> tuple[np.ndarray, Palette | None]:
    """
    Build a palette for an RGBA pixel array.

    Colors are numbered in order of first appearance (row-major). Returns the
    array unchanged and no palette if it has more than MAX_COLORS colors.
    """
    h, w, _ = rgba.shape
    flat = np.ascontiguousarray(rgba).reshape(-1, 4)
    packed = flat.view(np.uint32).reshape(-1)

    uniq, first, inverse = np.unique(packed, return_index=True, return_inverse=True)
    if len(uniq) > MAX_COLORS:
        return rgba, None

    # np.unique sorts by value, renumber by first occurrence instead
    order = np.argsort(first)
    rank = np.empty_like(order)
    rank[order] = np.arange(len(order))

    indices = rank[inverse.reshape(-1)].astype(np.uint8).reshape(h, w)
    colors = [tuple(int(c) for c in flat[i]) for i in first[order]]
    return indices, Palette(colors)
