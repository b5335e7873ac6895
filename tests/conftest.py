import numpy as np
import pytest

from libsticker.frames import Disposal, Frame, Palette

TRANSPARENT = (0, 0, 0, 0)
RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def make_frame():
    """
    Factory for indexed frames.

    Pixels default to a diagonal stripe pattern cycling through every palette
    index, so each color is actually used.
    """

    def _make(width, height, colors, pixels=None, delay=10, disposal=Disposal.NONE):
        if pixels is None:
            ys, xs = np.indices((height, width))
            pixels = ((xs + ys) % len(colors)).astype(np.uint8)
        return Frame(np.asarray(pixels, dtype=np.uint8), Palette(colors), delay=delay, disposal=disposal)

    return _make


@pytest.fixture
def make_gif(tmp_path):
    "write P mode frames out as a GIF and return the path"

    def _make(images, name="anim.gif", **save_args):
        path = tmp_path / name
        save_args.setdefault("duration", 100)
        save_args.setdefault("loop", 0)
        images[0].save(path, save_all=True, append_images=images[1:], **save_args)
        return path

    return _make
