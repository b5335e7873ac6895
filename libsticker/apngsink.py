import io
import logging
import os
from typing import BinaryIO

from apng import APNG, PNG
from PIL import Image

from .assemble import AssembledAnimation, FrameDescriptor
from .constants import *
from .errors import EncodeError

"""
Write frame descriptors out as an animated PNG.

PIL encodes each frame as a standalone PNG; `apng` stitches them together with
one fcTL per descriptor, so identical neighbouring frames are kept as separate
frames with their own timing and disposal.
"""

log = logging.getLogger("libsticker.apngsink")


def shared_mode(images: list[Image.Image]) -> str:
    "'P' if every image is indexed over the same palette, else 'RGBA'"
    first = images[0]
    if first.mode != "P":
        return "RGBA"
    palette = first.getpalette("RGBA")
    for im in images[1:]:
        if im.mode != "P" or im.getpalette("RGBA") != palette:
            return "RGBA"
    return "P"


def frame_png(image: Image.Image, compress_level: int = COMPRESS_LEVEL) -> PNG:
    buf = io.BytesIO()
    image.save(buf, format="PNG", compress_level=compress_level)
    return PNG.from_bytes(buf.getvalue())


def frame_control(d: FrameDescriptor) -> dict:
    "fcTL fields for one descriptor"
    return dict(
        x_offset=d.x_offset,
        y_offset=d.y_offset,
        delay=d.delay_num,
        delay_den=d.delay_den,
        depose_op=int(d.dispose_op),
        blend_op=int(d.blend_op),
    )


def encode(
    assembled: AssembledAnimation,
    fp: str | os.PathLike | BinaryIO,
    compress_level: int = COMPRESS_LEVEL,
) -> None:
    """
    Write `assembled` to `fp` as an animated PNG, one frame per descriptor.

    PNG stores one palette per file, so a mix of indexed and explicit frames is
    written as RGBA throughout rather than requantizing anything.
    """
    descriptors = assembled.descriptors
    if not descriptors:
        raise EncodeError("no frames to encode")

    images = [d.image for d in descriptors]
    mode = shared_mode(images)
    if mode == "RGBA":
        images = [im if im.mode == "RGBA" else im.convert("RGBA") for im in images]

    log.debug(f"writing {len(images)} {mode} frames, loop={assembled.loop_count}")

    try:
        anim = APNG(num_plays=assembled.loop_count)
        for image, d in zip(images, descriptors):
            anim.append(frame_png(image, compress_level), **frame_control(d))
        data = anim.to_bytes()
    except (OSError, ValueError) as e:
        raise EncodeError(f"could not encode animation: {e}") from e

    if hasattr(fp, "write"):
        fp.write(data)
    else:
        with open(fp, "wb") as f:
            f.write(data)
