import logging
from dataclasses import replace

from PIL import Image

from .constants import *
from .frames import Frame

log = logging.getLogger("libsticker.geometry")

TRANSPARENT = (0, 0, 0, 0)


def make_square(image: Image.Image) -> Image.Image:
    """
    Pad `image` out to a square RGBA canvas.

    The image is anchored at the top left corner and the rest of the canvas is
    fully transparent. Pasting without a mask copies source pixels, alpha
    included, instead of blending them onto the canvas.
    """
    side = max(image.size)
    canvas = Image.new("RGBA", (side, side), TRANSPARENT)
    canvas.paste(image if image.mode == "RGBA" else image.convert("RGBA"), (0, 0))
    return canvas


def normalize_frame(frame: Frame, max_dim: int = DEFAULT_MAX_DIM) -> Frame:
    "square up and size limit one frame, returning a new frame when changed"
    if max_dim < 1:
        raise ValueError(f"maximum dimension must be positive, got {max_dim}")

    w, h = frame.size
    if w == h and w <= max_dim:
        # everything is anchored at the canvas origin
        if frame.origin != (0, 0):
            return replace(frame, origin=(0, 0))
        return frame

    image = Image.fromarray(frame.explicit_pixels())

    if w != h:
        log.debug(f"padding {w}x{h} to {max(w, h)}x{max(w, h)}")
        image = make_square(image)

    if image.width > max_dim:
        log.debug(f"resizing {image.width}x{image.height} to {max_dim}x{max_dim}")
        image = image.resize((max_dim, max_dim), Image.Resampling.LANCZOS)

    return Frame.from_image(image, delay=frame.delay, disposal=frame.disposal)


def normalize(frames: list[Frame], max_dim: int = DEFAULT_MAX_DIM) -> list[Frame]:
    """
    Make every frame square with sides no larger than `max_dim`.

    Square frames within the limit are kept as they are (and stay palette
    indexed); anything padded or resized comes back as explicit RGBA.
    """
    if max_dim < 1:
        raise ValueError(f"maximum dimension must be positive, got {max_dim}")

    out = [normalize_frame(frame, max_dim) for frame in frames]

    for frame in out:
        assert frame.width == frame.height <= max_dim, f"frame is {frame.width}x{frame.height}!"
    return out
