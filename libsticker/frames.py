import enum
import itertools
from dataclasses import dataclass, field

import numpy as np
from PIL import Image

from .constants import *
from .helpers import nearest_index
from .types import Color, ExplicitPixels, IndexedPixels

"""
In-memory animation model shared by every stage of the conversion
"""


class Disposal(enum.Enum):
    "what happens to a frame's area before the next frame is drawn"
    NONE = 0
    BACKGROUND = 1
    PREVIOUS = 2


class Palette:
    """
    Ordered color table addressed by pixel index.

    Entries are RGBA tuples compared exactly, alpha included. Palettes are
    mutable so one can be grown while frames are merged into it; frames that
    share a palette hold a reference to the same object.
    """

    def __init__(self, colors=()) -> None:
        self.colors: list[Color] = [tuple(c) for c in colors]
        assert len(self.colors) <= MAX_COLORS, f"palette has {len(self.colors)} entries!"

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, idx: int) -> Color:
        return self.colors[idx]

    def __iter__(self):
        return iter(self.colors)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self.colors == other.colors

    def __repr__(self) -> str:
        return f"Palette({len(self.colors)} colors)"

    @property
    def is_full(self) -> bool:
        return len(self.colors) >= MAX_COLORS

    def copy(self) -> "Palette":
        return Palette(self.colors)

    def index_of(self, color: Color) -> int | None:
        "exact match search, first matching index or None"
        color = tuple(color)
        for i, entry in enumerate(self.colors):
            if entry == color:
                return i
        return None

    def append(self, color: Color) -> int:
        if self.is_full:
            raise ValueError(f"palette already holds {MAX_COLORS} colors")
        self.colors.append(tuple(color))
        return len(self.colors) - 1

    def nearest(self, color: Color) -> int:
        return nearest_index(self.colors, tuple(color))

    def as_array(self) -> np.ndarray:
        "colors as an (N, 4) uint8 array"
        return np.array(self.colors, dtype=np.uint8).reshape(-1, 4)

    def lookup_table(self) -> np.ndarray:
        "(256, 4) table for resolving any 8 bit index, unused slots transparent"
        lut = np.zeros((MAX_COLORS, 4), dtype=np.uint8)
        lut[: len(self.colors)] = self.as_array()
        return lut

    def flat(self) -> list[int]:
        "flat RGBA list, the layout PIL's putpalette expects"
        return list(itertools.chain(*self.colors))


@dataclass(eq=False)
class Frame:
    """
    One animation frame.

    `pixels` holds palette indices (H x W) while `palette` is set, and RGBA
    values (H x W x 4) once the frame has been promoted to explicit color.
    `delay` is in units of 1/DELAY_DENOMINATOR seconds.
    """

    pixels: IndexedPixels | ExplicitPixels
    palette: Palette | None = None
    origin: tuple[int, int] = (0, 0)
    delay: int = 0
    disposal: Disposal = Disposal.NONE

    def __post_init__(self):
        if self.palette is None:
            assert self.pixels.ndim == 3 and self.pixels.shape[2] == 4, \
                "explicit frames need H x W x 4 pixel data"
        else:
            assert self.pixels.ndim == 2, "indexed frames need H x W pixel data"

    @classmethod
    def from_image(cls, image: Image.Image, **kwargs) -> "Frame":
        "explicit-color frame from any PIL image"
        return cls(np.array(image.convert("RGBA"), dtype=np.uint8), None, **kwargs)

    @property
    def is_indexed(self) -> bool:
        return self.palette is not None

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def colors(self) -> list[Color]:
        "palette entries of an indexed frame"
        assert self.is_indexed, "explicit frames have no palette"
        return self.palette.colors

    def explicit_pixels(self) -> ExplicitPixels:
        "RGBA pixel data, resolving indices through this frame's own palette"
        if not self.is_indexed:
            return self.pixels
        return self.palette.lookup_table()[self.pixels]

    def to_explicit(self) -> None:
        "promote in place to explicit color, dropping the palette"
        if self.is_indexed:
            self.pixels = self.explicit_pixels()
            self.palette = None

    def to_image(self) -> Image.Image:
        if not self.is_indexed:
            return Image.fromarray(np.ascontiguousarray(self.pixels, dtype=np.uint8))

        img = Image.frombytes("P", self.size, np.ascontiguousarray(self.pixels, dtype=np.uint8).tobytes())
        if len(self.palette):
            img.putpalette(self.palette.flat(), "RGBA")
        return img


@dataclass
class Animation:
    frames: list[Frame] = field(default_factory=list)
    loop_count: int = 0

    def __len__(self) -> int:
        return len(self.frames)
