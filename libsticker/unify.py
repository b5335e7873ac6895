import enum
import logging
from dataclasses import dataclass

import numpy as np

from .analysis import exceeds_budget, needs_unification
from .constants import *
from .frames import Frame, Palette

"""
Bring every frame of an animation onto one shared palette, or onto explicit
color when one palette cannot hold them all.
"""

log = logging.getLogger("libsticker.unify")


class Strategy(enum.Enum):
    PROMOTE = "promote"
    UNIFY = "unify"
    PASS_THROUGH = "pass-through"


@dataclass
class UnifyResult:
    strategy: Strategy
    # shared by every frame, None after promotion
    palette: Palette | None = None
    # colors that had to be mapped to their nearest existing entry
    approximated: int = 0


def choose_strategy(frames: list[Frame]) -> Strategy:
    if exceeds_budget(frames):
        return Strategy.PROMOTE
    if needs_unification(frames):
        return Strategy.UNIFY
    return Strategy.PASS_THROUGH


def unify(frames: list[Frame]) -> UnifyResult:
    "run the palette strategy for `frames`, rewriting them in place"
    if not frames:
        return UnifyResult(Strategy.PASS_THROUGH)

    strategy = choose_strategy(frames)
    log.debug(f"palette strategy: {strategy.value}")

    if strategy is Strategy.PROMOTE:
        for frame in frames:
            frame.to_explicit()
        return UnifyResult(strategy)

    if strategy is Strategy.UNIFY:
        builder = PaletteBuilder(frames[0].palette)
        for i, frame in enumerate(frames[1:], start=1):
            frame.pixels = builder.remap(frame, i)
        # only hand out the palette once every frame has been merged in
        for frame in frames:
            frame.palette = builder.palette
        return UnifyResult(strategy, builder.palette, builder.approximated)

    return UnifyResult(strategy, frames[0].palette)


class PaletteBuilder:
    """
    Shared palette under construction.

    Starts from a copy of the first frame's colors and grows as later frames
    are merged in. Colors are added in frame order, so when the palette fills
    up it is the later frames' colors that get approximated.
    """

    def __init__(self, initial: Palette) -> None:
        self.palette = initial.copy()
        self.approximated = 0

    def index_for(self, color) -> int:
        "exact entry, else a new entry, else the nearest entry"
        idx = self.palette.index_of(color)
        if idx is not None:
            return idx

        if not self.palette.is_full:
            return self.palette.append(color)

        idx = self.palette.nearest(color)
        self.approximated += 1
        log.warning(
            f"palette full, approximating {color} with entry {idx} {self.palette[idx]}"
        )
        return idx

    def index_map(self, palette: Palette) -> np.ndarray:
        "lookup table from `palette` indices to builder indices"
        table = np.zeros(MAX_COLORS, dtype=np.uint8)
        for old, color in enumerate(palette):
            table[old] = self.index_for(color)
        return table

    def remap(self, frame: Frame, frame_no: int = 0) -> np.ndarray:
        "new pixel buffer for `frame` pointing into the builder's palette"
        assert frame.is_indexed, "cannot remap an explicit color frame"

        table = self.index_map(frame.palette)
        log.debug(f"frame {frame_no}: builder now has {len(self.palette)} colors")
        return table[frame.pixels]
