import logging

from .constants import *
from .frames import Frame
from .helpers import CappedColorSet

log = logging.getLogger("libsticker.analysis")


def exceeds_budget(frames: list[Frame], budget: int = MAX_COLORS) -> bool:
    """
    True when the frames' palettes hold more than `budget` distinct colors.

    Palettes are scanned in frame order and the scan stops as soon as the
    budget is crossed. A frame that is already explicit color has no palette to
    count, so the whole animation has to stay explicit.
    """
    seen = CappedColorSet(budget)

    for i, frame in enumerate(frames):
        if not frame.is_indexed:
            log.debug(f"frame {i} is explicit color, over budget")
            return True
        if seen.update(frame.colors()):
            log.debug(f"more than {budget} colors by frame {i}")
            return True

    log.debug(f"{len(seen)} distinct colors")
    return False


def needs_unification(frames: list[Frame]) -> bool:
    """
    True unless every frame already uses the same palette entries.

    Every palette is compared against every other one index by index, which
    is O(frames^2 * colors). Inputs are small (<= 256 colors, usually a few
    dozen frames) so this is kept over hashing each palette.
    """
    if len(frames) < 2:
        return False

    length = len(frames[0].colors())
    if any(len(f.colors()) != length for f in frames):
        return True

    for i, frame in enumerate(frames):
        for j, other in enumerate(frames):
            if i == j:
                continue
            for k in range(length):
                if frame.colors()[k] != other.colors()[k]:
                    log.debug(f"frames {i} and {j} differ at index {k}")
                    return True

    return False
