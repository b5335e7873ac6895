import itertools

from .constants import *
from .types import Color

"""
Small color utilities shared by the palette code
"""


def groups_of(it: iter, n: int) -> iter:
    "split iterable `it` into groups of size `n`"
    it = iter(it)
    return iter(lambda: list(itertools.islice(it, n)), [])


def flat_to_colors(flat: list[int]) -> list[Color]:
    "convert PIL flat RGBA palette data into a list of color tuples"
    return [tuple(rgba) for rgba in groups_of(flat, 4)]


def color_distance(a: Color, b: Color) -> int:
    "sum of squared per-channel differences, alpha included"
    return sum((ca - cb) ** 2 for ca, cb in zip(a, b))


def nearest_index(colors: list[Color], color: Color) -> int:
    """
    Index of the entry in `colors` closest to `color` by `color_distance`.

    Ties resolve to the lowest index so results do not depend on anything but
    palette order.
    """
    assert len(colors) > 0, "cannot search an empty palette!"

    best, best_dist = 0, color_distance(colors[0], color)
    for i, entry in enumerate(colors[1:], start=1):
        dist = color_distance(entry, color)
        if dist < best_dist:
            best, best_dist = i, dist
            if dist == 0:
                break
    return best


class CappedColorSet:
    """
    Set of colors that stops counting once it grows past `cap`.

    Only whether the cap was crossed matters, so `add` reports that and
    callers can bail out early instead of enumerating every color.
    """

    def __init__(self, cap: int = MAX_COLORS) -> None:
        self.cap = cap
        self._colors: set[Color] = set()

    def add(self, color: Color) -> bool:
        "insert `color`, returns True once the set holds more than `cap` colors"
        if not self.exceeded:
            self._colors.add(tuple(color))
        return self.exceeded

    def update(self, colors) -> bool:
        for c in colors:
            if self.add(c):
                break
        return self.exceeded

    @property
    def exceeded(self) -> bool:
        return len(self._colors) > self.cap

    def __len__(self) -> int:
        return len(self._colors)
