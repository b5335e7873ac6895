import numpy as np

from conftest import BLUE, GREEN, RED, TRANSPARENT
from libsticker.analysis import exceeds_budget, needs_unification
from libsticker.frames import Frame
from libsticker.helpers import CappedColorSet


def test_capped_set_stops_at_cap():
    s = CappedColorSet(cap=3)
    assert not s.update([RED, GREEN, BLUE, RED])
    assert len(s) == 3
    assert s.add(TRANSPARENT)
    # nothing more is stored once exceeded
    s.add((1, 2, 3, 4))
    assert len(s) == 4


def test_few_colors_within_budget(make_frame):
    frames = [make_frame(10, 20, [TRANSPARENT, RED]), make_frame(20, 10, [TRANSPARENT, BLUE])]
    assert not exceeds_budget(frames)


def test_exactly_256_colors_within_budget(make_frame):
    a = [(i, 0, 0, 255) for i in range(200)]
    b = [(0, i, 0, 255) for i in range(1, 57)]
    assert not exceeds_budget([make_frame(4, 4, a), make_frame(4, 4, b)])


def test_257_colors_over_budget(make_frame):
    a = [(i, 0, 0, 255) for i in range(200)]
    b = [(0, i, 0, 255) for i in range(1, 58)]
    assert exceeds_budget([make_frame(4, 4, a), make_frame(4, 4, b)])


def test_alpha_makes_colors_distinct(make_frame):
    opaque = [(i, 0, 0, 255) for i in range(200)]
    clear = [(i, 0, 0, 0) for i in range(200)]
    assert exceeds_budget([make_frame(4, 4, opaque), make_frame(4, 4, clear)])


def test_explicit_frame_is_over_budget(make_frame):
    explicit = Frame(np.zeros((4, 4, 4), dtype=np.uint8))
    assert exceeds_budget([make_frame(4, 4, [RED]), explicit])


def test_identical_palettes_need_nothing(make_frame):
    colors = [TRANSPARENT, RED, GREEN]
    frames = [make_frame(5, 5, colors) for _ in range(4)]
    assert not needs_unification(frames)


def test_single_frame_needs_nothing(make_frame):
    assert not needs_unification([make_frame(5, 5, [RED, GREEN])])
    assert not needs_unification([])


def test_length_mismatch_needs_unification(make_frame):
    frames = [make_frame(5, 5, [TRANSPARENT, RED]), make_frame(5, 5, [TRANSPARENT, RED, GREEN])]
    assert needs_unification(frames)


def test_reordered_palette_needs_unification(make_frame):
    frames = [make_frame(5, 5, [RED, GREEN]), make_frame(5, 5, [GREEN, RED])]
    assert needs_unification(frames)


def test_mismatch_in_later_frames_is_found(make_frame):
    frames = [make_frame(5, 5, [RED, GREEN]) for _ in range(3)]
    frames.append(make_frame(5, 5, [RED, BLUE]))
    assert needs_unification(frames)
