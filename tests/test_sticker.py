import pytest
from PIL import Image

import gif2sticker
from libsticker.errors import DecodeError
from libsticker.libsticker import Sticker, convert_dir, gif_files
from libsticker.unify import Strategy


def frames(size=(30, 20)):
    a = Image.new("P", size, 0)
    a.putpalette([0, 0, 0, 255, 0, 0])
    a.paste(1, (0, 0, 10, 10))

    b = Image.new("P", size, 0)
    b.putpalette([0, 0, 0, 0, 0, 255])
    b.paste(1, (10, 5, 25, 15))
    return [a, b]


@pytest.fixture
def in_dir(tmp_path):
    d = tmp_path / "in"
    d.mkdir()
    return d


@pytest.fixture
def out_dir(tmp_path):
    d = tmp_path / "out"
    d.mkdir()
    return d


def test_convert_and_save(make_gif, tmp_path):
    path = make_gif(frames(), duration=[100, 300], loop=0)

    sticker = Sticker(path, max_dim=16).convert()

    assert sticker.unified.strategy is not Strategy.PROMOTE
    assert [d.image.size for d in sticker.assembled.descriptors] == [(16, 16), (16, 16)]
    assert [d.delay_num for d in sticker.assembled.descriptors] == [10, 30]

    out = tmp_path / "out.png"
    sticker.save(out)
    with Image.open(out) as im:
        assert im.size == (16, 16)
        assert im.n_frames == 2
        assert im.info["loop"] == 0


def test_square_input_within_limit_stays_indexed(make_gif, tmp_path):
    sticker = Sticker(make_gif(frames((24, 24))), max_dim=64).convert()

    assert all(f.is_indexed for f in sticker.animation.frames)
    assert sticker.animation.frames[0].palette is sticker.animation.frames[1].palette


def test_save_does_not_clobber(make_gif, tmp_path):
    out = tmp_path / "out.png"
    out.write_bytes(b"")
    sticker = Sticker(make_gif(frames())).convert()

    with pytest.raises(FileExistsError):
        sticker.save(out)
    sticker.save(out, overwrite=True)
    assert out.stat().st_size > 0


def test_save_before_convert(make_gif, tmp_path):
    with pytest.raises(AssertionError):
        Sticker(make_gif(frames())).save(tmp_path / "out.png")


def test_bad_max_dim(make_gif):
    with pytest.raises(ValueError):
        Sticker(make_gif(frames()), max_dim=0)


def test_gif_files(in_dir):
    (in_dir / "b.gif").write_bytes(b"")
    (in_dir / "a.gif").write_bytes(b"")
    (in_dir / "notes.txt").write_bytes(b"")
    (in_dir / "c.GIF").write_bytes(b"")
    (in_dir / "dir.gif").mkdir()

    assert gif_files(in_dir) == ["a.gif", "b.gif"]


def test_convert_dir(make_gif, in_dir, out_dir):
    make_gif(frames(), name="in/one.gif")
    make_gif(frames((12, 40)), name="in/two.gif")

    written = convert_dir(in_dir, out_dir, max_dim=32)

    assert [p.name for p in written] == ["one.gif.png", "two.gif.png"]
    with Image.open(out_dir / "two.gif.png") as im:
        assert im.size == (32, 32)


def test_convert_dir_stops_at_first_error(make_gif, in_dir, out_dir):
    make_gif(frames(), name="in/a.gif")
    (in_dir / "b.gif").write_bytes(b"junk")
    make_gif(frames(), name="in/c.gif")

    with pytest.raises(DecodeError):
        convert_dir(in_dir, out_dir)

    assert (out_dir / "a.gif.png").exists()
    assert not (out_dir / "c.gif.png").exists()


def test_cli_usage_without_dirs():
    with pytest.raises(SystemExit) as exc:
        gif2sticker.main([])
    # docopt exits with the usage text, which means status 1
    assert isinstance(exc.value.code, str)
    assert "Usage" in exc.value.code


def test_cli_converts(make_gif, in_dir, out_dir):
    make_gif(frames(), name="in/one.gif")

    assert gif2sticker.main(["--in", str(in_dir), "--out", str(out_dir), "--max", "8"]) == 0

    with Image.open(out_dir / "one.gif.png") as im:
        assert im.size == (8, 8)


def test_cli_rejects_bad_max(in_dir, out_dir):
    assert gif2sticker.main(["--in", str(in_dir), "--out", str(out_dir), "--max", "big"]) == 1
    assert gif2sticker.main(["--in", str(in_dir), "--out", str(out_dir), "--max", "0"]) == 1


def test_cli_fails_on_missing_dir(tmp_path, out_dir):
    assert gif2sticker.main(["--in", str(tmp_path / "nope"), "--out", str(out_dir)]) == 1


def test_cli_fails_on_bad_gif(in_dir, out_dir):
    (in_dir / "bad.gif").write_bytes(b"junk")
    assert gif2sticker.main(["--in", str(in_dir), "--out", str(out_dir)]) == 1
