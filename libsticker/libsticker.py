import logging
import os
from pathlib import Path

from . import apngsink, gifsource
from .assemble import AssembledAnimation, assemble
from .constants import *
from .frames import Animation
from .geometry import normalize
from .unify import UnifyResult, unify


class Sticker:
    """
    One GIF converted to a square animated PNG.

    Usage: `Sticker("in.gif").convert().save("out.png")`
    """

    log = logging.getLogger("libsticker")

    def __init__(self, source: str | os.PathLike, max_dim: int = DEFAULT_MAX_DIM) -> None:
        if max_dim < 1:
            raise ValueError(f"maximum dimension must be positive, got {max_dim}")

        self.source = str(source)
        self.max_dim = max_dim

        self.animation: Animation | None = None
        self.unified: UnifyResult | None = None
        self.assembled: AssembledAnimation | None = None

    def convert(self):
        "decode the source and normalize its frames"

        self.log.info(f"converting {self.source}")

        self.animation = gifsource.decode(self.source)
        frames = self.animation.frames

        self.unified = unify(frames)
        if self.unified.approximated:
            self.log.warning(
                f"{self.source}: {self.unified.approximated} colors approximated to fit one palette"
            )

        self.animation.frames = normalize(frames, self.max_dim)
        self.assembled = assemble(self.animation)

        self.log.debug(
            f"{len(frames)} frames, palette strategy {self.unified.strategy.value}, "
            f"side {self.animation.frames[0].width}"
        )
        return self

    def save(self, path: str | os.PathLike, overwrite=False):
        "write the converted animation to `path`"
        assert self.assembled is not None, "cannot save before converting! run `convert()` first"
        self.log.info(f"saving to {path}")

        mode = "wb" if overwrite else "xb"
        with open(path, mode=mode) as pngfile:
            apngsink.encode(self.assembled, pngfile)


def gif_files(directory: str | os.PathLike) -> list[str]:
    "names of the .gif files directly inside `directory`"
    return sorted(
        entry.name
        for entry in os.scandir(directory)
        if not entry.is_dir() and Path(entry.name).suffix == INPUT_SUFFIX
    )


def convert_dir(
    in_dir: str | os.PathLike,
    out_dir: str | os.PathLike,
    max_dim: int = DEFAULT_MAX_DIM,
    overwrite=True,
) -> list[Path]:
    """
    Convert every GIF in `in_dir`, writing `<name>.gif.png` files to `out_dir`.

    Files are handled one at a time and the first failure stops the batch.
    """
    written = []
    for name in gif_files(in_dir):
        out = Path(out_dir) / (name + OUTPUT_SUFFIX)
        Sticker(Path(in_dir) / name, max_dim=max_dim).convert().save(out, overwrite=overwrite)
        written.append(out)

    Sticker.log.info(f"converted {len(written)} files")
    return written
