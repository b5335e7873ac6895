#!/usr/bin/env python3
"""
gif2sticker: convert a directory of GIFs into square animated PNGs

Usage:
    gif2sticker --in <dir> --out <dir> [--max <uint>] [-v]
    gif2sticker -h | --help

Options:
    --in <dir>      Directory containing .gif files to be converted
    --out <dir>     Directory where the square .png files will be placed
    --max <uint>    Max dimension on either side. Larger animations are resized
                    down to this [default: 1024]
    -v, --verbose   Show per-frame debug output
    -h, --help      Show this screen
"""

import logging
import sys

import docopt

from libsticker.errors import LibstickerError
from libsticker.libsticker import convert_dir

# === STEPS ===
# 1. decode each gif into indexed frames
# 2. merge palettes, or promote to RGBA if they can't share one
# 3. pad to a square and cap the size
# 4. write out as .png (APNG) next to the original name

log = logging.getLogger("gif2sticker")


def main(argv=None) -> int:
    args = docopt.docopt(__doc__, argv=argv)

    logging.basicConfig(level="DEBUG" if args["--verbose"] else "INFO")

    try:
        max_dim = int(args["--max"])
    except ValueError:
        max_dim = 0
    if max_dim < 1:
        log.error(f"--max must be a positive integer, got {args['--max']}")
        return 1

    try:
        convert_dir(args["--in"], args["--out"], max_dim=max_dim)
    except (LibstickerError, OSError) as e:
        log.error(f"conversion failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
