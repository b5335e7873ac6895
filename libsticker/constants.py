# indexed color limit (8 bit palette indices)
MAX_COLORS = 256

# largest side of the output canvas, overridable from the command line
DEFAULT_MAX_DIM = 1024

# gif delays are in hundredths of a second
DELAY_DENOMINATOR = 100

# zlib level used for the png IDAT/fdAT streams
COMPRESS_LEVEL = 9

INPUT_SUFFIX = ".gif"
OUTPUT_SUFFIX = ".png"
